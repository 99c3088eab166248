# -*- coding: utf-8 -*-
# ===================================================================
#
# Copyright (c) 2016, Legrandin <helderijs@gmail.com>
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
# 1. Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in
#    the documentation and/or other materials provided with the
#    distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
# ===================================================================

"""Errors raised while loading, normalizing or converting key material.

All of them are :class:`ValueError` subclasses, so code written against
the usual ``except ValueError`` idiom for bad key material keeps working.
"""

__all__ = ['KeyConversionError', 'InvalidInputKind', 'MissingField',
           'MalformedField', 'UnsupportedKeyType', 'UnparsableKey',
           'FactorizationFailure']


class KeyConversionError(ValueError):
    """Base class for all key conversion errors"""


class InvalidInputKind(KeyConversionError, TypeError):
    """The key was built from something that is neither a mapping,
    an existing key, nor PEM text."""


class MissingField(KeyConversionError):
    """A required JWK member is absent."""

    def __init__(self, field, message=None):
        self.field = field
        if message is None:
            message = 'The key parameter "%s" is missing.' % field
        super(MissingField, self).__init__(message)


class MalformedField(KeyConversionError):
    """A JWK member holding a number is not base64url text."""

    def __init__(self, field, message=None):
        self.field = field
        if message is None:
            message = 'The key parameter "%s" is not valid base64url.' % field
        super(MalformedField, self).__init__(message)


class UnsupportedKeyType(KeyConversionError):
    """The JWK ``kty`` member is present but is not ``RSA``."""

    def __init__(self, kty):
        self.kty = kty
        super(UnsupportedKeyType, self).__init__(
            "The JWK is not a RSA key (kty=%r)" % (kty,))


class UnparsableKey(KeyConversionError):
    """PEM text is neither a private nor a public RSA key."""


class FactorizationFailure(KeyConversionError):
    """The prime factors of the modulus could not be recovered."""
