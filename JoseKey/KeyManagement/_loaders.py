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

"""Loaders turning an external representation into raw JWK members."""

__all__ = ['load_jwk', 'load_pem']

import logging

from JoseKey.Util.base64url import b64url_decode, integer_to_b64url
from JoseKey.KeyManagement.exceptions import (MissingField, MalformedField,
                                              UnsupportedKeyType, UnparsableKey)
from JoseKey.KeyManagement._pem import PRIVATE_COMPONENTS
from JoseKey.KeyManagement._rsa_math import populate_primes, populate_crt

logger = logging.getLogger(__name__)


def load_jwk(jwk, randfunc=None):
    """Validate a JWK mapping and complete its private members.

    The primes and CRT members of a public JWK (one without ``d``)
    are dropped.

    Returns:
      a new dictionary; members this module does not interpret
      (``kid``, ``use``, ...) are kept verbatim.

    Raises:
      MissingField, UnsupportedKeyType, MalformedField, FactorizationFailure
    """

    if 'kty' not in jwk:
        raise MissingField('kty')
    if jwk['kty'] != 'RSA':
        raise UnsupportedKeyType(jwk['kty'])
    for name in ('n', 'e'):
        if name not in jwk:
            raise MissingField(name)

    values = dict(jwk)
    if 'd' not in values:
        for name in ('p', 'q', 'dp', 'dq', 'qi'):
            values.pop(name, None)

    for name in PRIVATE_COMPONENTS:
        if name in values:
            try:
                b64url_decode(values[name])
            except (ValueError, TypeError):
                raise MalformedField(name)

    if 'd' not in values:
        return values

    logger.debug("Loading RSA private key from JWK members")
    values = populate_primes(values, randfunc=randfunc)
    return populate_crt(values)


def load_pem(data, parser):
    """Parse PEM text into raw JWK members.

    The text is first parsed as a private key and, if that fails,
    as a public key.

    Raises:
      UnparsableKey: if the text is neither.
    """

    if isinstance(data, str):
        data = data.encode('ascii', 'replace')

    try:
        components = parser.parse_private(data)
        logger.debug("PEM data parsed as a private key")
    except ValueError:
        try:
            components = parser.parse_public(data)
            logger.debug("PEM data parsed as a public key")
        except ValueError as exc:
            raise UnparsableKey("Unable to load the key: %s" % exc)

    values = {'kty': 'RSA'}
    for name in PRIVATE_COMPONENTS:
        value = components.get(name)
        if value is not None:
            values[name] = integer_to_b64url(value)
    return values
