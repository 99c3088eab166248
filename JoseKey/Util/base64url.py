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

"""Base64url codec (RFC 7515, Section 2) and big integer conversions.

JWK members carrying numbers hold the unsigned big-endian representation
of the value, base64url-encoded without padding.
"""

__all__ = ['b64url_encode', 'b64url_decode',
           'b64url_to_integer', 'integer_to_b64url']

import base64
import binascii

from Cryptodome.Math.Numbers import Integer


def b64url_encode(data):
    """Encode a byte string to unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text):
    """Decode base64url text, with or without padding, to a byte string.

    Raises:
      ValueError: if the text is not valid base64url.
      TypeError: if ``text`` is neither a string nor a byte string.
    """
    if not isinstance(text, (str, bytes)):
        raise TypeError("base64url data must be text, not %s"
                        % type(text).__name__)
    if isinstance(text, str):
        text = text.encode("ascii")
    text = text.rstrip(b"=")
    try:
        return base64.urlsafe_b64decode(text + b"=" * (-len(text) % 4))
    except binascii.Error as exc:
        raise ValueError("Invalid base64url data: %s" % exc)


def b64url_to_integer(text):
    """Interpret a base64url member as an unsigned big-endian integer.

    Returns:
      an :class:`Integer` object
    """
    return Integer.from_bytes(b64url_decode(text), byteorder='big')


def integer_to_b64url(value):
    """Encode an unsigned integer as a base64url member.

    No leading zero byte is added or stripped beyond the minimal
    big-endian representation; zero becomes a single zero byte.
    """
    return b64url_encode(Integer(int(value)).to_bytes())
