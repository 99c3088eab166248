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

"""Native parsing of PEM encoded RSA keys.

The loaders only need the raw numbers of a key; the actual decoding of
PEM, PKCS#1, PKCS#8 and X.509 structures is delegated to a
:class:`PemParser`.
"""

__all__ = ['PemParser', 'CryptodomePemParser', 'PUBLIC_COMPONENTS',
           'PRIVATE_COMPONENTS']

from Cryptodome.PublicKey import RSA as _NativeRSA

PUBLIC_COMPONENTS = ('n', 'e')
PRIVATE_COMPONENTS = PUBLIC_COMPONENTS + ('d', 'p', 'q', 'dp', 'dq', 'qi')


class PemParser(object):
    """Interface of a native RSA key parser.

    Both methods receive the PEM text as a byte string and return a
    dictionary mapping JWK member names (see :data:`PUBLIC_COMPONENTS`
    and :data:`PRIVATE_COMPONENTS`) to integers. A component the source
    does not carry may be mapped to ``None``.
    They raise :class:`ValueError` when the text is not a key of the
    expected kind.
    """

    def parse_private(self, data):
        """Return the components of a private key, raise ValueError otherwise"""
        raise NotImplementedError

    def parse_public(self, data):
        """Return the ``n`` and ``e`` components, raise ValueError otherwise"""
        raise NotImplementedError


class CryptodomePemParser(PemParser):
    """:class:`PemParser` backed by :func:`Cryptodome.PublicKey.RSA.import_key`.

    Any RSA key the backend understands is accepted: PKCS#1 and PKCS#8
    private keys, PKCS#1 and SubjectPublicKeyInfo public keys, and X.509
    certificates.
    """

    def _import(self, data):
        try:
            return _NativeRSA.import_key(data)
        except (ValueError, IndexError, TypeError) as exc:
            raise ValueError("Unable to load the key: %s" % exc)

    def parse_private(self, data):
        key = self._import(data)
        if not key.has_private():
            raise ValueError("Not a private key")
        return {
            'n': key.n,
            'e': key.e,
            'd': key.d,
            'p': key.p,
            'q': key.q,
            'dp': key.dp,
            'dq': key.dq,
            'qi': key.invq,
        }

    def parse_public(self, data):
        key = self._import(data)
        return {'n': key.n, 'e': key.e}
