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

"""Key material conversion between JWK, DER and PEM.

===========================    ==========================================
Module                         Description
===========================    ==========================================
`JoseKey.KeyManagement.RSA`    RSA keys (JWK ``kty`` = ``RSA``).
===========================    ==========================================
"""

from Cryptodome.Util.asn1 import (DerSequence, DerBitString, DerOctetString,
                                  DerObjectId)

__all__ = ['RSA', 'exceptions']


def _create_algorithm_identifier(algo_oid, params):
    if params is None:
        return DerSequence([DerObjectId(algo_oid)])
    return DerSequence([DerObjectId(algo_oid), params])


def _create_subject_public_key_info(algo_oid, public_key, params):
    """Wrap an encoded public key into a SubjectPublicKeyInfo structure.

    SubjectPublicKeyInfo  ::=  SEQUENCE  {
          algorithm         AlgorithmIdentifier,
          subjectPublicKey  BIT STRING
    }
    """

    spki = DerSequence([_create_algorithm_identifier(algo_oid, params),
                        DerBitString(public_key)
                        ])
    return spki.encode()


def _create_private_key_info(algo_oid, private_key, params):
    """Wrap an encoded private key into a (version 0) PrivateKeyInfo.

    PrivateKeyInfo ::= SEQUENCE {
          version                   Version,
          privateKeyAlgorithm       AlgorithmIdentifier,
          privateKey                OCTET STRING
    }
    """

    if isinstance(private_key, DerSequence):
        private_key = private_key.encode()
    pki = DerSequence([0,
                       _create_algorithm_identifier(algo_oid, params),
                       DerOctetString(private_key)
                       ])
    return pki.encode()
