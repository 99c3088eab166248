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

__all__ = ['RSAKey', 'to_public', 'oid']

from collections.abc import Mapping
from types import MappingProxyType

from Cryptodome.IO import PEM
from Cryptodome.Util.asn1 import DerSequence, DerNull

from JoseKey.Util.base64url import b64url_to_integer
from JoseKey.KeyManagement import (_create_subject_public_key_info,
                                   _create_private_key_info)
from JoseKey.KeyManagement.exceptions import InvalidInputKind
from JoseKey.KeyManagement._loaders import load_jwk, load_pem
from JoseKey.KeyManagement._pem import CryptodomePemParser

#: `Object ID`_ for the RSA encryption algorithm. This OID often indicates
#: a generic RSA key, even when such key will be actually used for digital
#: signatures.
#:
#: .. _`Object ID`: http://www.alvestrand.no/objectid/1.2.840.113549.1.1.1.html
oid = "1.2.840.113549.1.1.1"


class RSAKey(object):
    r"""Class defining an RSA key, private or public, in JWK form.

    The key is built once and never changes afterwards. For private keys
    the primes and the CRT parameters are always available: they are
    recovered or derived during construction when the source omits them.

    :ivar modulus: RSA modulus (``n``)
    :vartype modulus: :class:`Integer`

    :ivar modulus_length: Length of the modulus in bytes
    :vartype modulus_length: integer

    :ivar public_exponent: RSA public exponent (``e``)
    :vartype public_exponent: :class:`Integer`

    :ivar private_exponent: RSA private exponent (``d``), ``None`` for public keys
    :vartype private_exponent: :class:`Integer`

    :ivar primes: The factors ``(p, q)`` of the modulus, empty for public keys
    :vartype primes: tuple

    :ivar exponents: The CRT exponents ``(dp, dq)``, empty for public keys
    :vartype exponents: tuple

    :ivar coefficient: CRT coefficient (:math:`q^{-1} \text{mod } p`),
      ``None`` for public keys
    :vartype coefficient: :class:`Integer`
    """

    def __init__(self, data, pem_parser=None, randfunc=None):
        """Build an RSA key.

        Args:
          data:
            A JWK as a mapping of member names to strings, another
            :class:`RSAKey`, or a PEM encoded key (``str`` or ``bytes``).
          pem_parser (:class:`JoseKey.KeyManagement._pem.PemParser`):
            The parser used for PEM input.
            The default relies on :mod:`Cryptodome.PublicKey.RSA`.
          randfunc (callable):
            A function returning random bytes, used when the prime factors
            have to be recovered from the private exponent.
            The default is :func:`Cryptodome.Random.get_random_bytes`.

        Raises:
          InvalidInputKind: if ``data`` is of none of the accepted kinds.
          MissingField, MalformedField, UnsupportedKeyType, UnparsableKey,
          FactorizationFailure:
            if the key material cannot be loaded.
        """

        if isinstance(data, RSAKey):
            values = load_jwk(data.to_array(), randfunc=randfunc)
        elif isinstance(data, Mapping):
            values = load_jwk(data, randfunc=randfunc)
        elif isinstance(data, (str, bytes)):
            if pem_parser is None:
                pem_parser = CryptodomePemParser()
            values = load_jwk(load_pem(data, pem_parser), randfunc=randfunc)
        else:
            raise InvalidInputKind("Unsupported input of type %s"
                                   % type(data).__name__)

        self._values = MappingProxyType(values)

        self._n = b64url_to_integer(values['n'])
        self._e = b64url_to_integer(values['e'])
        self._modulus_length = self._n.size_in_bytes()
        self._d = None
        self._primes = ()
        self._exponents = ()
        self._qi = None

        if 'd' in values:
            self._d = b64url_to_integer(values['d'])
            self._primes = (b64url_to_integer(values['p']),
                            b64url_to_integer(values['q']))
            self._exponents = (b64url_to_integer(values['dp']),
                               b64url_to_integer(values['dq']))
            self._qi = b64url_to_integer(values['qi'])

    @property
    def modulus(self):
        return self._n

    @property
    def modulus_length(self):
        return self._modulus_length

    @property
    def public_exponent(self):
        return self._e

    @property
    def private_exponent(self):
        return self._d

    @property
    def exponent(self):
        """The private exponent for private keys, the public one otherwise"""
        if self._d is not None:
            return self._d
        return self._e

    @property
    def primes(self):
        return self._primes

    @property
    def exponents(self):
        return self._exponents

    @property
    def coefficient(self):
        return self._qi

    def is_private(self):
        """Whether this is an RSA private key"""

        return 'd' in self._values

    def is_public(self):
        return not self.is_private()

    def size_in_bits(self):
        """Size of the RSA modulus in bits"""
        return self._n.size_in_bits()

    def to_array(self):
        """The JWK members of this key.

        Returns:
          a new dictionary mapping member names to strings
        """
        return dict(self._values)

    def public_key(self):
        """A matching RSA public key.

        Returns:
            a new :class:`RSAKey` object
        """
        return to_public(self)

    def to_der(self):
        """Export this RSA key as a DER structure.

        Public keys are encoded as a ``SubjectPublicKeyInfo``, private
        keys as a ``PrivateKeyInfo`` wrapping a PKCS#1 ``RSAPrivateKey``.
        A CRT member missing from the key is encoded as zero.

        Returns:
          bytes: the encoded key
        """

        if self.is_private():
            crt = [self._integer(name) for name in ('dp', 'dq', 'qi')]
            private_key = DerSequence([0,
                                       int(self._n),
                                       int(self._e),
                                       int(self._d),
                                       self._integer('p'),
                                       self._integer('q')
                                       ] + crt)
            return _create_private_key_info(oid, private_key, DerNull())

        return _create_subject_public_key_info(oid,
                                               DerSequence([int(self._n),
                                                            int(self._e)]),
                                               DerNull()
                                               )

    def to_pem(self):
        """Export this RSA key as PEM text.

        The base64 body is wrapped at 64 characters and every line,
        including the last one, ends with a newline.

        Returns:
          str: the encoded key
        """

        if self.is_private():
            key_type = 'RSA PRIVATE KEY'
        else:
            key_type = 'PUBLIC KEY'
        return PEM.encode(self.to_der(), key_type) + "\n"

    def _integer(self, name):
        value = self._values.get(name)
        if value is None:
            return 0
        return int(b64url_to_integer(value))

    def __eq__(self, other):
        if not isinstance(other, RSAKey):
            return NotImplemented
        if self.is_private() != other.is_private():
            return False
        if self._n != other._n or self._e != other._e:
            return False
        if not self.is_private():
            return True
        return self._d == other._d

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __getstate__(self):
        # RSA key is not pickable
        from pickle import PicklingError
        raise PicklingError

    def __repr__(self):
        if self.is_private():
            key_type = "private"
        else:
            key_type = "public"
        return "RSAKey(%s, %d bits)" % (key_type, self.size_in_bits())

    def __str__(self):
        return self.to_pem()


def to_public(key):
    """Strip the private members from an RSA key.

    Args:
      key (:class:`RSAKey`): The key to strip. It is not modified.

    Returns:
      a new :class:`RSAKey` object with only the ``kty``, ``n`` and
      ``e`` members
    """

    values = key.to_array()
    return RSAKey(dict((name, values[name]) for name in ('kty', 'n', 'e')))
