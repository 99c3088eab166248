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

import unittest
from unittest import mock

from Cryptodome.PublicKey import RSA as NativeRSA
from Cryptodome.Random import get_random_bytes

from JoseKey.Util.base64url import b64url_to_integer, integer_to_b64url
from JoseKey.KeyManagement import _rsa_math
from JoseKey.KeyManagement._rsa_math import (find_prime_factors,
                                             populate_primes, populate_crt)
from JoseKey.KeyManagement.exceptions import FactorizationFailure

# Textbook key: p=61, q=53, e=17, d=2753
TEXTBOOK = {
    'kty': 'RSA',
    'n': 'DKE',
    'e': 'EQ',
    'd': 'CsE',
}


class TestFindPrimeFactors(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.native = NativeRSA.generate(1024)

    def test_textbook_key(self):
        p, q = find_prime_factors(3233, 17, 2753)
        self.assertEqual(set([int(p), int(q)]), set([61, 53]))

    def test_generated_key(self):
        key = self.native
        p, q = find_prime_factors(key.n, key.e, key.d)
        self.assertEqual(int(p) * int(q), key.n)
        self.assertEqual(set([int(p), int(q)]), set([key.p, key.q]))

    def test_custom_randfunc(self):
        calls = []

        def randfunc(size):
            calls.append(size)
            return get_random_bytes(size)

        p, q = find_prime_factors(3233, 17, 2753, randfunc=randfunc)
        self.assertEqual(int(p) * int(q), 3233)
        self.assertTrue(calls)

    def test_odd_k(self):
        """Test that e*d - 1 being odd is rejected upfront"""
        with self.assertRaises(FactorizationFailure):
            find_prime_factors(3233, 17, 2754)

    def test_no_nontrivial_root(self):
        """Test that a prime modulus exhausts all witnesses"""
        # 7*43 - 1 = 300 is even, but 61 has no nontrivial square root of 1
        with self.assertRaises(FactorizationFailure):
            find_prime_factors(61, 7, 43)

    def test_trial_bound(self):
        with mock.patch.object(_rsa_math.Integer, 'random_range',
                               return_value=_rsa_math.Integer(1)) as random_range:
            with self.assertRaises(FactorizationFailure):
                find_prime_factors(3233, 17, 2753)
        self.assertEqual(random_range.call_count, _rsa_math.FACTORIZATION_TRIALS)

    def test_explicit_trials(self):
        with mock.patch.object(_rsa_math.Integer, 'random_range',
                               return_value=_rsa_math.Integer(1)) as random_range:
            with self.assertRaises(FactorizationFailure):
                find_prime_factors(3233, 17, 2753, trials=5)
        self.assertEqual(random_range.call_count, 5)

    def test_minus_one_moves_to_next_witness(self):
        """Test that reaching n-1 while squaring discards the witness"""
        # 2 is a non-residue modulo 61 and 53, so 2^(2r) = -1 mod 3233.
        # 3 is a residue modulo 61 only, and reveals the factor 61.
        witnesses = [_rsa_math.Integer(2), _rsa_math.Integer(3)]
        with mock.patch.object(_rsa_math.Integer, 'random_range',
                               side_effect=witnesses) as random_range:
            p, q = find_prime_factors(3233, 17, 2753)
        self.assertEqual(random_range.call_count, 2)
        self.assertEqual((int(p), int(q)), (61, 53))

    def test_minus_one_only(self):
        with mock.patch.object(_rsa_math.Integer, 'random_range',
                               return_value=_rsa_math.Integer(2)):
            with self.assertRaises(FactorizationFailure):
                find_prime_factors(3233, 17, 2753, trials=3)


class TestPopulatePrimes(unittest.TestCase):
    def test_recovers_both(self):
        values = populate_primes(TEXTBOOK)
        p = int(b64url_to_integer(values['p']))
        q = int(b64url_to_integer(values['q']))
        self.assertEqual(set([p, q]), set([61, 53]))
        self.assertNotIn('p', TEXTBOOK)

    def test_complete_is_noop(self):
        values = dict(TEXTBOOK, p='PQ', q='NQ')
        self.assertIs(populate_primes(values), values)

    def test_cofactor(self):
        values = populate_primes(dict(TEXTBOOK, p='PQ'))
        self.assertEqual(values['q'], 'NQ')
        values = populate_primes(dict(TEXTBOOK, q='NQ'))
        self.assertEqual(values['p'], 'PQ')

    def test_cofactor_not_dividing(self):
        with self.assertRaises(FactorizationFailure):
            populate_primes(dict(TEXTBOOK, p=integer_to_b64url(59)))

    def test_primes_not_factoring_modulus(self):
        for p, q in ((1, 3233), (3233, 1), (61, 59), (2, 1616)):
            values = dict(TEXTBOOK, p=integer_to_b64url(p),
                          q=integer_to_b64url(q))
            with self.assertRaises(FactorizationFailure):
                populate_primes(values)

    def test_primes_sharing_a_factor(self):
        # 3 * 3 = 9, but 3 has no inverse modulo 3
        values = {'kty': 'RSA', 'n': integer_to_b64url(9), 'e': 'EQ',
                  'd': 'CsE', 'p': integer_to_b64url(3)}
        with self.assertRaises(FactorizationFailure):
            populate_primes(values)
        with self.assertRaises(FactorizationFailure):
            populate_primes(dict(values, q=integer_to_b64url(3)))


class TestPopulateCRT(unittest.TestCase):
    def test_textbook_values(self):
        values = populate_crt(dict(TEXTBOOK, p='PQ', q='NQ'))
        self.assertEqual(b64url_to_integer(values['dp']), 53)
        self.assertEqual(b64url_to_integer(values['dq']), 49)
        self.assertEqual(b64url_to_integer(values['qi']), 38)
        for name in ('n', 'e', 'd', 'p', 'q'):
            self.assertEqual(values[name], dict(TEXTBOOK, p='PQ', q='NQ')[name])

    def test_relations(self):
        native = NativeRSA.generate(1024)
        values = {
            'kty': 'RSA',
            'n': integer_to_b64url(native.n),
            'e': integer_to_b64url(native.e),
            'd': integer_to_b64url(native.d),
            'p': integer_to_b64url(native.p),
            'q': integer_to_b64url(native.q),
        }
        values = populate_crt(values)
        d, p, q = native.d, native.p, native.q
        self.assertEqual(b64url_to_integer(values['dp']), d % (p - 1))
        self.assertEqual(b64url_to_integer(values['dq']), d % (q - 1))
        qi = int(b64url_to_integer(values['qi']))
        self.assertEqual(qi * q % p, 1)

    def test_idempotent(self):
        values = populate_crt(dict(TEXTBOOK, p='PQ', q='NQ'))
        self.assertIs(populate_crt(values), values)

    def test_present_values_untouched(self):
        """Test that a complete set of CRT members is never recomputed"""
        values = dict(TEXTBOOK, p='PQ', q='NQ', dp='AQ', dq='AQ', qi='AQ')
        self.assertEqual(populate_crt(values), values)

    def test_partial_values_recomputed(self):
        values = populate_crt(dict(TEXTBOOK, p='PQ', q='NQ', dp='AQ'))
        self.assertEqual(values['dp'], 'NQ')


if __name__ == '__main__':
    unittest.main()
