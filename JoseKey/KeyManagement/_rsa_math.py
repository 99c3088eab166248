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

"""Normalization of RSA private key members.

Both helpers take a raw JWK member mapping and return a new one; the
input mapping is never modified.
"""

__all__ = ['FACTORIZATION_TRIALS', 'find_prime_factors',
           'populate_primes', 'populate_crt']

import logging

from Cryptodome.Math.Numbers import Integer

from JoseKey.Util.base64url import b64url_to_integer, integer_to_b64url
from JoseKey.KeyManagement.exceptions import FactorizationFailure

logger = logging.getLogger(__name__)

#: Maximum number of random witnesses tried by :func:`find_prime_factors`
FACTORIZATION_TRIALS = 100


def find_prime_factors(n, e, d, randfunc=None, trials=None):
    """Recover the two prime factors of an RSA modulus.

    Since ``e*d - 1`` is a multiple of the Carmichael function of ``n``,
    random witnesses quickly reveal a nontrivial square root of unity
    modulo ``n``, which in turn shares a factor with ``n``.
    See 8.2.2(i) in the Handbook of Applied Cryptography.

    Args:
      n (integer): The RSA modulus.
      e (integer): The public exponent.
      d (integer): The private exponent.
      randfunc (callable): A function returning random bytes, used to
        pick the witnesses. The default is :func:`Cryptodome.Random.get_random_bytes`.
      trials (integer): The number of witnesses to try before giving up.
        The default is :data:`FACTORIZATION_TRIALS`.

    Returns:
      a tuple ``(p, q)`` of :class:`Integer` objects with ``p*q == n``,
      in no particular order.

    Raises:
      FactorizationFailure: if ``e*d - 1`` is odd or if no witness worked.
    """

    if trials is None:
        trials = FACTORIZATION_TRIALS

    n = Integer(int(n))
    one = Integer(1)
    n_minus_one = n - 1

    k = Integer(int(e)) * Integer(int(d)) - 1
    if not k.is_even():
        # e*d - 1 is a multiple of lcm(p-1, q-1) and is never odd
        # for consistent key material.
        raise FactorizationFailure("Unable to find prime factors: e*d - 1 is odd")

    # k = r * 2^t, with r odd
    r = k
    t = 0
    while r.is_even():
        r = r // 2
        t += 1

    for attempt in range(1, trials + 1):
        g = Integer.random_range(min_inclusive=1,
                                 max_inclusive=int(n_minus_one),
                                 randfunc=randfunc)
        y = pow(g, r, n)
        if y == one or y == n_minus_one:
            continue

        found = False
        exhausted = False
        for _ in range(1, t - 1):
            x = pow(y, 2, n)
            if x == one:
                found = True
                break
            if x == n_minus_one:
                exhausted = True
                break
            y = x

        if exhausted:
            continue
        if not found:
            found = pow(y, 2, n) == one

        if found:
            p = (y - 1).gcd(n)
            q = n // p
            logger.debug("Prime factors recovered after %d witness(es)", attempt)
            return p, q

    raise FactorizationFailure("Unable to find prime factors after %d attempts"
                               % trials)


def _check_primes(n, p, q):
    if p <= 1 or q <= 1 or p * q != n or p.gcd(q) != 1:
        raise FactorizationFailure("The given primes do not factor the modulus")


def populate_primes(values, randfunc=None):
    """Make sure the primes ``p`` and ``q`` are members of a private JWK.

    If both are missing they are recovered from ``n``, ``e`` and ``d``.
    If only one is given, the other one is the cofactor in ``n``.

    Raises:
      FactorizationFailure: if the given primes do not factor ``n``
        or if they cannot be recovered.
    """

    has_p, has_q = 'p' in values, 'q' in values
    n = b64url_to_integer(values['n'])
    if has_p and has_q:
        _check_primes(n,
                      b64url_to_integer(values['p']),
                      b64url_to_integer(values['q']))
        return values

    result = dict(values)
    if has_p or has_q:
        known = b64url_to_integer(values['p' if has_p else 'q'])
        if known <= 1 or known >= n or n % known != 0:
            raise FactorizationFailure("The given prime does not divide the modulus")
        other = n // known
        _check_primes(n, known, other)
        result['q' if has_p else 'p'] = integer_to_b64url(other)
        logger.debug("Computed missing prime from the modulus")
        return result

    p, q = find_prime_factors(n,
                              b64url_to_integer(values['e']),
                              b64url_to_integer(values['d']),
                              randfunc=randfunc)
    result['p'] = integer_to_b64url(p)
    result['q'] = integer_to_b64url(q)
    return result


def populate_crt(values):
    """Add the Chinese Remainder Theorem members of a private JWK.

    ``dp``, ``dq`` and ``qi`` are computed from ``d``, ``p`` and ``q``
    unless all three are already present, in which case the mapping
    is returned unchanged.
    """

    if all(name in values for name in ('dp', 'dq', 'qi')):
        return values

    d = b64url_to_integer(values['d'])
    p = b64url_to_integer(values['p'])
    q = b64url_to_integer(values['q'])

    result = dict(values)
    result['dp'] = integer_to_b64url(d % (p - 1))  # = (e⁻¹) mod (p-1)
    result['dq'] = integer_to_b64url(d % (q - 1))  # = (e⁻¹) mod (q-1)
    result['qi'] = integer_to_b64url(q.inverse(p))
    logger.debug("Derived CRT parameters dp, dq and qi")
    return result
