"""Homomorphic addition and multiplication of RLWE ciphertexts.

A ciphertext (c_0, ..., c_{k-1}) is read as the polynomial
c_0 + c_1 * s + ... + c_{k-1} * s^{k-1} in the unknown secret key s. Adding
ciphertexts adds these polynomials, and multiplying them multiplies the
polynomials, so the product of a k0-term and a k1-term ciphertext has
k0 + k1 - 1 terms. There is no relinearization: length grows with every
product, and noise roughly squares.
"""

import logging

from ringbits.ringbits_lib import errors
from ringbits.ringbits_lib import parameters
from ringbits.ringbits_lib import poly_utils
from ringbits.ringbits_lib import polynomial_ring
from ringbits.ringbits_lib import rlwe


def _pad(
    ring: parameters.RingContext, ciphertext: rlwe.RlweCiphertext, length: int
) -> tuple[polynomial_ring.RingElement, ...]:
  """Appends zero terms to the high end of `ciphertext` up to `length`."""
  zero = polynomial_ring.zero(ring)
  return ciphertext.terms + (zero,) * (length - len(ciphertext))


def add(
    ring: parameters.RingContext,
    lhs: rlwe.RlweCiphertext,
    rhs: rlwe.RlweCiphertext,
) -> rlwe.RlweCiphertext:
  """Adds two ciphertexts of possibly different lengths.

  Args:
    ring: the ring of both ciphertexts.
    lhs: the first summand.
    rhs: the second summand.

  Returns:
    A ciphertext of length max(len(lhs), len(rhs)) encrypting the XOR of the
    plaintexts.
  """
  rlwe.check_ring(ring, lhs, rhs)
  length = max(len(lhs), len(rhs))
  lhs_terms = _pad(ring, lhs, length)
  rhs_terms = _pad(ring, rhs, length)
  if len(lhs_terms) != len(rhs_terms):
    raise errors.LengthMismatchError(
        f'Padded lengths differ: {len(lhs_terms)} != {len(rhs_terms)}.'
    )
  return rlwe.RlweCiphertext(
      tuple(left + right for left, right in zip(lhs_terms, rhs_terms))
  )


def negate(
    ring: parameters.RingContext, ciphertext: rlwe.RlweCiphertext
) -> rlwe.RlweCiphertext:
  rlwe.check_ring(ring, ciphertext)
  return rlwe.RlweCiphertext(tuple(-term for term in ciphertext))


def subtract(
    ring: parameters.RingContext,
    lhs: rlwe.RlweCiphertext,
    rhs: rlwe.RlweCiphertext,
) -> rlwe.RlweCiphertext:
  """Subtracts `rhs` from `lhs`; on bits this agrees with `add`."""
  return add(ring, lhs, negate(ring, rhs))


def multiply(
    ring: parameters.RingContext,
    lhs: rlwe.RlweCiphertext,
    rhs: rlwe.RlweCiphertext,
) -> rlwe.RlweCiphertext:
  """Multiplies two ciphertexts by convolving their terms.

  Term t of the result is the sum of lhs[i] * rhs[j] over all i + j = t.

  Args:
    ring: the ring of both ciphertexts.
    lhs: the first factor, of length k0.
    rhs: the second factor, of length k1.

  Returns:
    A ciphertext of length k0 + k1 - 1 encrypting the product of the
    plaintexts, reduced modulo z^N + 1 and 2.
  """
  rlwe.check_ring(ring, lhs, rhs)
  terms = [polynomial_ring.zero(ring)] * (len(lhs) + len(rhs) - 1)
  for i, left in enumerate(lhs):
    for j, right in enumerate(rhs):
      terms[i + j] = terms[i + j] + left * right
  logging.debug(
      f'Multiplied ciphertexts of length {len(lhs)} and {len(rhs)} '
      f'into length {len(terms)}'
  )
  return rlwe.RlweCiphertext(tuple(terms))


def phase(
    ring: parameters.RingContext,
    ciphertext: rlwe.RlweCiphertext,
    key: rlwe.RlweSecretKey,
) -> polynomial_ring.RingElement:
  """Evaluates sum_i ciphertext[i] * s^i, before any rounding."""
  rlwe.check_ring(ring, ciphertext, key)
  # Horner's rule, starting from the highest power of s.
  acc = ciphertext[-1]
  for term in reversed(ciphertext.terms[:-1]):
    acc = acc * key.data + term
  return acc


def generalized_decode(
    ring: parameters.RingContext,
    ciphertext: rlwe.RlweCiphertext,
    key: rlwe.RlweSecretKey,
    strict: bool = True,
) -> polynomial_ring.RingElement:
  """Decrypts a ciphertext of any length.

  For two-term ciphertexts this is the same as `rlwe.decode`.

  Args:
    ring: the ring of the ciphertext.
    ciphertext: the ciphertext.
    key: the secret key.
    strict: raise NoiseOverflowError when the phase is too noisy to trust;
      otherwise log a warning and return the rounded bits anyway.

  Returns:
    The plaintext, with coefficients in {0, 1}.
  """
  reduct = phase(ring, ciphertext, key)
  poly_utils.check_noise(ring, reduct, strict=strict)
  return poly_utils.round_to_bit_coefficients(ring, reduct, 2)


def noise_magnitude(
    ring: parameters.RingContext,
    ciphertext: rlwe.RlweCiphertext,
    key: rlwe.RlweSecretKey,
) -> int:
  """The largest centered coefficient of the phase, in absolute value.

  This bounds 2 * noise + plaintext; decoding is reliable while it stays
  below q // 2.
  """
  lifted = poly_utils.centered_lift(ring, phase(ring, ciphertext, key))
  return int(max(abs(c) for c in lifted))
