"""RLWE encoding of bit polynomials under a small secret key."""

import dataclasses
import functools
import logging
from typing import Iterator, Optional, Sequence

from ringbits.ringbits_lib import errors
from ringbits.ringbits_lib import parameters
from ringbits.ringbits_lib import poly_utils
from ringbits.ringbits_lib import polynomial_ring
from ringbits.ringbits_lib import random_source


@dataclasses.dataclass(frozen=True)
class RlweSecretKey:
  """A secret key for the RLWE encoding scheme."""

  # the ring the key polynomial lives in
  ring: parameters.RingContext

  # the key polynomial s, with small coefficients
  data: polynomial_ring.RingElement

  # coefficients were drawn from [0, key_bound), or {-1, 0, 1} if None
  key_bound: Optional[int] = None


@dataclasses.dataclass(frozen=True)
class RlweCiphertext:
  """An RLWE ciphertext.

  A ciphertext is a list of k >= 2 polynomials (c_0, ..., c_{k-1}) encrypting
  the bits of round(sum_i c_i * s^i) mod 2, where s is the secret key. Fresh
  encodings have k = 2; each homomorphic product grows k.
  """

  terms: tuple[polynomial_ring.RingElement, ...]

  def __post_init__(self) -> None:
    terms = tuple(self.terms)
    object.__setattr__(self, 'terms', terms)
    if len(terms) < 2:
      raise errors.InvalidParameterError(
          f'A ciphertext needs at least 2 terms, but had {len(terms)}.'
      )
    ring = terms[0].ring
    if any(term.ring != ring for term in terms):
      raise errors.InvalidParameterError(
          'All ciphertext terms must live in the same ring.'
      )

  @property
  def ring(self) -> parameters.RingContext:
    return self.terms[0].ring

  def __len__(self) -> int:
    return len(self.terms)

  def __iter__(self) -> Iterator[polynomial_ring.RingElement]:
    return iter(self.terms)

  def __getitem__(self, index: int) -> polynomial_ring.RingElement:
    return self.terms[index]

  def __str__(self) -> str:
    # this does not need to be fast because it will only be used in development.
    inner = '\n '.join(str(term) for term in self.terms)
    return f'[\n {inner}\n]'


def check_ring(ring: parameters.RingContext, *values) -> None:
  """Raises InvalidParameterError if any value lives in a different ring."""
  for value in values:
    if value.ring != ring:
      raise errors.InvalidParameterError(
          f'Expected a value over {ring}, but got one over {value.ring}.'
      )


def gen_key(
    ring: parameters.RingContext,
    prg: random_source.RandomSource,
    key_bound: Optional[int] = None,
) -> RlweSecretKey:
  """Generate an RLWE secret key.

  Args:
    ring: the ring to generate the key in.
    prg: the source of randomness.
    key_bound: if set, coefficients are drawn uniformly from [0, key_bound);
      otherwise they are ternary.

  Returns:
    The secret key.
  """
  if key_bound is None:
    sampler = prg.sk_ternary
  else:
    if key_bound <= 0:
      raise errors.InvalidParameterError(
          f'Key bound must be positive, but was {key_bound}.'
      )
    sampler = functools.partial(prg.uniform, key_bound)
  data = poly_utils.random_ring_element(ring, ring.dimension - 1, sampler)
  logging.debug(
      f'Generated secret key of dimension {ring.dimension}, '
      f'key_bound={key_bound}'
  )
  return RlweSecretKey(ring=ring, data=data, key_bound=key_bound)


def encode(
    ring: parameters.RingContext,
    msg: polynomial_ring.RingElement,
    key: RlweSecretKey,
    error_bound: int,
    prg: random_source.RandomSource,
) -> RlweCiphertext:
  """Encrypt a plaintext polynomial as the two-term ciphertext (b, -a).

  Here b = 2 * err + a * s + msg, with `a` uniform over [0, q) and `err`
  uniform over [0, error_bound).

  Args:
    ring: the ring to encode into.
    msg: the plaintext, normally with coefficients in {0, 1}.
    key: the secret key.
    error_bound: the exclusive upper bound on the noise coefficients.
    prg: the source of randomness.

  Returns:
    The ciphertext.
  """
  check_ring(ring, msg, key)
  if error_bound <= 0:
    raise errors.InvalidParameterError(
        f'Error bound must be positive, but was {error_bound}.'
    )
  a = poly_utils.random_ring_element(
      ring, ring.dimension - 1, functools.partial(prg.uniform, ring.modulus)
  )
  err = poly_utils.random_ring_element(
      ring, ring.dimension - 1, functools.partial(prg.uniform, error_bound)
  )
  b = 2 * err + a * key.data + msg
  return RlweCiphertext((b, -a))


def decode(
    ring: parameters.RingContext,
    ciphertext: RlweCiphertext,
    key: RlweSecretKey,
    strict: bool = True,
) -> polynomial_ring.RingElement:
  """Decrypt a two-term RLWE ciphertext.

  Args:
    ring: the ring of the ciphertext.
    ciphertext: a ciphertext (b, a') with exactly two terms.
    key: the secret key.
    strict: raise NoiseOverflowError when the phase is too noisy to trust;
      otherwise log a warning and return the rounded bits anyway.

  Returns:
    The plaintext, with coefficients in {0, 1}.

  Raises:
    LengthMismatchError: if the ciphertext does not have two terms.
    NoiseOverflowError: see `strict`.
  """
  check_ring(ring, ciphertext, key)
  if len(ciphertext) != 2:
    raise errors.LengthMismatchError(
        f'decode expects 2 terms, but got {len(ciphertext)}; use '
        'generalized_decode for longer ciphertexts.'
    )
  b, a_prime = ciphertext
  reduct = b + a_prime * key.data
  poly_utils.check_noise(ring, reduct, strict=strict)
  return poly_utils.round_to_bit_coefficients(ring, reduct, 2)


def trivial_encryption(
    ring: parameters.RingContext, msg: polynomial_ring.RingElement
) -> RlweCiphertext:
  """The noiseless ciphertext (msg, 0), which decrypts to msg under any key."""
  check_ring(ring, msg)
  return RlweCiphertext((msg, polynomial_ring.zero(ring)))


def encode_bits(
    ring: parameters.RingContext,
    bits: Sequence[int],
    key: RlweSecretKey,
    error_bound: int,
    prg: random_source.RandomSource,
) -> RlweCiphertext:
  """Encrypts the polynomial whose coefficient i is bits[i]."""
  if len(bits) > ring.dimension:
    raise errors.LengthMismatchError(
        f'Cannot encode {len(bits)} bits in a ring of dimension '
        f'{ring.dimension}.'
    )
  if any(bit not in (0, 1) for bit in bits):
    raise errors.InvalidParameterError(f'{bits} is not a list of bits.')
  msg = poly_utils.vector_to_ring_element(ring, bits)
  return encode(ring, msg, key, error_bound, prg)


def decode_bits(
    ring: parameters.RingContext,
    ciphertext: RlweCiphertext,
    key: RlweSecretKey,
    strict: bool = True,
) -> list[int]:
  """Decrypts `ciphertext` to a list of exactly N bits."""
  plaintext = decode(ring, ciphertext, key, strict=strict).reduced()
  return [int(c) for c in plaintext.coefficients]
