"""Conversions, sampling and rounding for ring elements."""

import logging
from typing import Callable, Optional, Sequence

import gmpy2
import numpy as np
from ringbits.ringbits_lib import errors
from ringbits.ringbits_lib import parameters
from ringbits.ringbits_lib import polynomial_ring
from ringbits.ringbits_lib import types

CoefficientSampler = Callable[..., np.ndarray]


def vector_to_ring_element(
    ring: parameters.RingContext, coeffs: Sequence[types.IntLike]
) -> polynomial_ring.RingElement:
  """Embeds a coefficient vector, lowest degree first, into the ring.

  Coefficients are reduced modulo q, but a vector longer than N is kept as is:
  the reduction by z^N + 1 only happens once the element is used in arithmetic.

  Args:
    ring: the ring to embed into.
    coeffs: the coefficients.

  Returns:
    The ring element whose coefficient i is coeffs[i] mod q.
  """
  return polynomial_ring.RingElement(ring, coeffs)


def ring_element_to_vector(elt: polynomial_ring.RingElement) -> list[int]:
  """Returns the coefficients up to the degree of `elt`; [] for zero."""
  return [int(c) for c in elt.coefficients[: elt.degree() + 1]]


def random_ring_element(
    ring: parameters.RingContext,
    degree_bound: int,
    coefficient_sampler: CoefficientSampler,
) -> polynomial_ring.RingElement:
  """Samples a ring element of degree at most `degree_bound`.

  Args:
    ring: the ring to sample from.
    degree_bound: the maximum degree; degree_bound + 1 coefficients are drawn.
    coefficient_sampler: called as `coefficient_sampler(shape=...)`, e.g. a
      `functools.partial` over `RandomSource.uniform`.

  Returns:
    The sampled element.
  """
  coeffs = coefficient_sampler(shape=(degree_bound + 1,))
  return vector_to_ring_element(ring, list(coeffs))


def centered_lift(
    ring: parameters.RingContext, elt: polynomial_ring.RingElement
) -> np.ndarray:
  """Maps each coefficient in [0, q) to its representative in (-q/2, q/2]."""
  bound = ring.half_modulus
  lifted = np.empty(len(elt.coefficients), dtype=object)
  lifted[:] = [c - ring.modulus if c > bound else c for c in elt.coefficients]
  return lifted


def round_to_bit_coefficients(
    ring: parameters.RingContext,
    elt: polynomial_ring.RingElement,
    target_modulus: int = 2,
) -> polynomial_ring.RingElement:
  """Reduces the centered coefficients of `elt` modulo `target_modulus`.

  A coefficient c above q // 2 stands for the negative value c - q, and it is
  that value that is reduced. This recovers the plaintext as long as the noise
  stays below q // 2 in magnitude.

  Args:
    ring: the ring `elt` lives in.
    elt: a noisy ring element, typically the phase of a ciphertext.
    target_modulus: the plaintext modulus, 2 for bits.

  Returns:
    An element with coefficients in [0, target_modulus).
  """
  if target_modulus < 2:
    raise errors.InvalidParameterError(
        f'Target modulus must be at least 2, but was {target_modulus}.'
    )
  rounded = [
      gmpy2.f_mod(c, target_modulus) for c in centered_lift(ring, elt)
  ]
  return polynomial_ring.RingElement(ring, rounded)


def noise_overflow_index(
    ring: parameters.RingContext,
    elt: polynomial_ring.RingElement,
    limit: Optional[int] = None,
) -> Optional[int]:
  """Returns the first coefficient whose centered magnitude exceeds `limit`."""
  if limit is None:
    limit = parameters.noise_limit(ring)
  for i, c in enumerate(centered_lift(ring, elt)):
    if abs(c) > limit:
      return i
  return None


def check_noise(
    ring: parameters.RingContext,
    elt: polynomial_ring.RingElement,
    limit: Optional[int] = None,
    strict: bool = True,
) -> None:
  """Guards decoding against noise that has grown past the ring's budget.

  Args:
    ring: the ring `elt` lives in.
    elt: the phase about to be rounded.
    limit: the largest centered coefficient magnitude that is trusted.
      Defaults to `parameters.noise_limit(ring)`, which every fresh encoding
      within the noise budget stays under.
    strict: raise if True; otherwise only log a warning.

  Raises:
    NoiseOverflowError: if `strict` and some coefficient exceeds `limit`.
  """
  index = noise_overflow_index(ring, elt, limit)
  if index is None:
    return
  message = (
      f'Coefficient {index} of the phase exceeds the noise limit '
      f'(modulus={ring.modulus}, dimension={ring.dimension}); the noise '
      'budget was likely exceeded.'
  )
  if strict:
    raise errors.NoiseOverflowError(message)
  logging.warning(message)
