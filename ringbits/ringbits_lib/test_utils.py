"""Test utilities."""

from typing import Sequence

from hypothesis import strategies
from ringbits.ringbits_lib import parameters

# A small NTT-friendly prime, for tests that inspect coefficients by hand.
SMALL_PRIME = 12289

DEMO_RING = parameters.get_context_for_demo()
GATE_RING = parameters.get_context_for_gates()
SMALL_RING = parameters.create(SMALL_PRIME, 4)

DEMO_KEY_BOUND = 1024
DEMO_ERROR_BOUND = 1024


def bit_lists(dimension: int) -> strategies.SearchStrategy:
  """Lists of exactly `dimension` bits."""
  return strategies.lists(
      strategies.integers(min_value=0, max_value=1),
      min_size=dimension,
      max_size=dimension,
  )


def pad_bits(bits: Sequence[int], dimension: int) -> list[int]:
  return list(bits) + [0] * (dimension - len(bits))


def plain_add_mod2(lhs: Sequence[int], rhs: Sequence[int]) -> list[int]:
  return [(x + y) % 2 for x, y in zip(lhs, rhs)]


def plain_mul_mod2(lhs: Sequence[int], rhs: Sequence[int]) -> list[int]:
  """Multiplies bit polynomials modulo z^N + 1 and 2, N = len(lhs)."""
  # The sign flip from z^N = -1 vanishes modulo 2.
  n = len(lhs)
  out = [0] * n
  for i, x in enumerate(lhs):
    for j, y in enumerate(rhs):
      out[(i + j) % n] += x * y
  return [c % 2 for c in out]


def schoolbook_negacyclic(
    lhs: Sequence[int], rhs: Sequence[int], modulus: int
) -> list[int]:
  """Reference product modulo z^N + 1 and `modulus`, N = len(lhs)."""
  n = len(lhs)
  out = [0] * n
  for i, x in enumerate(lhs):
    for j, y in enumerate(rhs):
      if i + j < n:
        out[i + j] += x * y
      else:
        out[i + j - n] -= x * y
  return [c % modulus for c in out]


def largest_error_bound(ring: parameters.RingContext) -> int:
  """The largest error bound for which `within_noise_budget` holds."""
  return (ring.half_modulus - 1) // (2 * ring.dimension)
