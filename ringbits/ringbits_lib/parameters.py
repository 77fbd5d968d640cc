"""Ring parameters for the RLWE scheme."""

import dataclasses

import gmpy2
from ringbits.ringbits_lib import errors

# Field prime of secp160r1, 2^160 - 2^31 - 1.
MODULUS_160_BIT = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF7FFFFFFF

_SMALL_PRIMES = (3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53)


@dataclasses.dataclass(frozen=True)
class RingContext:
  """The ring (Z/qZ)[z] / (z^N + 1) that every RLWE value lives in."""

  # the prime q that coefficients are reduced by
  modulus: int

  # the degree N of the reduction polynomial z^N + 1
  dimension: int

  # coefficients of z^N + 1, starting from lowest degree to highest.
  reduction_polynomial: tuple[int, ...] = dataclasses.field(
      init=False, repr=False
  )

  def __post_init__(self) -> None:
    object.__setattr__(self, 'modulus', int(self.modulus))
    object.__setattr__(
        self,
        'reduction_polynomial',
        (1,) + (0,) * (self.dimension - 1) + (1,),
    )

  @property
  def half_modulus(self) -> int:
    return self.modulus // 2


def is_prime_like(n: int) -> bool:
  """Primality check: trial division by small primes, then gmpy2.

  Args:
    n: The number to test for primality.

  Returns:
    True if n is (probably) prime, False otherwise.
  """
  if n < 2:
    return False
  if n == 2:
    return True
  if n % 2 == 0:
    return False

  for p in _SMALL_PRIMES:
    if n == p:
      return True
    if n % p == 0:
      return False

  return bool(gmpy2.is_prime(n))


def create(modulus: int, dimension: int) -> RingContext:
  """Creates a RingContext after validating its parameters.

  Args:
    modulus: the prime coefficient modulus q.
    dimension: the degree N of the reduction polynomial z^N + 1.

  Returns:
    The ring context.

  Raises:
    InvalidParameterError: if `dimension` is not positive or `modulus` is not
    prime.
  """
  if dimension <= 0:
    raise errors.InvalidParameterError(
        f'Ring dimension must be positive, but was {dimension}.'
    )
  if not is_prime_like(modulus):
    raise errors.InvalidParameterError(f'Modulus {modulus} is not prime.')
  return RingContext(modulus=modulus, dimension=dimension)


def max_fresh_noise(error_bound: int) -> int:
  """The largest coefficient of 2*err + msg for a fresh encoding."""
  return 2 * (error_bound - 1) + 1


def within_noise_budget(ring: RingContext, error_bound: int) -> bool:
  """Whether `error_bound` satisfies 2 * error_bound * N < q / 2."""
  return 2 * error_bound * ring.dimension < ring.modulus // 2


def noise_limit(ring: RingContext) -> int:
  """The largest centered phase coefficient the noise budget admits.

  If `within_noise_budget(ring, error_bound)` holds then
  2 * error_bound <= (q // 2 - 1) / N, so every fresh encoding has
  `max_fresh_noise(error_bound) < (q // 2) // N`. For N = 1 the limit is the
  whole centered range and nothing is ever flagged.

  Args:
    ring: the ring context.

  Returns:
    (q // 2) // N.
  """
  return ring.half_modulus // ring.dimension


def get_context_for_demo() -> RingContext:
  """Returns the small ring used for worked examples: 160-bit prime, N = 4."""
  return create(MODULUS_160_BIT, 4)


def get_context_for_gates() -> RingContext:
  """Returns the ring used for boolean gate evaluation."""
  # Gates only use the constant coefficient, but a wider ring keeps the random
  # mask `a` from being trivially small.
  return create(MODULUS_160_BIT, 16)
