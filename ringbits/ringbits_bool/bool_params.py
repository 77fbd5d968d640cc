"""Public parameters shared by the boolean gates."""

import dataclasses
import logging

from ringbits.ringbits_lib import parameters
from ringbits.ringbits_lib import polynomial_ring
from ringbits.ringbits_lib import random_source
from ringbits.ringbits_lib import rlwe

# Noise bound for fresh encodings of gate inputs.
DEFAULT_ERROR_BOUND = 1024


@dataclasses.dataclass(frozen=True)
class PublicContext:
  """Everything a gate needs that does not reveal the secret key."""

  # the ring all ciphertexts live in
  ring: parameters.RingContext

  # a public encryption of the constant polynomial 1
  one: rlwe.RlweCiphertext

  # a public encryption of the constant polynomial 0
  zero: rlwe.RlweCiphertext

  # the noise bound used for every encoding made with this context
  error_bound: int


def make_public_context(
    ring: parameters.RingContext,
    key: rlwe.RlweSecretKey,
    error_bound: int,
    prg: random_source.RandomSource,
) -> PublicContext:
  """Encrypts the constants 0 and 1 under `key` and bundles them."""
  one = rlwe.encode(ring, polynomial_ring.one(ring), key, error_bound, prg)
  zero = rlwe.encode(ring, polynomial_ring.zero(ring), key, error_bound, prg)
  logging.debug(
      f'Built public context over dimension {ring.dimension} with '
      f'error_bound={error_bound}'
  )
  return PublicContext(ring=ring, one=one, zero=zero, error_bound=error_bound)


def get_rng_for_gates(seed: int) -> random_source.PseudorandomSource:
  """Returns a seeded source for reproducible gate evaluation."""
  return random_source.PseudorandomSource(seed=seed)


def get_public_context_for_gates(
    key: rlwe.RlweSecretKey, prg: random_source.RandomSource
) -> PublicContext:
  """Returns the public context over the default gate ring."""
  return make_public_context(
      parameters.get_context_for_gates(), key, DEFAULT_ERROR_BOUND, prg
  )
