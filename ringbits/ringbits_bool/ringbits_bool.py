"""API for boolean gates over RLWE ciphertexts.

A boolean is encoded as the constant polynomial 0 or 1. XOR is homomorphic
addition and AND is homomorphic multiplication; everything else is built from
those and the public encryption of 1. Gates that multiply grow the ciphertext
by one term per AND, since nothing relinearizes.
"""

from typing import Optional

from ringbits.ringbits_bool import bool_params
from ringbits.ringbits_lib import homomorphic
from ringbits.ringbits_lib import parameters
from ringbits.ringbits_lib import polynomial_ring
from ringbits.ringbits_lib import random_source
from ringbits.ringbits_lib import rlwe

PublicContext = bool_params.PublicContext


class ClientKeySet:
  """The secret key and the public context derived from it."""

  @property
  def sk(self) -> rlwe.RlweSecretKey:
    return self._sk

  @property
  def public_context(self) -> PublicContext:
    return self._public_context

  def __init__(
      self,
      ring: parameters.RingContext,
      prg: random_source.RandomSource,
      error_bound: int = bool_params.DEFAULT_ERROR_BOUND,
      key_bound: Optional[int] = None,
  ) -> None:
    self._sk = rlwe.gen_key(ring, prg, key_bound=key_bound)
    self._public_context = bool_params.make_public_context(
        ring, self._sk, error_bound, prg
    )


def encrypt(
    value: bool,
    client_key_set: ClientKeySet,
    prg: random_source.RandomSource,
) -> rlwe.RlweCiphertext:
  """Encrypts a boolean as the constant polynomial 0 or 1."""
  pctx = client_key_set.public_context
  ring = pctx.ring
  msg = polynomial_ring.one(ring) if value else polynomial_ring.zero(ring)
  return rlwe.encode(ring, msg, client_key_set.sk, pctx.error_bound, prg)


def decrypt(
    ciphertext: rlwe.RlweCiphertext, client_key_set: ClientKeySet
) -> bool:
  """Decrypts a ciphertext of any length to the boolean it encrypts."""
  ring = client_key_set.public_context.ring
  plaintext = homomorphic.generalized_decode(
      ring, ciphertext, client_key_set.sk
  ).reduced()
  return plaintext.coefficients[0] != 0


def constant(value: bool, pctx: PublicContext) -> rlwe.RlweCiphertext:
  return pctx.one if value else pctx.zero


def xor_(
    lhs: rlwe.RlweCiphertext, rhs: rlwe.RlweCiphertext, pctx: PublicContext
) -> rlwe.RlweCiphertext:
  """Computes XOR of lhs and rhs."""
  return homomorphic.add(pctx.ring, lhs, rhs)


def not_(
    ciphertext: rlwe.RlweCiphertext, pctx: PublicContext
) -> rlwe.RlweCiphertext:
  """Computes NOT of the input ciphertext."""
  return xor_(ciphertext, pctx.one, pctx)


def and_(
    lhs: rlwe.RlweCiphertext, rhs: rlwe.RlweCiphertext, pctx: PublicContext
) -> rlwe.RlweCiphertext:
  """Computes AND of lhs and rhs."""
  return homomorphic.multiply(pctx.ring, lhs, rhs)


def or_(
    lhs: rlwe.RlweCiphertext, rhs: rlwe.RlweCiphertext, pctx: PublicContext
) -> rlwe.RlweCiphertext:
  """Computes OR of lhs and rhs as NOT(AND(NOT lhs, NOT rhs))."""
  return not_(and_(not_(lhs, pctx), not_(rhs, pctx), pctx), pctx)


def nand_(
    lhs: rlwe.RlweCiphertext, rhs: rlwe.RlweCiphertext, pctx: PublicContext
) -> rlwe.RlweCiphertext:
  """Computes NAND of lhs and rhs."""
  return not_(and_(lhs, rhs, pctx), pctx)


def nor_(
    lhs: rlwe.RlweCiphertext, rhs: rlwe.RlweCiphertext, pctx: PublicContext
) -> rlwe.RlweCiphertext:
  """Computes NOR of lhs and rhs."""
  return and_(not_(lhs, pctx), not_(rhs, pctx), pctx)


def xnor_(
    lhs: rlwe.RlweCiphertext, rhs: rlwe.RlweCiphertext, pctx: PublicContext
) -> rlwe.RlweCiphertext:
  """Computes XNOR of lhs and rhs."""
  return not_(xor_(lhs, rhs, pctx), pctx)
