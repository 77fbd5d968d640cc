"""Tests for bool_params."""

import dataclasses

from ringbits.ringbits_bool import bool_params
from ringbits.ringbits_lib import homomorphic
from ringbits.ringbits_lib import parameters
from ringbits.ringbits_lib import rlwe

from absl.testing import absltest


class PublicContextTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    self.rng = bool_params.get_rng_for_gates(3)
    self.ring = parameters.get_context_for_gates()
    self.key = rlwe.gen_key(self.ring, self.rng)

  def test_constants_decode_to_zero_and_one(self):
    pctx = bool_params.make_public_context(self.ring, self.key, 64, self.rng)
    one = homomorphic.generalized_decode(self.ring, pctx.one, self.key)
    zero = homomorphic.generalized_decode(self.ring, pctx.zero, self.key)
    self.assertEqual([1] + [0] * 15, [int(c) for c in one.coefficients])
    self.assertTrue(zero.is_zero())
    self.assertEqual(64, pctx.error_bound)

  def test_public_context_is_immutable(self):
    pctx = bool_params.get_public_context_for_gates(self.key, self.rng)
    with self.assertRaises(dataclasses.FrozenInstanceError):
      pctx.error_bound = 1

  def test_default_gate_parameters_are_within_budget(self):
    pctx = bool_params.get_public_context_for_gates(self.key, self.rng)
    self.assertEqual(bool_params.DEFAULT_ERROR_BOUND, pctx.error_bound)
    self.assertTrue(
        parameters.within_noise_budget(pctx.ring, pctx.error_bound)
    )

  def test_constants_are_not_trivial(self):
    pctx = bool_params.make_public_context(self.ring, self.key, 64, self.rng)
    self.assertFalse(pctx.one[1].is_zero())
    self.assertFalse(pctx.zero[1].is_zero())


if __name__ == '__main__':
  absltest.main()
