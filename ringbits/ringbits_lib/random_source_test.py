"""Tests for random_source."""

from ringbits.ringbits_lib import random_source
from absl.testing import absltest
from absl.testing import parameterized


class ShapeGeneratorTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    self.constant_function = lambda: 1

  def test_valid_shape(self):
    test_shape = (10, 10)
    result = random_source._shape_generator(self.constant_function, test_shape)
    self.assertEqual(result.shape, test_shape)

  def test_1d_shape_is_valid(self):
    test_shape = (10,)
    result = random_source._shape_generator(self.constant_function, test_shape)
    self.assertEqual(result.shape, test_shape)

  def test_invalid_shape(self):
    test_shape = (-1, 1)
    with self.assertRaises(ValueError):
      _ = random_source._shape_generator(self.constant_function, test_shape)


class AllRngsTest(absltest.TestCase):

  def test_sk_ternary_is_small(self):
    for rng_class in random_source.ALL_RNGS:
      data = [int(x) for x in rng_class().sk_ternary(shape=(100,))]
      self.assertEmpty(set(data) - set([-1, 0, 1]))

  def test_uniform_stays_in_range(self):
    bound = 2**160
    for rng_class in random_source.ALL_RNGS:
      data = rng_class().uniform(bound, shape=(50,))
      self.assertTrue(all(0 <= x < bound for x in data))

  def test_empty_range_raises(self):
    for rng_class in random_source.ALL_RNGS:
      with self.assertRaises(ValueError):
        rng_class().integers(5, 5, shape=(1,))


class PseudorandomSourceTest(absltest.TestCase):

  def test_same_seed_same_stream(self):
    lhs = random_source.PseudorandomSource(seed=3).uniform(2**64, (20,))
    rhs = random_source.PseudorandomSource(seed=3).uniform(2**64, (20,))
    self.assertEqual(list(lhs), list(rhs))

  def test_different_seed_different_stream(self):
    lhs = random_source.PseudorandomSource(seed=3).uniform(2**64, (20,))
    rhs = random_source.PseudorandomSource(seed=4).uniform(2**64, (20,))
    self.assertNotEqual(list(lhs), list(rhs))

  def test_samples_are_python_ints(self):
    data = random_source.PseudorandomSource(seed=0).integers(-5, 5, (4,))
    self.assertTrue(all(isinstance(x, int) for x in data))


class CycleRngTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    self.test_shape = (10,)
    self.rng = random_source.CycleRng()

  def test_uniform_matches_random_data(self):
    expected = [1, 1, 0, 0, 0, 1, 1, 1, 1, 0]
    self.assertEqual(expected, list(self.rng.uniform(2, self.test_shape)))

  def test_values_wrap_into_range(self):
    rng = random_source.CycleRng(data=(7,))
    self.assertEqual([3, 3], list(rng.integers(2, 4, (2,))))


class ConstantUniformRandomSourceTest(absltest.TestCase):

  def test_uniform_is_constant(self):
    rng = random_source.ConstantUniformRng(const_uniform=7)
    self.assertEqual([7] * 5, list(rng.uniform(100, (5,))))

  def test_constant_wraps_into_range(self):
    rng = random_source.ConstantUniformRng(const_uniform=7)
    self.assertEqual([1, 1], list(rng.uniform(3, (2,))))

  def test_negative_constant_wraps_to_top_of_range(self):
    rng = random_source.ConstantUniformRng(const_uniform=-1)
    self.assertEqual([99, 99], list(rng.uniform(100, (2,))))
    self.assertEqual([-1, -1], list(rng.sk_ternary((2,))))


class DeterministicRandomSourceTest(absltest.TestCase):

  def test_value_stream_is_abstract(self):
    with self.assertRaises(TypeError):
      random_source._DeterministicRandomSource()


@parameterized.parameters(
    ((3,),),
    ((2, 5),),
)
class ZeroRandomSourceTest(parameterized.TestCase):

  def test_all_samples_are_zero(self, shape):
    rng = random_source.ZeroRng()
    self.assertTrue((rng.uniform(1000, shape) == 0).all())
    self.assertTrue((rng.sk_ternary(shape) == 0).all())


if __name__ == '__main__':
  absltest.main()
