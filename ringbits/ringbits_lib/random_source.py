"""Sources of randomness for key generation and encoding.

None of these sources are hardened against side channels. `SystemRandomSource`
draws from the operating system; `PseudorandomSource` is seedable and should be
used for reproducible runs. The remaining sources are deterministic and only
meant for tests.
"""

import abc
import itertools
import random
from typing import Callable, Optional, Sequence

import numpy as np


def _shape_generator(
    generator: Callable[[], int], shape: Sequence[int]
) -> np.ndarray:
  """Fills an object array of the given shape with calls to `generator`."""
  if any(dim < 0 for dim in shape):
    raise ValueError(f'Invalid shape {shape}: dimensions must be >= 0.')
  out = np.empty(tuple(shape), dtype=object)
  for index in np.ndindex(*shape):
    out[index] = generator()
  return out


class RandomSource(abc.ABC):
  """A source of integers drawn uniformly from half-open ranges."""

  @abc.abstractmethod
  def integers(self, low: int, high: int, shape: Sequence[int]) -> np.ndarray:
    """Samples integers uniformly from [low, high)."""

  def uniform(self, bound: int, shape: Sequence[int]) -> np.ndarray:
    """Samples integers uniformly from [0, bound)."""
    return self.integers(0, bound, shape)

  def sk_ternary(self, shape: Sequence[int]) -> np.ndarray:
    """Samples secret key coefficients from {-1, 0, 1}."""
    return self.integers(-1, 2, shape)


class _StdlibRandomSource(RandomSource):
  """Delegates to an instance of `random.Random`."""

  def __init__(self, rng: random.Random) -> None:
    self._rng = rng

  def integers(self, low: int, high: int, shape: Sequence[int]) -> np.ndarray:
    if high <= low:
      raise ValueError(f'Empty range [{low}, {high}).')
    return _shape_generator(lambda: self._rng.randrange(low, high), shape)


class PseudorandomSource(_StdlibRandomSource):
  """A seedable Mersenne Twister source."""

  def __init__(self, seed: Optional[int] = None) -> None:
    super().__init__(random.Random(seed))


class SystemRandomSource(_StdlibRandomSource):
  """A source backed by the operating system's randomness."""

  def __init__(self) -> None:
    super().__init__(random.SystemRandom())


class _DeterministicRandomSource(RandomSource):
  """Replays a fixed value stream, wrapped into each requested range."""

  @abc.abstractmethod
  def _next_value(self) -> int:
    """Returns the next raw value of the stream."""

  def integers(self, low: int, high: int, shape: Sequence[int]) -> np.ndarray:
    if high <= low:
      raise ValueError(f'Empty range [{low}, {high}).')
    return _shape_generator(
        lambda: low + (self._next_value() - low) % (high - low), shape
    )


class ZeroRng(_DeterministicRandomSource):
  """Every sample is 0, so keys, masks and noise all vanish."""

  def _next_value(self) -> int:
    return 0


class ConstantUniformRng(_DeterministicRandomSource):
  """Every sample is `const_uniform`, wrapped into the requested range."""

  def __init__(self, const_uniform: int) -> None:
    self._const_uniform = const_uniform

  def _next_value(self) -> int:
    return self._const_uniform


class CycleRng(_DeterministicRandomSource):
  """Cycles through a fixed sequence of values."""

  def __init__(self, data: Sequence[int] = (1, 1, 0, 0, 0, 1, 1, 1, 1, 0)):
    self._cycle = itertools.cycle(data)

  def _next_value(self) -> int:
    return next(self._cycle)


ALL_RNGS = [
    PseudorandomSource,
    SystemRandomSource,
    ZeroRng,
    CycleRng,
]
