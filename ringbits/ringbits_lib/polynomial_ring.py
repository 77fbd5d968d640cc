"""Arithmetic in the polynomial ring (Z/qZ)[z] / (z^N + 1).

Coefficients are arbitrary-precision `gmpy2.mpz` values held in numpy object
arrays, starting from the lowest degree. Products are reduced negacyclically,
i.e. z^N = -1.
"""

import functools
from typing import Iterable, Union

import gmpy2
import numpy as np
from ringbits.ringbits_lib import errors
from ringbits.ringbits_lib import parameters
from ringbits.ringbits_lib import types


def _reduce(values: Iterable[types.IntLike], modulus: int) -> np.ndarray:
  """Reduces each value into [0, modulus) and packs them in an object array."""
  reduced = [gmpy2.f_mod(gmpy2.mpz(int(v)), modulus) for v in values]
  out = np.empty(len(reduced), dtype=object)
  out[:] = reduced
  return out


def negacyclic_fold(coeffs: np.ndarray, dimension: int) -> np.ndarray:
  """Reduces a coefficient array of any length modulo z^N + 1.

  Coefficient i lands on position i % N, negated whenever (i // N) is odd.

  Args:
    coeffs: the coefficients to fold, lowest degree first.
    dimension: the degree N of the reduction polynomial.

  Returns:
    An object array of length N (not yet reduced modulo q).
  """
  folded = np.empty(dimension, dtype=object)
  folded[:] = [gmpy2.mpz(0)] * dimension
  for i, c in enumerate(coeffs):
    wraps, index = divmod(i, dimension)
    if wraps % 2:
      folded[index] -= c
    else:
      folded[index] += c
  return folded


# For n=3, generates the following
# [[ 1 -1 -1]
#  [ 1  1 -1]
#  [ 1  1  1]]
@functools.lru_cache(maxsize=None)
def _sign_matrix(n: int) -> np.ndarray:
  """Generates a sign matrix with 1s on and below the diagonal and -1 above."""
  up_tri = np.tril(np.ones((n, n), dtype=int), 0)
  low_tri = np.triu(np.ones((n, n), dtype=int), 1) * -1
  return (up_tri + low_tri).astype(object)


@functools.lru_cache(maxsize=None)
def _index_matrix(n: int) -> np.ndarray:
  """Row k, column j holds (k - j) mod n."""
  rows = np.arange(n)[:, None]
  cols = np.arange(n)[None, :]
  return (rows - cols) % n


def negacyclic_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
  """Computes a poly multiplication mod (z^N + 1) where N = len(a).

  The product is the matrix-vector product M b, where M[k, j] = a[k - j] for
  j <= k and -a[N + k - j] otherwise.

  Args:
    a: the left multiplicand, length N.
    b: the right multiplicand, length N.

  Returns:
    The (unreduced modulo q) coefficients of a * b mod z^N + 1.
  """
  if len(a) != len(b):
    raise errors.LengthMismatchError(
        f'Cannot multiply polynomials of length {len(a)} and {len(b)}.'
    )
  n = len(a)
  matrix = a[_index_matrix(n)] * _sign_matrix(n)
  return matrix.dot(b)


class RingElement:
  """An immutable element of (Z/qZ)[z] / (z^N + 1)."""

  def __init__(
      self, ring: parameters.RingContext, coefficients: Iterable[types.IntLike]
  ) -> None:
    coeffs = _reduce(list(coefficients), ring.modulus)
    if not len(coeffs):
      coeffs = _reduce([0], ring.modulus)
    coeffs.flags.writeable = False
    self._ring = ring
    self._coefficients = coeffs

  @property
  def ring(self) -> parameters.RingContext:
    return self._ring

  @property
  def coefficients(self) -> np.ndarray:
    return self._coefficients

  def degree(self) -> int:
    """Index of the highest nonzero coefficient, or -1 for zero."""
    nonzero = np.flatnonzero(self._coefficients != 0)
    return int(nonzero[-1]) if len(nonzero) else -1

  def is_zero(self) -> bool:
    return self.degree() < 0

  def reduced(self) -> 'RingElement':
    """Returns this element with z^N + 1 folded in, as exactly N coefficients."""
    if len(self._coefficients) == self._ring.dimension:
      return self
    return RingElement(
        self._ring, negacyclic_fold(self._coefficients, self._ring.dimension)
    )

  def _check_ring(self, other: 'RingElement') -> None:
    if self._ring != other.ring:
      raise errors.InvalidParameterError(
          'Cannot combine elements of different rings: '
          f'{self._ring} and {other.ring}'
      )

  def __add__(self, other: 'RingElement') -> 'RingElement':
    if not isinstance(other, RingElement):
      return NotImplemented
    self._check_ring(other)
    return RingElement(
        self._ring, self.reduced().coefficients + other.reduced().coefficients
    )

  def __sub__(self, other: 'RingElement') -> 'RingElement':
    if not isinstance(other, RingElement):
      return NotImplemented
    self._check_ring(other)
    return RingElement(
        self._ring, self.reduced().coefficients - other.reduced().coefficients
    )

  def __neg__(self) -> 'RingElement':
    return RingElement(self._ring, -self.reduced().coefficients)

  def __mul__(
      self, other: Union['RingElement', types.IntLike]
  ) -> 'RingElement':
    if isinstance(other, (int, gmpy2.mpz)):
      scalar = gmpy2.mpz(other)
      return RingElement(
          self._ring, [c * scalar for c in self.reduced().coefficients]
      )
    if not isinstance(other, RingElement):
      return NotImplemented
    self._check_ring(other)
    product = negacyclic_mul(
        self.reduced().coefficients, other.reduced().coefficients
    )
    return RingElement(self._ring, product)

  def __rmul__(self, other: types.IntLike) -> 'RingElement':
    if isinstance(other, (int, gmpy2.mpz)):
      return self.__mul__(other)
    return NotImplemented

  def __pow__(self, exponent: int) -> 'RingElement':
    if exponent < 0:
      raise errors.InvalidParameterError(
          f'Exponent must be non-negative, but was {exponent}.'
      )
    result = one(self._ring)
    base = self.reduced()
    while exponent:
      if exponent & 1:
        result = result * base
      base = base * base
      exponent >>= 1
    return result

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, RingElement):
      return NotImplemented
    return self._ring == other.ring and np.array_equal(
        self.reduced().coefficients, other.reduced().coefficients
    )

  __hash__ = None

  def __str__(self) -> str:
    # this does not need to be fast because it will only be used in development.
    s = ' + '.join(
        f'{coeff} z^{power}'
        for (power, coeff) in enumerate(self._coefficients)
        if coeff != 0
    )
    return s if s else '0'

  def __repr__(self) -> str:
    return f'RingElement({[int(c) for c in self._coefficients]})'


def zero(ring: parameters.RingContext) -> RingElement:
  return RingElement(ring, [0] * ring.dimension)


def one(ring: parameters.RingContext) -> RingElement:
  return monomial(ring, 0)


def monomial(ring: parameters.RingContext, degree: int) -> RingElement:
  """Returns z^degree reduced modulo z^N + 1."""
  raw = [0] * degree + [1]
  return RingElement(ring, negacyclic_fold(raw, ring.dimension))
