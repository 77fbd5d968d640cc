"""Error types raised by the RLWE core."""


class RingbitsError(Exception):
  """Base class for errors raised by ringbits."""


class InvalidParameterError(RingbitsError, ValueError):
  """A ring or scheme parameter is out of range."""


class LengthMismatchError(RingbitsError, ValueError):
  """Ciphertexts or coefficient vectors have incompatible lengths."""


class NoiseOverflowError(RingbitsError, ArithmeticError):
  """Decoding found a coefficient too close to the rounding boundary.

  The accumulated noise has likely exceeded the budget of the ring, so the
  decoded bits cannot be trusted.
  """
