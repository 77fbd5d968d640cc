"""A module containing basic types for the RLWE core."""

from typing import Union

import gmpy2

IntLike = Union[int, gmpy2.mpz]
