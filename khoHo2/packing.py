"""
Packed generator identities.

Each enhanced state is identified by its secondary-grading index and its
local index inside the bigraded piece:

    code = j_index * base + local_index,   0 <= local_index < base

so either part is recovered with one divmod. The primary grading is not
packed; it is the weight of the cube vertex the state lives on.

Codes are stored in numpy arrays. When the largest possible code fits in a
signed 64-bit word the arrays are int64, otherwise they fall back to Python
integers (object dtype); both behave identically.
"""

from typing import Tuple

import numpy as np

from .errors import CapacityExceededError

UNUSED = -1

_INT64_MAX = np.iinfo(np.int64).max


class GeneratorCodec:
    """
    Lossless packing of (j_index, local_index) pairs.

    Attributes:
        base: Strict upper bound on local indices
        num_gradings: Number of secondary gradings that can be encoded
    """

    def __init__(self, base: int, num_gradings: int):
        if base < 2:
            raise ValueError("Packing base must be at least 2")
        self.base = base
        self.num_gradings = num_gradings
        max_code = base * max(num_gradings, 1) - 1
        self.dtype = np.int64 if max_code <= _INT64_MAX else object

    def pack(self, j_index: int, local_index: int) -> int:
        if not 0 <= j_index < self.num_gradings:
            raise ValueError(f"Grading index {j_index} outside 0..{self.num_gradings - 1}")
        if local_index >= self.base:
            raise CapacityExceededError(
                f"Too many generators: local index {local_index} reaches base {self.base}",
                limit=self.base - 1, requested=local_index + 1)
        if local_index < 0:
            raise ValueError(f"Negative local index {local_index}")
        return j_index * self.base + local_index

    def unpack(self, code: int) -> Tuple[int, int]:
        if code < 0:
            raise ValueError(f"Code {code} does not denote a generator")
        j_index, local_index = divmod(int(code), self.base)
        return j_index, local_index

    def new_array(self, size: int) -> np.ndarray:
        """Array of codes initialised to UNUSED."""
        return np.full(size, UNUSED, dtype=self.dtype)

    def __repr__(self) -> str:
        return f"GeneratorCodec(base={self.base}, gradings={self.num_gradings})"
