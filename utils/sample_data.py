"""
Random integer sequences for tests and benchmarks.
"""
import numpy as np
from typing import Optional


def generate_random_sequence(
    min_length: int,
    max_length: int,
    low: int = 0,
    high: int = 2**31 - 1,
    seed: Optional[int] = 42
) -> np.ndarray:
    """
    Generate a random int64 sequence with a random length.

    Args:
        min_length: Minimum length (inclusive)
        max_length: Maximum length (exclusive, like the upper bound of
            Generator.integers); equal bounds give exactly that length
        low: Smallest value (inclusive)
        high: Largest value (exclusive)
        seed: Random seed for reproducibility (None = fresh entropy)

    Returns:
        1-D int64 array
    """
    rng = np.random.default_rng(seed)
    if max_length <= min_length:
        length = min_length
    else:
        length = int(rng.integers(min_length, max_length))
    return rng.integers(low, high, size=length, dtype=np.int64)
