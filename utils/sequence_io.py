"""
Reading and writing integer sequences as comma-separated text.

Input files hold base-10 integers separated by commas, for example
``5,3,-2,8``. Whitespace and line breaks around values are ignored.
"""
import re
import logging
from pathlib import Path
from typing import Union, Sequence

import numpy as np

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_sequence(text: str) -> np.ndarray:
    """
    Parse comma-separated integers into an int64 array.

    Args:
        text: Delimited text; empty or whitespace-only text gives an empty array

    Returns:
        1-D int64 array, writable, in input order

    Raises:
        ValueError: If a value is not a base-10 integer or does not fit in int64
    """
    stripped = text.strip()
    if not stripped:
        return np.empty(0, dtype=np.int64)

    values = []
    for position, token in enumerate(stripped.split(',')):
        token = token.strip()
        if not _INTEGER.fullmatch(token):
            raise ValueError(f"Invalid integer {token!r} at position {position}")
        values.append(int(token))

    try:
        return np.array(values, dtype=np.int64)
    except OverflowError as e:
        raise ValueError(f"Value out of int64 range: {e}") from e


def format_sequence(seq: Sequence[int]) -> str:
    """Join integers with commas, no spaces."""
    return ','.join(str(int(v)) for v in seq)


def read_sequence(path: PathLike) -> np.ndarray:
    """
    Read a comma-separated integer file.

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the content cannot be parsed
    """
    path = Path(path)
    text = path.read_text(encoding='utf-8')
    seq = parse_sequence(text)
    logger.debug(f"Read {len(seq)} integers from {path}")
    return seq


def write_sequence(path: PathLike, seq: Sequence[int]) -> Path:
    """Write the sequence as one comma-separated line, returning the path."""
    path = Path(path)
    path.write_text(format_sequence(seq) + '\n', encoding='utf-8')
    logger.debug(f"Wrote {len(seq)} integers to {path}")
    return path


def default_output_path(input_path: PathLike) -> Path:
    """Output path next to the input: <dir>/<stem>_result.txt."""
    input_path = Path(input_path)
    return input_path.with_name(f"{input_path.stem}_result.txt")
