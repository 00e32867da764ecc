"""Utilities package - sequence I/O, sample data and cancellation."""
from .sample_data import generate_random_sequence
from .cancellation import CancellationToken, CancellationReason, CancellationRequest
from .sequence_io import (
    parse_sequence,
    format_sequence,
    read_sequence,
    write_sequence,
    default_output_path,
)

__all__ = [
    'generate_random_sequence',
    'CancellationToken',
    'CancellationReason',
    'CancellationRequest',
    'parse_sequence',
    'format_sequence',
    'read_sequence',
    'write_sequence',
    'default_output_path',
]
