"""Models package - persisted settings."""
from .sort_settings import SortSettings, get_settings

__all__ = [
    'SortSettings',
    'get_settings',
]
