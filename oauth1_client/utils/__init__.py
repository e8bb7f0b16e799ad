"""
Shared helpers.
"""

from .logger import get_logger, mask

__all__ = ['get_logger', 'mask']
