"""
Provider presets.
"""

from .twitter import TWITTER_ENDPOINTS, TwitterOAuth

__all__ = [
    'TWITTER_ENDPOINTS',
    'TwitterOAuth',
]
