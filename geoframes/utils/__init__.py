"""
Utility functions shared across geoframes.
"""

from .angles import longitude_difference, wrap_angle, wrap_longitude

__all__ = [
    'wrap_angle',
    'wrap_longitude',
    'longitude_difference',
]
