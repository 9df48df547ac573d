"""
Observation Retrieval Subpackage

Provides functionality for:
- Hourly sea-level retrieval from the Open-Meteo Marine API
- Reading sections of the tide_watch configuration file
"""

from tide_watch.obs_retrieval.retrieve_open_meteo import (
    parse_open_meteo_hourly,
    retrieve_open_meteo_sea_level,
    validate_coordinates,
)
from tide_watch.obs_retrieval.utils import Utils

__all__ = [
    'retrieve_open_meteo_sea_level',
    'parse_open_meteo_hourly',
    'validate_coordinates',
    'Utils',
]
