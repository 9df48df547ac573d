"""
tide_watch: high/low tide detection from hourly sea-level series.

Subpackages
-----------
tidal_extrema
    Extrema detection, sequence repair and next-tide queries.
obs_retrieval
    Hourly sea-level retrieval and configuration file access.
"""

__version__ = '0.1.0'
