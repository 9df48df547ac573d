"""
Retrieve hourly sea-level heights from the Open-Meteo Marine API.

The API returns ``sea_level_height_msl`` in metres relative to mean sea
level, one value per hour, with ``null`` where the model has no value.
Times are requested in GMT so that every timestamp is in one zone.
"""

import json
import math
import urllib.parse
import urllib.request
from logging import Logger
from typing import Optional
from urllib.error import HTTPError, URLError

import pandas as pd

from tide_watch.obs_retrieval import utils
from tide_watch.tidal_extrema.preprocessing import coerce_heights

SEA_LEVEL_VARIABLE = 'sea_level_height_msl'
MAX_FORECAST_DAYS = 16


def validate_coordinates(latitude: float, longitude: float) -> None:
    """
    Check that a coordinate pair is usable.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Raises:
        ValueError: If either value is not a finite number or out of range
    """
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError) as ex:
        raise ValueError(
            'Please enter valid latitude and longitude'
        ) from ex
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError('Please enter valid latitude and longitude')
    if lat < -90 or lat > 90 or lon < -180 or lon > 180:
        raise ValueError(
            'Latitude must be between -90 and 90, longitude between '
            '-180 and 180'
        )


def build_marine_url(
    base_url: str,
    latitude: float,
    longitude: float,
    forecast_days: int = 2,
) -> str:
    """Compose the Open-Meteo Marine hourly sea-level request URL."""
    query = urllib.parse.urlencode({
        'latitude': latitude,
        'longitude': longitude,
        'hourly': SEA_LEVEL_VARIABLE,
        'timezone': 'GMT',
        'forecast_days': forecast_days,
    })
    return f'{base_url.rstrip("/")}/v1/marine?{query}'


def parse_open_meteo_hourly(payload: dict) -> Optional[pd.DataFrame]:
    """
    Convert an Open-Meteo Marine JSON payload to a sea-level DataFrame.

    Args:
        payload: Decoded JSON response

    Returns:
        DataFrame with columns:
            - DateTime: Hourly timestamps (GMT, naive)
            - OBS: Sea level in metres, NaN where the API returned null
        Returns None if the payload has no hourly sea-level data.

    Raises:
        ValueError: If the time and sea-level arrays differ in length, or a
            sea-level value is neither numeric nor null
    """
    hourly = payload.get('hourly') or {}
    times = hourly.get('time')
    levels = hourly.get(SEA_LEVEL_VARIABLE)
    if not times or levels is None:
        return None

    if len(times) != len(levels):
        raise ValueError(
            f'Open-Meteo returned {len(times)} times but {len(levels)} '
            f'{SEA_LEVEL_VARIABLE} values.'
        )

    return pd.DataFrame(
        {
            'DateTime': pd.to_datetime(times),
            'OBS': coerce_heights(levels),
        }
    )


def get_HTTP_error(ex: HTTPError) -> str:
    """
    Parse HTTP error to show the Open-Meteo error reason.

    Args:
        ex: HTTPError exception from urllib

    Returns:
        Error reason from the API response, or a default message
    """
    try:
        error_body = ex.read().decode(errors='replace')
    except (OSError, AttributeError):
        return 'No additional error message available.'
    try:
        error_json = json.loads(error_body)
    except json.JSONDecodeError:
        return error_body
    if isinstance(error_json, dict):
        return str(error_json.get('reason', error_body))
    return error_body


def retrieve_open_meteo_sea_level(
    latitude: float,
    longitude: float,
    logger: Logger,
    forecast_days: int = 2,
    config_path: Optional[str] = None,
) -> Optional[pd.DataFrame]:
    """
    Retrieve the hourly sea-level forecast for a location.

    Args:
        latitude: Latitude in degrees (-90 to 90)
        longitude: Longitude in degrees (-180 to 180)
        logger: Logger instance for logging messages
        forecast_days: Number of forecast days (1 to 16)
        config_path: Optional configuration file overriding the default

    Returns:
        DataFrame with DateTime and OBS columns (see
        parse_open_meteo_hourly). Returns None if the request fails or no
        sea-level data is available for the location.

    Raises:
        ValueError: If the coordinates or forecast_days are out of range
    """
    validate_coordinates(latitude, longitude)
    if not 1 <= int(forecast_days) <= MAX_FORECAST_DAYS:
        raise ValueError(
            f'forecast_days must be between 1 and {MAX_FORECAST_DAYS}, '
            f'got {forecast_days}.'
        )

    url_params = utils.Utils(config_path).read_config_section('urls', logger)
    station_url = build_marine_url(
        url_params['open_meteo_marine_base_url'],
        float(latitude), float(longitude), int(forecast_days),
    )

    try:
        with urllib.request.urlopen(station_url) as url:
            payload = json.load(url)
        logger.info(
            'Open-Meteo contacted for sea level at (%.4f, %.4f).',
            float(latitude), float(longitude))
    except HTTPError as ex:
        error_msg = get_HTTP_error(ex)
        logger.error(
            'Open-Meteo sea level retrieval failed for (%.4f, %.4f)! '
            'HTTP %s %s\n%s',
            float(latitude), float(longitude), ex.code, ex.reason, error_msg
        )
        return None
    except URLError as ex:
        logger.error('Open-Meteo sea level retrieval failed!')
        logger.error('Exception caught: %s', ex)
        return None

    obs = parse_open_meteo_hourly(payload)
    if obs is None or obs['OBS'].isna().all():
        logger.warning(
            'No tide data available for (%.4f, %.4f).',
            float(latitude), float(longitude))
        return None

    logger.info('Retrieved %d hourly sea level values (%d missing).',
                len(obs), int(obs['OBS'].isna().sum()))
    return obs
