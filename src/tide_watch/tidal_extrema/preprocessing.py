"""
Input preparation: sea-level samples to aligned numpy arrays.

Accepts the loosely-typed input contract (ISO-8601 strings, ``datetime``,
``pd.Timestamp`` or ``np.datetime64`` timestamps; ``float`` or ``None``
heights) and produces a ``pd.DatetimeIndex`` plus a float array where absent
heights are NaN.  Timezone policy is the caller's: timestamps are kept in
whatever single zone they arrive in.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np
import pandas as pd

from .models import SeriesPoint

logger = logging.getLogger(__name__)


def coerce_heights(sea_level) -> np.ndarray:
    """
    Convert heights to floats, keeping ``None`` and NaN as missing samples.

    Raises ``ValueError`` for any other value that is not numeric.
    """
    raw = pd.Series(list(sea_level), dtype=object)
    heights = pd.to_numeric(raw, errors='coerce')
    invalid = heights.isna() & raw.notna()
    if invalid.any():
        first = int(np.flatnonzero(invalid.to_numpy())[0])
        raise ValueError(
            f"Sea-level height {raw.iloc[first]!r} at position {first} is "
            f"not numeric; {int(invalid.sum())} invalid value(s) in total."
        )
    return heights.to_numpy(dtype=float)


def prepare_series(
    time,
    sea_level,
    logger: logging.Logger | None = None,
) -> tuple[pd.DatetimeIndex, np.ndarray]:
    """
    Parse timestamps and heights into a ``DatetimeIndex`` and float array.

    Parameters
    ----------
    time : array-like
        Sample timestamps in ascending order.
    sea_level : array-like
        Sea-level heights in metres.  ``None`` and NaN mark missing
        telemetry and are kept as NaN.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    time_index : pd.DatetimeIndex
        Parsed timestamps.
    heights : np.ndarray
        Float heights with NaN for absent samples.

    Raises
    ------
    ValueError
        If *time* and *sea_level* have different lengths, a timestamp is
        missing or cannot be parsed, timestamps are not strictly
        increasing, or a height is neither numeric nor missing.
    """
    _log = logger or logging.getLogger(__name__)

    if not hasattr(time, '__len__'):
        time = list(time)
    if not hasattr(sea_level, '__len__'):
        sea_level = list(sea_level)

    if len(time) != len(sea_level):
        raise ValueError(
            f"time ({len(time)}) and sea_level ({len(sea_level)}) must "
            f"have the same length."
        )

    try:
        time_index = pd.DatetimeIndex(pd.to_datetime(time))
    except (TypeError, ValueError) as ex:
        raise ValueError(f"Could not parse timestamps: {ex}") from ex

    if time_index.hasnans:
        raise ValueError(
            f"Timestamps must not be missing; {int(time_index.isna().sum())} "
            f"of {len(time_index)} are null."
        )
    if not (time_index.is_monotonic_increasing and time_index.is_unique):
        raise ValueError('Timestamps must be strictly increasing.')

    heights = coerce_heights(sea_level)

    n_missing = int(np.sum(np.isnan(heights)))
    if n_missing:
        _log.info('%d of %d sea-level samples are missing.',
                  n_missing, len(heights))
    return time_index, heights


def points_to_arrays(
    points: Iterable[SeriesPoint | tuple],
    logger: logging.Logger | None = None,
) -> tuple[pd.DatetimeIndex, np.ndarray]:
    """
    Split ``(timestamp, height)`` pairs or :class:`SeriesPoint` objects into
    parallel arrays via :func:`prepare_series`.
    """
    times, heights = [], []
    for point in points:
        if isinstance(point, SeriesPoint):
            times.append(point.timestamp)
            heights.append(point.height)
        else:
            timestamp, height = point
            times.append(timestamp)
            heights.append(height)
    return prepare_series(times, heights, logger=logger)


def align_instant(instant, time_index: pd.DatetimeIndex) -> pd.Timestamp:
    """
    Convert *instant* to a ``pd.Timestamp`` comparable with *time_index*.

    An aware instant is converted to the series' zone; a naive instant is
    taken to be in that zone already.  Against a naive series, an aware
    instant is converted to UTC and its zone dropped.
    """
    try:
        ts = pd.Timestamp(instant)
    except (TypeError, ValueError) as ex:
        raise ValueError(
            f"Could not parse reference instant {instant!r}: {ex}"
        ) from ex
    if pd.isna(ts):
        raise ValueError(f"Reference instant {instant!r} is not a time.")

    series_tz = time_index.tz
    if series_tz is not None:
        if ts.tzinfo is None:
            return ts.tz_localize(series_tz)
        return ts.tz_convert(series_tz)
    if ts.tzinfo is not None:
        return ts.tz_convert('UTC').tz_localize(None)
    return ts


def hours_between(later: pd.Timestamp, earlier: pd.Timestamp) -> float:
    """Signed difference ``later - earlier`` in hours."""
    return (later - earlier) / pd.Timedelta(hours=1)
