"""
Extremum candidates: local maxima/minima with sub-sample refinement.

Each interior sample is tested against its two neighbours; a strict peak is
a high-tide candidate and a strict trough a low-tide candidate.  The true
extremum usually lies between samples, so each candidate is refined by
fitting a parabola through the three samples::

    offset = (y1 - y3) / (2 * (y1 - 2*y2 + y3))
    height = y2 - 0.25 * (y1 - y3) * offset

where *offset* is a fraction of the sample spacing relative to the centre
sample.
"""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from scipy.signal import argrelextrema

from .models import TideCandidate, TideKind

logger = logging.getLogger(__name__)


def find_raw_extrema(heights: np.ndarray) -> list[tuple[int, TideKind]]:
    """
    Locate strict 3-sample local maxima and minima.

    Parameters
    ----------
    heights : np.ndarray
        Sea-level heights; NaN marks a missing sample.

    Returns
    -------
    list of (int, TideKind)
        Series index and kind of every candidate, in series order.  Any
        triple containing a NaN yields no candidate, and the first and last
        samples never qualify.
    """
    heights = np.asarray(heights, dtype=float)
    if len(heights) < 3:
        return []

    # Comparisons against NaN are False, so gapped triples drop out here
    high_idx = argrelextrema(heights, np.greater, order=1)[0]
    low_idx = argrelextrema(heights, np.less, order=1)[0]

    found = [(int(i), TideKind.HIGH) for i in high_idx]
    found += [(int(i), TideKind.LOW) for i in low_idx]
    found.sort(key=lambda item: item[0])
    return found


def interpolate_extremum(
    y1: float, y2: float, y3: float,
) -> tuple[float, float, float]:
    """
    Parabolic vertex of three equally-spaced samples.

    Parameters
    ----------
    y1, y2, y3 : float
        Previous, centre and next sample heights.

    Returns
    -------
    offset : float
        Vertex position relative to the centre sample, as a fraction of the
        sample spacing.  Not clamped; 0 when the curvature term is zero.
    height : float
        Interpolated height at the vertex.
    prominence : float
        ``|y2 - (y1 + y3) / 2|`` from the raw samples.
    """
    divisor = 2.0 * (y1 - 2.0 * y2 + y3)
    offset = (y1 - y3) / divisor if divisor != 0 else 0.0
    height = y2 - 0.25 * (y1 - y3) * offset
    prominence = abs(y2 - (y1 + y3) / 2.0)
    return float(offset), float(height), float(prominence)


def refine_candidate(
    time: pd.DatetimeIndex,
    heights: np.ndarray,
    index: int,
    kind: TideKind,
) -> TideCandidate:
    """Build the refined :class:`TideCandidate` for the sample at *index*."""
    y1, y2, y3 = heights[index - 1], heights[index], heights[index + 1]
    offset, height, prominence = interpolate_extremum(y1, y2, y3)

    # Hourly input gives exactly one hour here
    spacing = (time[index + 1] - time[index - 1]) / 2
    return TideCandidate(
        kind=kind,
        time=time[index] + spacing * offset,
        height=height,
        prominence=prominence,
        source_index=index,
    )


def find_tide_candidates(
    time: pd.DatetimeIndex,
    heights: np.ndarray,
    logger: logging.Logger | None = None,
) -> list[TideCandidate]:
    """
    Find and refine all high/low tide candidates in a sea-level series.

    Parameters
    ----------
    time : pd.DatetimeIndex
        Sample timestamps, ascending.
    heights : np.ndarray
        Sea-level heights with NaN for missing samples.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    list of TideCandidate
        Refined candidates in series order.  Empty when fewer than three
        samples are available or no extremum exists.

    Raises
    ------
    ValueError
        If *time* and *heights* have different lengths.
    """
    _log = logger or logging.getLogger(__name__)

    heights = np.asarray(heights, dtype=float)
    if len(time) != len(heights):
        raise ValueError(
            f"time ({len(time)}) and heights ({len(heights)}) must have the "
            f"same length."
        )

    candidates = [
        refine_candidate(time, heights, index, kind)
        for index, kind in find_raw_extrema(heights)
    ]
    n_high = sum(1 for c in candidates if c.kind is TideKind.HIGH)
    _log.info(
        'Extremum candidates: %d high, %d low from %d samples.',
        n_high, len(candidates) - n_high, len(heights),
    )
    return candidates
