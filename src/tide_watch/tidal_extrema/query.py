"""
Tide state relative to a reference instant: current trend and height, the
most recent tide, and the next high and low tides.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd

from .models import TideEvent, TideKind, TideState, TideTrend

logger = logging.getLogger(__name__)


def current_sample_index(time: pd.DatetimeIndex, now: pd.Timestamp) -> int:
    """Largest index whose timestamp is at or before *now*, else 0."""
    current = 0
    for i, timestamp in enumerate(time):
        if timestamp > now:
            break
        current = i
    return current


def next_event(
    events: Sequence[TideEvent], kind: TideKind, now: pd.Timestamp,
) -> TideEvent | None:
    """First event of *kind* strictly after *now*."""
    return next(
        (e for e in events if e.kind is kind and e.time > now), None
    )


def last_event(
    events: Sequence[TideEvent], now: pd.Timestamp,
) -> TideEvent | None:
    """Last event at or before *now*."""
    past = [e for e in events if e.time <= now]
    return past[-1] if past else None


def query_tide_state(
    events: Sequence[TideEvent],
    time: pd.DatetimeIndex,
    heights: np.ndarray,
    now: pd.Timestamp,
    logger: logging.Logger | None = None,
) -> TideState:
    """
    Derive the tide state at *now*.

    Parameters
    ----------
    events : sequence of TideEvent
        Validated tide sequence in time order.
    time : pd.DatetimeIndex
        Timestamps of the raw series.
    heights : np.ndarray
        Raw series heights, NaN for missing samples.
    now : pd.Timestamp
        Reference instant, in the same zone as *time*.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    TideState
        ``trend`` is rising only when the following sample is strictly
        higher than the current one; at the last sample, or next to a
        missing sample, it is falling.  ``current_height`` is ``None`` when
        the current sample is missing.  Event fields are ``None`` when no
        matching event exists.  An empty series gives
        :meth:`TideState.empty`.
    """
    _log = logger or logging.getLogger(__name__)

    if len(time) == 0:
        return TideState.empty(now)

    idx = current_sample_index(time, now)
    current = float(heights[idx])
    following = float(heights[idx + 1]) if idx + 1 < len(heights) else current
    trend = TideTrend.RISING if following > current else TideTrend.FALLING

    state = TideState(
        now=now,
        current_index=idx,
        current_height=None if np.isnan(current) else current,
        trend=trend,
        last_tide=last_event(events, now),
        next_high=next_event(events, TideKind.HIGH, now),
        next_low=next_event(events, TideKind.LOW, now),
    )
    _log.info(
        'Tide state at %s: %s, next high %s, next low %s.',
        now.isoformat(), trend.value,
        state.next_high.time.isoformat() if state.next_high else 'none',
        state.next_low.time.isoformat() if state.next_low else 'none',
    )
    return state
