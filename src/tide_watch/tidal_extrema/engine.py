"""
Tide extrema detection pipeline.

Runs the stages in order::

    candidates -> separation filter -> alternation -> (validation) -> query

Each call works only on its arguments and returns a fresh
:class:`~tide_watch.tidal_extrema.models.TideReport`; nothing is cached, so
calls may be repeated or run in parallel on independent inputs.
"""
from __future__ import annotations

import configparser
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .candidates import find_tide_candidates
from .models import SeriesPoint, TideReport, TideState
from .preprocessing import align_instant, points_to_arrays, prepare_series
from .query import query_tide_state
from .separation import enforce_alternation, filter_by_separation
from .validation import check_sequence_integrity, validate_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TideEngineConfig:
    """
    Detection options.

    Attributes
    ----------
    min_separation_hours : float
        Minimum plausible spacing between consecutive tidal events.
    max_plausible_gap_hours : float
        Spacing above which the validator reports a possible missing tide.
    enable_diagnostics : bool
        Run the sequence validator and return its observations.
    """
    min_separation_hours: float = 4.5
    max_plausible_gap_hours: float = 13.0
    enable_diagnostics: bool = False

    def __post_init__(self):
        if not self.min_separation_hours > 0:
            raise ValueError(
                f"min_separation_hours must be positive, got "
                f"{self.min_separation_hours}."
            )
        if not self.max_plausible_gap_hours >= self.min_separation_hours:
            raise ValueError(
                f"max_plausible_gap_hours ({self.max_plausible_gap_hours}) "
                f"must not be below min_separation_hours "
                f"({self.min_separation_hours})."
            )

    @classmethod
    def from_config_section(cls, section: Mapping[str, str]) -> TideEngineConfig:
        """
        Build a config from an INI section (e.g. ``[tide_engine]``).

        Unknown keys are ignored and missing keys keep their defaults.
        Boolean values follow :mod:`configparser` spelling (``yes``/``no``,
        ``true``/``false``, ``on``/``off``, ``1``/``0``).
        """
        kwargs = {}
        try:
            if 'min_separation_hours' in section:
                kwargs['min_separation_hours'] = float(
                    section['min_separation_hours'])
            if 'max_plausible_gap_hours' in section:
                kwargs['max_plausible_gap_hours'] = float(
                    section['max_plausible_gap_hours'])
        except (TypeError, ValueError) as ex:
            raise ValueError(f"Invalid tide_engine setting: {ex}") from ex
        if 'enable_diagnostics' in section:
            value = str(section['enable_diagnostics']).strip().lower()
            if value not in configparser.ConfigParser.BOOLEAN_STATES:
                raise ValueError(
                    f"Invalid enable_diagnostics value {value!r}."
                )
            kwargs['enable_diagnostics'] = (
                configparser.ConfigParser.BOOLEAN_STATES[value])
        return cls(**kwargs)


def detect_tides(
    time,
    sea_level,
    now=None,
    config: TideEngineConfig | None = None,
    logger: logging.Logger | None = None,
) -> TideReport:
    """
    Detect high and low tides in a sea-level series.

    Parameters
    ----------
    time : array-like
        Sample timestamps, ascending and nominally hourly.  ISO-8601
        strings, ``datetime``, ``pd.Timestamp`` or ``datetime64`` values.
    sea_level : array-like
        Heights in metres; ``None`` or NaN for missing samples.
    now : datetime-like, optional
        Reference instant for the tide state.  If ``None``, the report
        carries no state.
    config : TideEngineConfig, optional
        Detection options (defaults if ``None``).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    TideReport
        ``events`` strictly alternate high/low with adjacent events at least
        ``min_separation_hours`` apart.  With no events, ``state`` (if
        requested) has every derived value absent.  ``observations`` is
        empty unless diagnostics are enabled.

    Raises
    ------
    ValueError
        If *time* and *sea_level* have different lengths, or a timestamp
        cannot be parsed.
    TideSequenceIntegrityError
        If the detected sequence breaks alternation or time ordering.
    """
    _log = logger or logging.getLogger(__name__)
    config = config or TideEngineConfig()

    time_index, heights = prepare_series(time, sea_level, logger=_log)
    return _run_pipeline(time_index, heights, now, config, _log)


def detect_tides_from_points(
    points: Iterable[SeriesPoint | tuple],
    now=None,
    config: TideEngineConfig | None = None,
    logger: logging.Logger | None = None,
) -> TideReport:
    """
    :func:`detect_tides` over ``(timestamp, height)`` pairs or
    :class:`SeriesPoint` objects.
    """
    _log = logger or logging.getLogger(__name__)
    config = config or TideEngineConfig()

    time_index, heights = points_to_arrays(points, logger=_log)
    return _run_pipeline(time_index, heights, now, config, _log)


def _run_pipeline(
    time_index: pd.DatetimeIndex,
    heights: np.ndarray,
    now,
    config: TideEngineConfig,
    _log: logging.Logger,
) -> TideReport:
    candidates = find_tide_candidates(time_index, heights, logger=_log)
    candidates = filter_by_separation(
        candidates, config.min_separation_hours, logger=_log)
    candidates = enforce_alternation(candidates, logger=_log)
    events = tuple(c.to_event() for c in candidates)

    check_sequence_integrity(events)

    observations = ()
    if config.enable_diagnostics:
        observations = tuple(validate_sequence(
            events,
            min_separation_hours=config.min_separation_hours,
            max_plausible_gap_hours=config.max_plausible_gap_hours,
            logger=_log,
        ))

    state = None
    if now is not None:
        now_ts = align_instant(now, time_index)
        if events:
            state = query_tide_state(
                events, time_index, heights, now_ts, logger=_log)
        else:
            state = TideState.empty(now_ts)

    _log.info('Detected %d tide events from %d samples.',
              len(events), len(heights))
    return TideReport(events=events, state=state, observations=observations)
