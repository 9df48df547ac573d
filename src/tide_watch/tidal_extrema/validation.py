"""
Read-only checks over a finished tide sequence.

:func:`validate_sequence` reports observations and never alters its input.
:func:`check_sequence_integrity` is the hard guard the engine applies before
returning: broken alternation or time ordering means the detection itself is
faulty and is raised as :class:`TideSequenceIntegrityError`.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import SequenceObservation, TideEvent
from .preprocessing import hours_between

logger = logging.getLogger(__name__)


class TideSequenceIntegrityError(RuntimeError):
    """Detected tide sequence violates alternation or time ordering."""


def validate_sequence(
    events: Sequence[TideEvent],
    min_separation_hours: float = 4.5,
    max_plausible_gap_hours: float = 13.0,
    logger: logging.Logger | None = None,
) -> list[SequenceObservation]:
    """
    Inspect adjacent event pairs for anomalies.

    Parameters
    ----------
    events : sequence of TideEvent
        Final tide sequence in time order.
    min_separation_hours : float, optional
        Pairs closer than this are reported as ``short_separation``
        (default 4.5).
    max_plausible_gap_hours : float, optional
        Pairs further apart than this are reported as
        ``possible_missing_tide`` (default 13.0).
    logger : logging.Logger, optional
        Logger instance; each observation is also logged as a warning.

    Returns
    -------
    list of SequenceObservation
        One entry per anomaly found, in sequence order.
    """
    _log = logger or logging.getLogger(__name__)
    observations: list[SequenceObservation] = []

    for i in range(1, len(events)):
        prev, curr = events[i - 1], events[i]
        gap = hours_between(curr.time, prev.time)

        if curr.kind is prev.kind:
            observations.append(SequenceObservation(
                code=SequenceObservation.ALTERNATION,
                index=i,
                separation_hours=gap,
                message=(
                    f"Consecutive {curr.kind.value} tides at "
                    f"{prev.time.isoformat()} and {curr.time.isoformat()}."
                ),
            ))
        if gap < min_separation_hours:
            observations.append(SequenceObservation(
                code=SequenceObservation.SHORT_SEPARATION,
                index=i,
                separation_hours=gap,
                message=(
                    f"{prev.kind.value} and {curr.kind.value} tides only "
                    f"{gap:.2f} h apart (minimum {min_separation_hours} h)."
                ),
            ))
        elif gap > max_plausible_gap_hours:
            observations.append(SequenceObservation(
                code=SequenceObservation.POSSIBLE_MISSING_TIDE,
                index=i,
                separation_hours=gap,
                message=(
                    f"{gap:.2f} h between tides at {prev.time.isoformat()} "
                    f"and {curr.time.isoformat()}; possible missing tide."
                ),
            ))

    for obs in observations:
        _log.warning('Tide sequence check [%s]: %s', obs.code, obs.message)
    _log.info('Validated %d tide events: %d observations.',
              len(events), len(observations))
    return observations


def check_sequence_integrity(events: Sequence[TideEvent]) -> None:
    """
    Raise :class:`TideSequenceIntegrityError` unless *events* strictly
    alternate in kind and strictly increase in time.
    """
    for i in range(1, len(events)):
        prev, curr = events[i - 1], events[i]
        if curr.kind is prev.kind:
            raise TideSequenceIntegrityError(
                f"Tide events {i - 1} and {i} are both {curr.kind.value}."
            )
        if not curr.time > prev.time:
            raise TideSequenceIntegrityError(
                f"Tide event {i} at {curr.time.isoformat()} does not follow "
                f"event {i - 1} at {prev.time.isoformat()}."
            )
