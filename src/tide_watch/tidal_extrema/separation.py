"""
Sequence repair: minimum-separation filtering and high/low alternation.

Both passes are greedy and single-pass.  Each new candidate is compared only
with the last kept one; on conflict the more prominent candidate survives
and ties go to the one already kept.  A run of three or more mutually
conflicting candidates is therefore resolved left to right and may keep a
candidate that is only locally the most prominent.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import pandas as pd

from .models import TideCandidate

logger = logging.getLogger(__name__)


def _greedy_resolve(
    candidates: Sequence[TideCandidate],
    in_conflict: Callable[[TideCandidate, TideCandidate], bool],
) -> tuple[list[TideCandidate], int]:
    """Keep the stronger of each conflicting pair; return (kept, n_conflicts)."""
    kept: list[TideCandidate] = []
    conflicts = 0
    for candidate in candidates:
        if not kept:
            kept.append(candidate)
            continue
        last = kept[-1]
        if not in_conflict(last, candidate):
            kept.append(candidate)
            continue
        conflicts += 1
        if candidate.prominence > last.prominence:
            kept[-1] = candidate
    return kept, conflicts


def filter_by_separation(
    candidates: Sequence[TideCandidate],
    min_separation_hours: float = 4.5,
    logger: logging.Logger | None = None,
) -> list[TideCandidate]:
    """
    Drop candidates that follow the last kept candidate too closely.

    Parameters
    ----------
    candidates : sequence of TideCandidate
        Refined candidates in time order.
    min_separation_hours : float, optional
        Minimum plausible spacing between consecutive tidal events
        (default 4.5 hours).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    list of TideCandidate
        Candidates with every adjacent pair at least
        *min_separation_hours* apart, original order preserved.
    """
    _log = logger or logging.getLogger(__name__)
    min_gap = pd.Timedelta(hours=min_separation_hours)

    kept, conflicts = _greedy_resolve(
        candidates,
        lambda last, candidate: candidate.time - last.time < min_gap,
    )
    _log.info(
        'Separation filter (%.2f h): kept %d of %d candidates, '
        '%d conflicts resolved.',
        min_separation_hours, len(kept), len(candidates), conflicts,
    )
    return kept


def enforce_alternation(
    candidates: Sequence[TideCandidate],
    logger: logging.Logger | None = None,
) -> list[TideCandidate]:
    """
    Resolve consecutive candidates of the same kind so that the result
    strictly alternates high/low.

    Parameters
    ----------
    candidates : sequence of TideCandidate
        Separation-filtered candidates in time order.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    list of TideCandidate
        Strictly alternating candidates.
    """
    _log = logger or logging.getLogger(__name__)

    kept, conflicts = _greedy_resolve(
        candidates,
        lambda last, candidate: candidate.kind is last.kind,
    )
    _log.info(
        'Alternation pass: kept %d of %d candidates, %d same-kind '
        'pairs resolved.',
        len(kept), len(candidates), conflicts,
    )
    return kept
