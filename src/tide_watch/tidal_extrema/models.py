"""
Data model for tide extrema detection.

All objects are immutable and derived fresh from the input series on every
detection call; nothing here is cached or shared between calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pandas as pd


class TideKind(str, Enum):
    """Kind of tidal extremum."""
    HIGH = 'HIGH'
    LOW = 'LOW'


class TideTrend(str, Enum):
    """Direction of the water level at the reference instant."""
    RISING = 'rising'
    FALLING = 'falling'


@dataclass(frozen=True)
class SeriesPoint:
    """One sample of the input series; ``height`` is ``None`` when missing."""
    timestamp: pd.Timestamp
    height: float | None


@dataclass(frozen=True)
class TideCandidate:
    """
    Refined extremum candidate carrying the bookkeeping needed to resolve
    conflicts between neighbouring candidates.

    ``prominence`` is ``|y2 - (y1 + y3) / 2|`` computed from the raw samples
    and ``source_index`` is the series index the candidate was found at.
    """
    kind: TideKind
    time: pd.Timestamp
    height: float
    prominence: float
    source_index: int

    def to_event(self) -> TideEvent:
        return TideEvent(kind=self.kind, time=self.time, height=self.height)


@dataclass(frozen=True)
class TideEvent:
    """Validated high or low tide."""
    kind: TideKind
    time: pd.Timestamp
    height: float

    def to_dict(self) -> dict:
        return {
            'type': self.kind.value,
            'time': self.time.isoformat(),
            'height': self.height,
        }


@dataclass(frozen=True)
class SequenceObservation:
    """
    Read-only diagnostic raised by the sequence validator.

    ``code`` is one of ``"alternation"``, ``"short_separation"`` or
    ``"possible_missing_tide"``; ``index`` is the position of the second
    event of the offending adjacent pair.
    """
    code: str
    index: int
    separation_hours: float
    message: str

    ALTERNATION = 'alternation'
    SHORT_SEPARATION = 'short_separation'
    POSSIBLE_MISSING_TIDE = 'possible_missing_tide'


@dataclass(frozen=True)
class TideState:
    """Derived tide state relative to a reference instant."""
    now: pd.Timestamp | None
    current_index: int | None = None
    current_height: float | None = None
    trend: TideTrend | None = None
    last_tide: TideEvent | None = None
    next_high: TideEvent | None = None
    next_low: TideEvent | None = None

    @classmethod
    def empty(cls, now: pd.Timestamp | None = None) -> TideState:
        """State with every derived value absent."""
        return cls(now=now)

    def time_until(self, event: TideEvent) -> pd.Timedelta:
        """Signed time from the reference instant to *event*."""
        if self.now is None:
            raise ValueError('State has no reference instant.')
        return event.time - self.now


@dataclass(frozen=True)
class TideReport:
    """Result of one detection call."""
    events: tuple[TideEvent, ...] = ()
    state: TideState | None = None
    observations: tuple[SequenceObservation, ...] = ()

    @property
    def highs(self) -> tuple[TideEvent, ...]:
        return tuple(e for e in self.events if e.kind is TideKind.HIGH)

    @property
    def lows(self) -> tuple[TideEvent, ...]:
        return tuple(e for e in self.events if e.kind is TideKind.LOW)
