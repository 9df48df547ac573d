"""
Tidal Extrema Subpackage

Provides functionality for:
- Input preparation (ISO timestamps, missing samples)
- Extremum candidate detection with parabolic sub-sample refinement
- Minimum-separation filtering and high/low alternation
- Sequence validation diagnostics
- Tide state queries (trend, last tide, next high/low)
- The end-to-end detection pipeline and its configuration
"""

from tide_watch.tidal_extrema.candidates import (
    find_raw_extrema,
    find_tide_candidates,
    interpolate_extremum,
    refine_candidate,
)
from tide_watch.tidal_extrema.engine import (
    TideEngineConfig,
    detect_tides,
    detect_tides_from_points,
)
from tide_watch.tidal_extrema.models import (
    SequenceObservation,
    SeriesPoint,
    TideCandidate,
    TideEvent,
    TideKind,
    TideReport,
    TideState,
    TideTrend,
)
from tide_watch.tidal_extrema.preprocessing import (
    align_instant,
    coerce_heights,
    points_to_arrays,
    prepare_series,
)
from tide_watch.tidal_extrema.query import query_tide_state
from tide_watch.tidal_extrema.separation import (
    enforce_alternation,
    filter_by_separation,
)
from tide_watch.tidal_extrema.validation import (
    TideSequenceIntegrityError,
    check_sequence_integrity,
    validate_sequence,
)

__all__ = [
    # Data model
    'TideKind',
    'TideTrend',
    'SeriesPoint',
    'TideCandidate',
    'TideEvent',
    'TideState',
    'TideReport',
    'SequenceObservation',
    # Preprocessing
    'prepare_series',
    'coerce_heights',
    'points_to_arrays',
    'align_instant',
    # Candidates
    'find_raw_extrema',
    'interpolate_extremum',
    'refine_candidate',
    'find_tide_candidates',
    # Sequence repair
    'filter_by_separation',
    'enforce_alternation',
    # Validation
    'validate_sequence',
    'check_sequence_integrity',
    'TideSequenceIntegrityError',
    # Query
    'query_tide_state',
    # Pipeline
    'TideEngineConfig',
    'detect_tides',
    'detect_tides_from_points',
]
