"""
Print the current tide trend and the next high and low tides for a location.

Fetches the hourly sea-level forecast from Open-Meteo, detects high and low
tides, and reports them relative to the current time (or --now).

Example:
    python bin/obs_retrieval/get_tide_summary.py --lat 36.6 --lon -121.9
"""
import argparse
import dataclasses
import logging
import sys
from datetime import datetime, timezone

import pandas as pd

from tide_watch.obs_retrieval import retrieve_open_meteo_sea_level, utils
from tide_watch.tidal_extrema import TideEngineConfig, detect_tides


def describe_time_until(delta: pd.Timedelta) -> str:
    if delta < pd.Timedelta(0):
        return 'Now'
    total_minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f'in {minutes} min'
    if hours == 1:
        return f'in 1 hour {minutes} min'
    return f'in {hours} hours {minutes} min'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Summarise upcoming high and low tides for a location.')
    parser.add_argument('--lat', type=float, required=True,
                        help='Latitude in degrees (-90 to 90)')
    parser.add_argument('--lon', type=float, required=True,
                        help='Longitude in degrees (-180 to 180)')
    parser.add_argument('--forecast-days', type=int, default=2,
                        help='Days of hourly sea level to fetch (1-16)')
    parser.add_argument('--config', default=None,
                        help='Path to a tide_watch INI configuration file')
    parser.add_argument('--diagnostics', action='store_true',
                        help='Report tide sequence anomalies')
    parser.add_argument('--now', default=None,
                        help='Reference instant (ISO-8601, default: now UTC)')
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.now is not None:
        try:
            now = pd.Timestamp(args.now)
        except (TypeError, ValueError) as ex:
            parser.error(f'argument --now: invalid instant {args.now!r}: {ex}')
        if pd.isna(now):
            parser.error(f'argument --now: invalid instant {args.now!r}')
        args.now = now
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logger = logging.getLogger('get_tide_summary')

    try:
        section = utils.Utils(args.config).read_config_section(
            'tide_engine', logger)
    except KeyError:
        logger.warning(
            'No [tide_engine] section in the configuration; using defaults.')
        config = TideEngineConfig()
    else:
        config = TideEngineConfig.from_config_section(section)
    if args.diagnostics:
        config = dataclasses.replace(config, enable_diagnostics=True)

    obs = retrieve_open_meteo_sea_level(
        args.lat, args.lon, logger,
        forecast_days=args.forecast_days, config_path=args.config)
    if obs is None:
        print('No tide data available for this location.')
        return 1

    now = args.now if args.now is not None else datetime.now(timezone.utc)
    report = detect_tides(
        obs['DateTime'], obs['OBS'], now=now, config=config, logger=logger)
    state = report.state

    print(f'Location: {args.lat:.4f}, {args.lon:.4f}')
    if state.trend is None:
        print('No high or low tides found in the forecast.')
        return 1

    height = ('N/A' if state.current_height is None
              else f'{state.current_height:.2f} m')
    print(f'Current tide: {state.trend.value} (sea level {height})')
    if state.last_tide is not None:
        print(f'Last tide: {state.last_tide.kind.value} at '
              f'{state.last_tide.time:%Y-%m-%d %H:%M} GMT '
              f'({state.last_tide.height:.2f} m)')
    for label, event in (('Next high tide', state.next_high),
                         ('Next low tide', state.next_low)):
        if event is None:
            continue
        print(f'{label}: {describe_time_until(state.time_until(event))} '
              f'at {event.time:%Y-%m-%d %H:%M} GMT ({event.height:.2f} m)')
    for obs_item in report.observations:
        print(f'Warning [{obs_item.code}]: {obs_item.message}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
