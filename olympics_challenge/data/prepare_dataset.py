#!/usr/bin/env python3
"""Build the challenge datasets from the raw athlete events file.

Run as:
    python -m olympics_challenge.data.prepare_dataset --raw data/athlete_events.csv

Writes two CSVs with identical schema to the output directory: the
competition dataset (every year before the reserved year) and the
leaderboard dataset (the reserved year only).
"""
import argparse
import logging
from pathlib import Path

from olympics_challenge.config import DATASET_FN, LB_DATASET_FN, OUT_DIR, RAW_ATHLETES, RESERVED_YEAR
from olympics_challenge.data.aggregate import build_delegation_dataset, load_raw_athletes

log = logging.getLogger(__name__)


def split_reserved_year(ds, reserved_year=RESERVED_YEAR):
    competition = ds[ds['Year'] < reserved_year].reset_index(drop=True)
    leaderboard = ds[ds['Year'] == reserved_year].reset_index(drop=True)
    if leaderboard.empty:
        log.warning('No rows for reserved year %d; leaderboard dataset will be empty', reserved_year)
    return competition, leaderboard


def prepare(raw_path, out_dir, reserved_year=RESERVED_YEAR):
    raw = load_raw_athletes(raw_path)
    ds = build_delegation_dataset(raw)
    competition, leaderboard = split_reserved_year(ds, reserved_year)

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    competition.to_csv(out_dir / DATASET_FN, index=False)
    leaderboard.to_csv(out_dir / LB_DATASET_FN, index=False)
    log.info('Wrote %s (rows=%d) and %s (rows=%d) to %s',
             DATASET_FN, len(competition), LB_DATASET_FN, len(leaderboard), out_dir)
    return competition, leaderboard


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--raw', default=str(RAW_ATHLETES), help='raw athlete events CSV')
    parser.add_argument('--out-dir', default=str(OUT_DIR), help='directory for the prepared CSVs')
    parser.add_argument('--reserved-year', type=int, default=RESERVED_YEAR,
                        help='Games year held back for leaderboard scoring')
    args = parser.parse_args(argv)
    prepare(args.raw, args.out_dir, args.reserved_year)


if __name__ == '__main__':
    main()
