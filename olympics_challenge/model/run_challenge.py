#!/usr/bin/env python3
"""Evaluate challenge submissions and rank them by ensemble RMSE.

Run as:
    python -m olympics_challenge.model.run_challenge --dataset outputs/olympics_challenge_dataset.csv \
        --submissions data/submissions.csv

For every submission the three models are fit on the training partition,
their clipped test predictions are blended with the submission's weights,
and the per-model and ensemble RMSE are written to the results CSV. With
--lb-dataset each submission is also refit on the full competition dataset
and scored on the reserved-year rows.
"""
import argparse
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import pandas as pd

from olympics_challenge.config import (
    LB_RESULTS_FN, OUT_DIR, PREDICTORS, RANDOM_STATE, RESERVED_YEAR, RESULTS_FN, TARGET, TEST_FRACTION,
)
from olympics_challenge.data.io import load_delegation_dataset
from olympics_challenge.data.split import split_dataset
from olympics_challenge.errors import ChallengeError
from olympics_challenge.model.ensemble import blend, rmse
from olympics_challenge.model.submission import DEFAULT_SUBMISSION, load_submissions
from olympics_challenge.model.trainers import (
    fit_boosted_trees, fit_neural_net, fit_random_forest, save_fitted_models,
)

log = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    name: str
    rmse_rf: float = float('nan')
    rmse_gbt: float = float('nan')
    rmse_nn: float = float('nan')
    rmse_ensemble: float = float('nan')
    error: str = None
    error_field: str = None


def fit_submission(config, train_ds, test_ds, seed=RANDOM_STATE, predictors=PREDICTORS):
    # every family is seeded from scratch with the same seed
    return [
        fit_random_forest(config.rf_params, train_ds, test_ds, predictors, seed),
        fit_boosted_trees(config.gbt_params, train_ds, test_ds, predictors, seed),
        fit_neural_net(config.nn_params, train_ds, test_ds, predictors, seed),
    ]


def score_fits(name, fits, weights, actual):
    scores = {f'rmse_{fit.family}': rmse(fit.predictions, actual) for fit in fits}
    ensemble = blend([fit.predictions for fit in fits], weights)
    return SubmissionResult(name=name, rmse_ensemble=rmse(ensemble, actual), **scores)


def evaluate_submission(config, train_ds, test_ds, seed=RANDOM_STATE, predictors=PREDICTORS, save_dir=None):
    log.info('Evaluating submission %s', config.name)
    fits = fit_submission(config, train_ds, test_ds, seed, predictors)
    result = score_fits(config.name, fits, config.weights, test_ds[TARGET].to_numpy(dtype=float))
    if save_dir is not None:
        save_fitted_models(fits, Path(save_dir), prefix=f'{config.name}_')
    log.info('Submission %s: rf=%.4f gbt=%.4f nn=%.4f ensemble=%.4f', config.name,
             result.rmse_rf, result.rmse_gbt, result.rmse_nn, result.rmse_ensemble)
    return result


def results_frame(results):
    df = pd.DataFrame([asdict(r) for r in results], columns=[f.name for f in fields(SubmissionResult)])
    df = df.sort_values('rmse_ensemble', na_position='last', kind='mergesort').reset_index(drop=True)
    df.insert(0, 'rank', range(1, len(df) + 1))
    return df


def failed_result(name, error):
    return SubmissionResult(name=name, error=error.kind, error_field=error.field)


def run_submissions(configs, train_ds, test_ds, seed=RANDOM_STATE, predictors=PREDICTORS, save_dir=None,
                    rejected=()):
    """Evaluate submissions one by one; a failing submission is recorded and skipped.

    `rejected` holds `(name, error)` pairs for submissions that never got a
    valid config. They are ranked last next to the runtime failures.
    """
    results = []
    for config in configs:
        try:
            results.append(evaluate_submission(config, train_ds, test_ds, seed, predictors, save_dir))
        except ChallengeError as e:
            log.error('Submission %s failed with %s (field=%s): %s', config.name, e.kind, e.field, e)
            results.append(failed_result(config.name, e))
    results += [failed_result(name, e) for name, e in rejected]
    return results_frame(results)


def score_leaderboard(configs, competition_ds, leaderboard_ds, seed=RANDOM_STATE, predictors=PREDICTORS,
                      rejected=()):
    """Refit on every competition row and score on the reserved-year rows."""
    train_ds = competition_ds[competition_ds['Year'] < leaderboard_ds['Year'].min()].reset_index(drop=True)
    return run_submissions(configs, train_ds, leaderboard_ds, seed, predictors, rejected=rejected)


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--dataset', default=str(OUT_DIR / 'olympics_challenge_dataset.csv'),
                        help='competition dataset CSV')
    parser.add_argument('--lb-dataset', default=None, help='leaderboard dataset CSV (reserved year)')
    parser.add_argument('--submissions', default=None,
                        help='submissions CSV; the baseline submission is used when omitted')
    parser.add_argument('--out', default=str(OUT_DIR), help='directory for result CSVs')
    parser.add_argument('--seed', type=int, default=RANDOM_STATE)
    parser.add_argument('--test-fraction', type=float, default=TEST_FRACTION)
    parser.add_argument('--reserved-year', type=int, default=RESERVED_YEAR)
    parser.add_argument('--save-models', default=None, help='directory to save fitted models into')
    parser.add_argument('--breakpoints', nargs=2, type=float, default=None, metavar=('W1', 'W2'),
                        help='slider breakpoints in [0, 1]; replaces every submission\'s ensemble weights')
    args = parser.parse_args(argv)

    if args.submissions:
        configs, rejected = load_submissions(args.submissions)
    else:
        configs, rejected = [DEFAULT_SUBMISSION], []
    if args.breakpoints:
        configs = [c.with_breakpoints(*args.breakpoints) for c in configs]
        log.info('Ensemble weights set from breakpoints %s', args.breakpoints)
    ds = load_delegation_dataset(args.dataset)
    train_ds, test_ds = split_dataset(ds, args.seed, args.test_fraction, args.reserved_year)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    results = run_submissions(configs, train_ds, test_ds, args.seed, save_dir=args.save_models, rejected=rejected)
    results.to_csv(out_dir / RESULTS_FN, index=False)
    log.info('Results:\n%s', results.to_string(index=False))

    if args.lb_dataset:
        lb_ds = load_delegation_dataset(args.lb_dataset)
        lb_results = score_leaderboard(configs, ds, lb_ds, args.seed, rejected=rejected)
        lb_results.to_csv(out_dir / LB_RESULTS_FN, index=False)
        log.info('Leaderboard:\n%s', lb_results.to_string(index=False))
    return results


if __name__ == '__main__':
    main()
