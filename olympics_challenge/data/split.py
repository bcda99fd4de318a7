"""Deterministic train / held-out split of the delegation-year dataset."""
import logging
import math

from olympics_challenge.config import RANDOM_STATE, RESERVED_YEAR, TEST_FRACTION, TEST_YEARS
from olympics_challenge.errors import ConfigError

log = logging.getLogger(__name__)


def split_dataset(ds, seed=RANDOM_STATE, test_fraction=TEST_FRACTION, reserved_year=RESERVED_YEAR):
    """Return (train_ds, test_ds).

    Rows from `reserved_year` onwards are dropped. The test set is a seeded
    sample without replacement of `floor(test_fraction * n)` rows out of the
    n rows belonging to the two most recent remaining years; every other row
    goes to training.
    """
    if not 0 <= test_fraction <= 1:
        raise ConfigError(f'test_fraction must lie in [0, 1], got {test_fraction}', field='test_fraction')

    competition = ds[ds['Year'] < reserved_year].reset_index(drop=True)
    if competition.empty:
        raise ConfigError(f'No rows before reserved year {reserved_year}', field='reserved_year')

    recent_years = [int(y) for y in sorted(competition['Year'].unique())[-TEST_YEARS:]]
    recent = competition[competition['Year'].isin(recent_years)]
    n_test = math.floor(test_fraction * len(recent))
    if n_test > len(recent):
        raise ConfigError(
            f'Requested {n_test} test rows but only {len(recent)} are available', field='test_fraction')
    if n_test == 0:
        raise ConfigError(
            f'test_fraction {test_fraction} of {len(recent)} rows leaves an empty test set', field='test_fraction')

    test_idx = recent.sample(n=n_test, replace=False, random_state=seed).index
    test_ds = competition.loc[test_idx].reset_index(drop=True)
    train_ds = competition.drop(index=test_idx).reset_index(drop=True)
    log.info('Split rows: train=%d test=%d (test years %s)', len(train_ds), len(test_ds), recent_years)
    return train_ds, test_ds
