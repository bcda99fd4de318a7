"""Fit the three model families on a year-filtered training subset.

Each `fit_*` function takes its hyperparameters, the training and test
partitions and a seed, refits a `Preprocessor` on the rows it actually trains
on, and returns a `FittedModel` holding test predictions clipped to [0, 1].
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import joblib
import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestRegressor
from xgboost import XGBRegressor

from olympics_challenge.config import (
    EPOCHS_BOUNDS, HIDDEN_UNITS_BOUNDS, LEARN_RATE_BOUNDS, MIN_N_BOUNDS, MIN_YEAR_BOUNDS,
    PREDICTORS, RANDOM_STATE, TARGET, TREES_BOUNDS,
)
from olympics_challenge.errors import TrainingError
from olympics_challenge.model.ensemble import clip_predictions
from olympics_challenge.model.preprocessing import Preprocessor

if TYPE_CHECKING:
    from tensorflow import keras

log = logging.getLogger(__name__)

NN_BATCH_SIZE = 32


def check_bounds(field, value, bounds, error=TrainingError):
    low, high, step = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise error(f'{field} must be numeric, got {value!r}', field=field)
    if np.isnan(value) or not low <= value <= high:
        raise error(f'{field}={value} outside [{low}, {high}]', field=field)
    if step is not None and (value != int(value) or (int(value) - low) % step):
        raise error(f'{field}={value} must be {low} plus a multiple of {step}', field=field)


@dataclass(frozen=True)
class RandomForestParams:
    trees: int
    min_n: int
    min_year: int

    def check(self, error=TrainingError, prefix='rf_'):
        check_bounds(prefix + 'trees', self.trees, TREES_BOUNDS, error)
        check_bounds(prefix + 'min_n', self.min_n, MIN_N_BOUNDS, error)
        check_bounds(prefix + 'min_year', self.min_year, MIN_YEAR_BOUNDS, error)


@dataclass(frozen=True)
class BoostedTreeParams:
    trees: int
    min_n: int
    learn_rate: float
    min_year: int

    def check(self, error=TrainingError, prefix='gbt_'):
        check_bounds(prefix + 'trees', self.trees, TREES_BOUNDS, error)
        check_bounds(prefix + 'min_n', self.min_n, MIN_N_BOUNDS, error)
        check_bounds(prefix + 'learn_rate', self.learn_rate, LEARN_RATE_BOUNDS, error)
        check_bounds(prefix + 'min_year', self.min_year, MIN_YEAR_BOUNDS, error)


@dataclass(frozen=True)
class NeuralNetParams:
    hidden_units: int
    epochs: int
    min_year: int
    activation: str = 'relu'

    def check(self, error=TrainingError, prefix='nn_'):
        check_bounds(prefix + 'hidden_units', self.hidden_units, HIDDEN_UNITS_BOUNDS, error)
        check_bounds(prefix + 'epochs', self.epochs, EPOCHS_BOUNDS, error)
        check_bounds(prefix + 'min_year', self.min_year, MIN_YEAR_BOUNDS, error)
        if self.activation != 'relu':
            raise error(f'Only relu activation is supported, got {self.activation!r}', field=prefix + 'activation')


@dataclass
class FittedModel:
    family: str
    model: object
    preprocessor: Preprocessor
    predictions: np.ndarray
    n_train: int


def training_subset(train_ds: pd.DataFrame, min_year: int, family: str) -> pd.DataFrame:
    subset = train_ds[train_ds['Year'] >= min_year]
    if subset.empty:
        raise TrainingError(f'No {family} training rows from {min_year} onwards', field=f'{family}_min_year')
    return subset


def fit_random_forest(
    params: RandomForestParams,
    train_ds: pd.DataFrame,
    test_ds: pd.DataFrame,
    predictors=PREDICTORS,
    seed: int = RANDOM_STATE,
) -> FittedModel:
    params.check()
    subset = training_subset(train_ds, params.min_year, 'rf')
    prep = Preprocessor(predictors).fit(subset)
    model = RandomForestRegressor(
        n_estimators=int(params.trees),
        min_samples_leaf=int(params.min_n),
        random_state=seed,
        n_jobs=1,
    )
    model.fit(prep.apply(subset), subset[TARGET])
    pred = clip_predictions(model.predict(prep.apply(test_ds)))
    log.info('Random forest fit: train rows=%d trees=%d min_n=%d', len(subset), params.trees, params.min_n)
    return FittedModel('rf', model, prep, pred, len(subset))


def fit_boosted_trees(
    params: BoostedTreeParams,
    train_ds: pd.DataFrame,
    test_ds: pd.DataFrame,
    predictors=PREDICTORS,
    seed: int = RANDOM_STATE,
) -> FittedModel:
    params.check()
    subset = training_subset(train_ds, params.min_year, 'gbt')
    prep = Preprocessor(predictors).fit(subset)
    model = XGBRegressor(
        n_estimators=int(params.trees),
        min_child_weight=params.min_n,
        learning_rate=float(params.learn_rate),
        random_state=seed,
        n_jobs=1,
    )
    model.fit(prep.apply(subset), subset[TARGET])
    pred = clip_predictions(model.predict(prep.apply(test_ds)))
    log.info('Boosted trees fit: train rows=%d trees=%d min_n=%d learn_rate=%.3f',
             len(subset), params.trees, params.min_n, params.learn_rate)
    return FittedModel('gbt', model, prep, pred, len(subset))


def build_network(input_dim: int, hidden_units: int, activation: str = 'relu') -> 'keras.Model':
    from tensorflow import keras
    from tensorflow.keras import layers

    model = keras.Sequential(
        [
            layers.Input(shape=(input_dim,)),
            layers.Dense(hidden_units, activation=activation),
            layers.Dense(1),
        ]
    )
    model.compile(optimizer=keras.optimizers.Adam(), loss='mse')
    return model


def fit_neural_net(
    params: NeuralNetParams,
    train_ds: pd.DataFrame,
    test_ds: pd.DataFrame,
    predictors=PREDICTORS,
    seed: int = RANDOM_STATE,
) -> FittedModel:
    import tensorflow as tf
    from tensorflow import keras

    params.check()
    subset = training_subset(train_ds, params.min_year, 'nn')
    prep = Preprocessor(predictors).fit(subset)

    # drop graphs and layer-name counters left over from earlier fits
    keras.backend.clear_session()
    keras.utils.set_random_seed(seed)
    tf.config.experimental.enable_op_determinism()

    model = build_network(len(predictors), int(params.hidden_units), params.activation)
    model.fit(
        prep.apply(subset).to_numpy(),
        subset[TARGET].to_numpy(dtype=float),
        epochs=int(params.epochs),
        batch_size=NN_BATCH_SIZE,
        verbose=0,
    )
    pred = clip_predictions(model.predict(prep.apply(test_ds).to_numpy(), verbose=0).ravel())
    log.info('Neural net fit: train rows=%d hidden_units=%d epochs=%d',
             len(subset), params.hidden_units, params.epochs)
    return FittedModel('nn', model, prep, pred, len(subset))


def save_fitted_models(fits, out_dir, prefix=''):
    """Persist estimators and their preprocessors; returns the written paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for fit in fits:
        if fit.family == 'nn':
            path = out_dir / f'{prefix}{fit.family}_model.keras'
            fit.model.save(str(path))
        else:
            path = out_dir / f'{prefix}{fit.family}_model.joblib'
            joblib.dump(fit.model, path)
        prep_path = out_dir / f'{prefix}{fit.family}_preprocessor.joblib'
        joblib.dump(fit.preprocessor, prep_path)
        written += [path, prep_path]
    log.info('Saved %d model artifacts to %s', len(written), out_dir)
    return written
