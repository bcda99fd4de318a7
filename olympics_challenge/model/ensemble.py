"""Prediction clipping, RMSE and the weighted ensemble blend."""
import numpy as np

from olympics_challenge.errors import ConfigError


def clip_predictions(pred):
    """Clip to [0, 1]: the target is a share of athletes."""
    return np.clip(np.asarray(pred, dtype=float), 0.0, 1.0)


def rmse(pred, actual):
    pred = np.asarray(pred, dtype=float)
    actual = np.asarray(actual, dtype=float)
    if pred.shape != actual.shape:
        raise ValueError(f'Prediction shape {pred.shape} does not match target shape {actual.shape}')
    if pred.size == 0:
        raise ValueError('Cannot compute RMSE of an empty set')
    return float(np.sqrt(np.mean((pred - actual) ** 2)))


def blend(predictions, weights):
    """Weighted sum of per-model predictions. Weights are used as given."""
    if len(predictions) != len(weights):
        raise ConfigError(f'Got {len(predictions)} prediction sets but {len(weights)} weights', field='weights')
    for i, w in enumerate(weights):
        if not np.isfinite(w) or w < 0:
            raise ConfigError(f'Ensemble weight #{i} must be a non-negative number, got {w}', field='weights')
    stacked = np.vstack([np.asarray(p, dtype=float) for p in predictions])
    return np.asarray(weights, dtype=float) @ stacked


def weights_from_breakpoints(w1, w2):
    """Turn two slider breakpoints into (rf, gbt, nn) weights.

    [0, w1] goes to the random forest, [w1, w2] to boosted trees and [w2, 1]
    to the network. Negative shares from inverted breakpoints are floored at
    zero and the rest is left as is, so the weights may not sum to 1.
    """
    return max(float(w1), 0.0), max(float(w2) - float(w1), 0.0), max(1.0 - float(w2), 0.0)
