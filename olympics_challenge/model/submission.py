"""Submission configurations: one named set of hyperparameters and ensemble weights."""
import logging
from dataclasses import dataclass, fields, replace

import numpy as np

from olympics_challenge.data.io import load_csv, require_columns
from olympics_challenge.errors import ConfigError
from olympics_challenge.model.ensemble import weights_from_breakpoints
from olympics_challenge.model.trainers import BoostedTreeParams, NeuralNetParams, RandomForestParams

INT_FIELDS = [
    'rf_min_year', 'rf_trees', 'rf_min_n',
    'gbt_min_year', 'gbt_trees', 'gbt_min_n',
    'nn_min_year', 'nn_hidden_units', 'nn_epochs',
]
FLOAT_FIELDS = ['gbt_learn_rate', 'w_rf', 'w_gbt', 'w_nn']

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionConfig:
    name: str
    rf_min_year: int
    rf_trees: int
    rf_min_n: int
    gbt_min_year: int
    gbt_trees: int
    gbt_min_n: int
    gbt_learn_rate: float
    nn_min_year: int
    nn_hidden_units: int
    nn_epochs: int
    w_rf: float
    w_gbt: float
    w_nn: float

    def __post_init__(self):
        if not str(self.name).strip():
            raise ConfigError('Submission name must not be empty', field='name')
        self.rf_params.check(ConfigError)
        self.gbt_params.check(ConfigError)
        self.nn_params.check(ConfigError)
        for field_name in ['w_rf', 'w_gbt', 'w_nn']:
            w = getattr(self, field_name)
            if isinstance(w, bool) or not isinstance(w, (int, float, np.integer, np.floating)) \
                    or not np.isfinite(w) or w < 0:
                raise ConfigError(f'{field_name} must be a non-negative number, got {w!r}', field=field_name)

    @property
    def rf_params(self):
        return RandomForestParams(trees=self.rf_trees, min_n=self.rf_min_n, min_year=self.rf_min_year)

    @property
    def gbt_params(self):
        return BoostedTreeParams(trees=self.gbt_trees, min_n=self.gbt_min_n,
                                 learn_rate=self.gbt_learn_rate, min_year=self.gbt_min_year)

    @property
    def nn_params(self):
        return NeuralNetParams(hidden_units=self.nn_hidden_units, epochs=self.nn_epochs,
                               min_year=self.nn_min_year)

    @property
    def weights(self):
        return self.w_rf, self.w_gbt, self.w_nn

    def with_breakpoints(self, w1, w2):
        """Copy of this submission with weights taken from two slider breakpoints."""
        w_rf, w_gbt, w_nn = weights_from_breakpoints(w1, w2)
        return replace(self, w_rf=w_rf, w_gbt=w_gbt, w_nn=w_nn)


SUBMISSION_COLUMNS = [f.name for f in fields(SubmissionConfig)]

DEFAULT_SUBMISSION = SubmissionConfig(
    name='baseline',
    rf_min_year=1984, rf_trees=100, rf_min_n=5,
    gbt_min_year=1984, gbt_trees=100, gbt_min_n=5, gbt_learn_rate=0.1,
    nn_min_year=1984, nn_hidden_units=50, nn_epochs=20,
    w_rf=0.33, w_gbt=0.33, w_nn=0.34,
)


def submission_from_row(row):
    values = {'name': str(row['name'])}
    for c in INT_FIELDS:
        v = row[c]
        # leave non-integral values for __post_init__ to reject
        values[c] = int(v) if isinstance(v, (int, float, np.integer, np.floating)) and float(v).is_integer() else v
    for c in FLOAT_FIELDS:
        try:
            values[c] = float(row[c])
        except (TypeError, ValueError):
            raise ConfigError(f'{c} must be numeric, got {row[c]!r}', field=c) from None
    return SubmissionConfig(**values)


def load_submissions(path):
    """Read one SubmissionConfig per CSV row.

    Returns `(configs, rejected)`. A row that fails validation does not stop
    the others: it lands in `rejected` as a `(name, ConfigError)` pair so the
    runner can report it next to the evaluated submissions. Missing columns
    and duplicate names concern the whole file and still raise.
    """
    df = load_csv(path)
    require_columns(df, SUBMISSION_COLUMNS, what=f'submissions file {path}')
    names = df['name'].astype(str)
    if names.duplicated().any():
        dup = names[names.duplicated()].iloc[0]
        raise ConfigError(f'Duplicate submission name {dup!r}', field='name')
    configs, rejected = [], []
    for row in df.to_dict('records'):
        try:
            configs.append(submission_from_row(row))
        except ConfigError as e:
            log.error('Rejected submission %s (field=%s): %s', row['name'], e.field, e)
            rejected.append((str(row['name']), e))
    log.info('Loaded %d submission(s), rejected %d from %s', len(configs), len(rejected), path)
    return configs, rejected
