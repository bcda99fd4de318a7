"""Median imputation followed by standardisation, fit on training rows only."""
import numpy as np
import pandas as pd
from sklearn.impute import SimpleImputer
from sklearn.preprocessing import StandardScaler

from olympics_challenge.errors import PreprocessingError


class Preprocessor:
    """Impute missing predictors with the training median, then rescale.

    Statistics are computed from the rows passed to `fit` with missing
    values ignored, and reused unchanged by every later `apply` call.
    """

    def __init__(self, predictors: list[str]):
        self.predictors = list(predictors)
        self.imputer = None
        self.scaler = None

    def _select(self, rows: pd.DataFrame) -> pd.DataFrame:
        missing = [c for c in self.predictors if c not in rows.columns]
        if missing:
            raise PreprocessingError(f'Predictor columns not found: {missing}', field=missing[0])
        return rows[self.predictors].astype(float)

    def fit(self, train_ds: pd.DataFrame) -> 'Preprocessor':
        X = self._select(train_ds)
        for c in self.predictors:
            observed = X[c].dropna()
            if observed.empty:
                raise PreprocessingError(f'Predictor {c} has no observed values in the training subset', field=c)
            if observed.nunique() < 2:
                raise PreprocessingError(f'Predictor {c} has zero variance in the training subset', field=c)
        self.imputer = SimpleImputer(strategy='median').fit(X)
        # StandardScaler disregards NaNs when fitting
        self.scaler = StandardScaler().fit(X)
        return self

    def apply(self, rows: pd.DataFrame) -> pd.DataFrame:
        if self.scaler is None:
            raise PreprocessingError('Preprocessor.apply called before fit')
        X = self._select(rows)
        imputed = pd.DataFrame(self.imputer.transform(X), columns=self.predictors, index=X.index)
        Xs = self.scaler.transform(imputed)
        return pd.DataFrame(Xs, columns=self.predictors, index=rows.index)

    @property
    def medians(self):
        return pd.Series(self.imputer.statistics_, index=self.predictors)

    @property
    def means(self):
        return pd.Series(self.scaler.mean_, index=self.predictors)

    @property
    def stds(self):
        return pd.Series(np.sqrt(self.scaler.var_), index=self.predictors)
