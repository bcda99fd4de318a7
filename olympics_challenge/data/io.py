"""CSV readers for the raw athlete file and the prepared delegation datasets."""
import logging
from pathlib import Path

import pandas as pd

from olympics_challenge.config import KEY_COLUMNS, PREDICTORS, TARGET
from olympics_challenge.errors import DataError

log = logging.getLogger(__name__)


def load_csv(path, **kwargs):
    path = Path(path)
    if not path.exists():
        raise DataError(f'Input file not found: {path}')
    encodings = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252']
    last_exc = None
    for enc in encodings:
        try:
            return pd.read_csv(path, encoding=enc, **kwargs)
        except UnicodeDecodeError as e:
            log.warning('Decoding %s as %s failed; trying next encoding', path, enc)
            last_exc = e
    raise DataError(f'Could not decode {path}: {last_exc}')


def require_columns(df, columns, what='input'):
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataError(f'Missing required columns in {what}: {missing}', field=missing[0])


def load_delegation_dataset(path):
    """Read a competition or leaderboard CSV and check its schema."""
    df = load_csv(path)
    require_columns(df, KEY_COLUMNS + PREDICTORS + [TARGET], what=str(path))
    if df.empty:
        raise DataError(f'No rows in {path}')
    for c in ['Year', TARGET]:
        df[c] = pd.to_numeric(df[c], errors='coerce')
        n_missing = int(df[c].isna().sum())
        if n_missing:
            raise DataError(f'{c} is missing or non-numeric in {n_missing} row(s) of {path}', field=c)
    if not df[TARGET].between(0, 1).all():
        raise DataError(f'{TARGET} outside [0, 1] in {path}', field=TARGET)
    df['Year'] = df['Year'].astype(int)
    log.info('Loaded %s rows=%d years=%d-%d', path, len(df), df['Year'].min(), df['Year'].max())
    return df
