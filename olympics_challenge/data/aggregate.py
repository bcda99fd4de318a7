"""Aggregate raw per-athlete-event rows into delegation-year features.

Three steps, each a pure DataFrame transform:

1. `summarise_athlete_years`: one row per (athlete, year), where an athlete is
   a name competing in a given sport.
2. `compute_career_state`: running experience and past-medal totals per
   athlete, scanned in ascending year order.
3. `summarise_delegations`: one row per (NOC, year) with the eight
   predictors and the `Target` share of medalling athletes.
"""
import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from olympics_challenge.config import MEDALS, RAW_COLUMNS
from olympics_challenge.data.io import load_csv, require_columns
from olympics_challenge.errors import DataError

log = logging.getLogger(__name__)

BODY_COLUMNS = ['Age', 'Height', 'Weight']
SEXES = ['F', 'M']


@dataclass
class CareerState:
    """Running totals for one athlete, updated once per Games attended."""

    experience: int = 0
    medals: int = 0
    medalled_last_games: bool = False


def load_raw_athletes(path):
    raw = load_csv(path)
    require_columns(raw, RAW_COLUMNS, what='raw athlete data')
    log.info('Loaded raw athlete rows=%d from %s', len(raw), path)
    return raw


def as_categorical(values, categories):
    return pd.Categorical(values.where(values.isin(categories)), categories=categories)


def summarise_athlete_years(raw):
    require_columns(raw, RAW_COLUMNS, what='raw athlete data')
    df = raw[raw['Season'] == 'Summer'].copy()
    if df.empty:
        raise DataError('Season filter left no Summer rows', field='Season')

    df['Year'] = pd.to_numeric(df['Year'], errors='coerce')
    n_bad = int(df['Year'].isna().sum())
    if n_bad:
        log.warning('Dropping %d rows without a usable Year', n_bad)
        df = df[df['Year'].notna()].copy()
        if df.empty:
            raise DataError('No Summer rows with a usable Year', field='Year')
    df['Year'] = df['Year'].astype(int)

    df['Athlete'] = df['Name'].astype(str) + '_' + df['Sport'].astype(str)
    # values outside the categories (NA, 'No medal', ...) become missing
    df['Sex'] = as_categorical(df['Sex'], SEXES)
    df['Medal'] = as_categorical(df['Medal'], MEDALS)
    df['FemaleSex'] = (df['Sex'] == 'F').astype(float)
    df['MedalAchievement'] = df['Medal'].notna()
    for medal in MEDALS:
        df[f'{medal}Medal'] = df['Medal'] == medal
    for c in BODY_COLUMNS:
        df[c] = pd.to_numeric(df[c], errors='coerce')

    out = df.groupby(['Athlete', 'Year'], sort=True).agg(
        NOC=('NOC', 'first'),
        NumEvents=('Sport', 'size'),
        FemaleSex=('FemaleSex', 'mean'),
        Age=('Age', 'mean'),
        Height=('Height', 'mean'),
        Weight=('Weight', 'mean'),
        MedalAchievement=('MedalAchievement', 'any'),
        GoldMedal=('GoldMedal', 'any'),
        SilverMedal=('SilverMedal', 'any'),
        BronzeMedal=('BronzeMedal', 'any'),
    ).reset_index()
    for c in BODY_COLUMNS:
        out[c] = np.trunc(out[c])
    log.info('Summarised athlete-years rows=%d from Summer rows=%d', len(out), len(df))
    return out


def compute_career_state(athlete_years):
    """Add OlympicExperience, pastAchiev and pastMedals to each athlete-year.

    Rows are visited in ascending year order so every accumulator only ever
    sees strictly earlier Games of the same athlete.
    """
    df = athlete_years.sort_values(['Year', 'Athlete'], kind='mergesort').reset_index(drop=True)
    careers = {}
    experience, past_achiev, past_medals = [], [], []
    for athlete, medalled in zip(df['Athlete'], df['MedalAchievement']):
        state = careers.setdefault(athlete, CareerState())
        past_achiev.append(state.medalled_last_games)
        past_medals.append(state.medals)
        state.experience += 1
        experience.append(state.experience)
        state.medalled_last_games = bool(medalled)
        state.medals += int(bool(medalled))

    df['OlympicExperience'] = experience
    df['pastAchiev'] = past_achiev
    df['pastMedals'] = past_medals
    log.info('Computed career state for %d athletes', len(careers))
    return df


def summarise_delegations(careers):
    out = careers.groupby(['NOC', 'Year'], sort=True).agg(
        NumAthletes=('Athlete', 'size'),
        PctFemale=('FemaleSex', 'mean'),
        AvgAge=('Age', 'mean'),
        AvgHeight=('Height', 'mean'),
        AvgWeight=('Weight', 'mean'),
        AvgOlympicExp=('OlympicExperience', 'mean'),
        PctAchievPrevGames=('pastAchiev', 'mean'),
        PctPastMedals=('pastMedals', 'mean'),
        Target=('MedalAchievement', 'mean'),
    ).reset_index()
    log.info('Summarised delegation-years rows=%d', len(out))
    return out


def build_delegation_dataset(raw):
    athlete_years = summarise_athlete_years(raw)
    careers = compute_career_state(athlete_years)
    return summarise_delegations(careers)
