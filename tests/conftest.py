"""Shared synthetic fixtures for the pipeline tests."""
import numpy as np
import pandas as pd
import pytest

YEARS = list(range(1984, 2017, 4))
NOCS = [f'N{i:02d}' for i in range(20)]


@pytest.fixture
def make_raw():
    """Factory for raw athlete-event frames in the Kaggle column layout."""

    def _make(rows):
        base = {
            'Name': 'Athlete', 'Sex': 'M', 'Age': 25, 'Height': 180, 'Weight': 75,
            'NOC': 'AAA', 'Year': 2000, 'Season': 'Summer', 'Sport': 'Swimming', 'Medal': None,
        }
        return pd.DataFrame([{**base, **r} for r in rows])

    return _make


@pytest.fixture
def random_raw():
    """A few hundred raw rows spread over 1984-2016, with gaps and missing values."""
    rng = np.random.default_rng(7)
    rows = []
    sports = ['Swimming', 'Athletics', 'Rowing', 'Judo']
    for i in range(120):
        noc = NOCS[i % 8]
        sport = sports[i % len(sports)]
        sex = 'F' if i % 3 == 0 else 'M'
        years = sorted(rng.choice(YEARS, size=int(rng.integers(1, 5)), replace=False))
        for year in years:
            for _ in range(int(rng.integers(1, 4))):
                draw = rng.random()
                medal = 'Gold' if draw < 0.05 else 'Silver' if draw < 0.1 else 'Bronze' if draw < 0.15 \
                    else 'No medal' if draw < 0.3 else None
                rows.append({
                    'Name': f'Athlete {i}', 'Sex': sex,
                    'Age': None if rng.random() < 0.1 else int(rng.integers(16, 40)),
                    'Height': None if rng.random() < 0.2 else int(rng.integers(150, 205)),
                    'Weight': None if rng.random() < 0.2 else int(rng.integers(45, 120)),
                    'NOC': noc, 'Year': int(year), 'Season': 'Summer', 'Sport': sport, 'Medal': medal,
                })
    rows.append({'Name': 'Skier', 'Sex': 'F', 'Age': 22, 'Height': 170, 'Weight': 60, 'NOC': 'N00',
                 'Year': 1994, 'Season': 'Winter', 'Sport': 'Alpine Skiing', 'Medal': 'Gold'})
    return pd.DataFrame(rows)


@pytest.fixture
def delegation_ds():
    """Delegation-year rows for 20 NOCs over 1984-2016 with a learnable target."""
    rng = np.random.default_rng(0)
    rows = []
    for year in YEARS:
        for noc in NOCS:
            n = int(rng.integers(1, 300))
            prev = rng.uniform(0, 0.3)
            rows.append({
                'NOC': noc,
                'Year': year,
                'NumAthletes': n,
                'PctFemale': rng.uniform(0, 0.6),
                'AvgAge': rng.uniform(20, 30),
                'AvgHeight': rng.uniform(165, 185),
                'AvgWeight': rng.uniform(60, 80),
                'AvgOlympicExp': rng.uniform(1, 2.5),
                'PctAchievPrevGames': prev,
                'PctPastMedals': prev + rng.uniform(0, 0.3),
                'Target': float(np.clip(0.5 * prev + n / 1000 + rng.normal(0, 0.02), 0, 1)),
            })
    return pd.DataFrame(rows)
