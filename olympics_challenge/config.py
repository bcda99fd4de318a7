"""Paths, constants and parameter bounds shared by the pipeline."""
from pathlib import Path

# Config
RANDOM_STATE = 42
RESERVED_YEAR = 2016
TEST_FRACTION = 0.35
TEST_YEARS = 2

# Paths (relative to the working directory, overridable from the command line)
BASE_DIR = Path.cwd()
DATA_DIR = BASE_DIR / 'data'
OUT_DIR = BASE_DIR / 'outputs'

# Input files
RAW_ATHLETES = DATA_DIR / 'athlete_events.csv'
SUBMISSIONS = DATA_DIR / 'submissions.csv'

# Output files
DATASET_FN = 'olympics_challenge_dataset.csv'
LB_DATASET_FN = 'olympics_challenge_lb_dataset.csv'
RESULTS_FN = 'submission_results.csv'
LB_RESULTS_FN = 'leaderboard_results.csv'

# Columns
RAW_COLUMNS = ['Name', 'Sex', 'Age', 'Height', 'Weight', 'NOC', 'Year', 'Season', 'Sport', 'Medal']
MEDALS = ['Gold', 'Silver', 'Bronze']
PREDICTORS = [
    'NumAthletes', 'PctFemale', 'AvgAge', 'AvgHeight', 'AvgWeight',
    'AvgOlympicExp', 'PctAchievPrevGames', 'PctPastMedals',
]
TARGET = 'Target'
KEY_COLUMNS = ['NOC', 'Year']

# Hyperparameter bounds: (low, high, step); step None means continuous
MIN_YEAR_BOUNDS = (1984, 2012, 4)
TREES_BOUNDS = (2, 300, 1)
MIN_N_BOUNDS = (1, 100, 1)
LEARN_RATE_BOUNDS = (0.0, 1.0, None)
HIDDEN_UNITS_BOUNDS = (10, 250, 1)
EPOCHS_BOUNDS = (3, 50, 1)
