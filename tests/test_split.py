"""Unit tests for the train / held-out split."""
import pandas as pd
import pytest

from olympics_challenge.data.split import split_dataset
from olympics_challenge.errors import ConfigError


def keys(df):
    return set(zip(df['NOC'], df['Year']))


class TestSplitDataset:
    """Tests for split_dataset."""

    def test_reserved_year_is_excluded(self, delegation_ds):
        train_ds, test_ds = split_dataset(delegation_ds, seed=42)

        assert (train_ds['Year'] < 2016).all()
        assert (test_ds['Year'] < 2016).all()

    def test_test_rows_come_from_two_latest_years(self, delegation_ds):
        _, test_ds = split_dataset(delegation_ds, seed=42)

        assert set(test_ds['Year']) <= {2008, 2012}
        # 20 NOCs x 2 years, floor(0.35 * 40)
        assert len(test_ds) == 14

    def test_partitions_are_disjoint_and_complete(self, delegation_ds):
        train_ds, test_ds = split_dataset(delegation_ds, seed=42)

        competition = delegation_ds[delegation_ds['Year'] < 2016]
        assert keys(train_ds).isdisjoint(keys(test_ds))
        assert keys(train_ds) | keys(test_ds) == keys(competition)
        assert len(train_ds) + len(test_ds) == len(competition)

    def test_earlier_years_are_all_training(self, delegation_ds):
        train_ds, _ = split_dataset(delegation_ds, seed=42)

        early = delegation_ds[delegation_ds['Year'] < 2008]
        assert keys(early) <= keys(train_ds)

    def test_same_seed_same_split(self, delegation_ds):
        a_train, a_test = split_dataset(delegation_ds, seed=123)
        b_train, b_test = split_dataset(delegation_ds.copy(), seed=123)

        pd.testing.assert_frame_equal(a_train, b_train)
        pd.testing.assert_frame_equal(a_test, b_test)
        assert a_test.to_csv(index=False) == b_test.to_csv(index=False)

    def test_different_seed_different_split(self, delegation_ds):
        _, a_test = split_dataset(delegation_ds, seed=1)
        _, b_test = split_dataset(delegation_ds, seed=2)

        assert keys(a_test) != keys(b_test)

    def test_custom_reserved_year(self, delegation_ds):
        train_ds, test_ds = split_dataset(delegation_ds, seed=42, reserved_year=2012)

        assert train_ds['Year'].max() == 2008
        assert set(test_ds['Year']) <= {2004, 2008}

    def test_fraction_above_one_raises(self, delegation_ds):
        with pytest.raises(ConfigError) as exc:
            split_dataset(delegation_ds, test_fraction=1.5)

        assert exc.value.field == 'test_fraction'

    def test_empty_sample_raises(self, delegation_ds):
        with pytest.raises(ConfigError):
            split_dataset(delegation_ds, test_fraction=0.01)

    def test_only_reserved_rows_raises(self, delegation_ds):
        reserved = delegation_ds[delegation_ds['Year'] == 2016]

        with pytest.raises(ConfigError) as exc:
            split_dataset(reserved)

        assert exc.value.field == 'reserved_year'
