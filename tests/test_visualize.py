import pandas as pd
import pytest

from nypd_shooting_pipelines.transform.cleaning import clean_incidents
from nypd_shooting_pipelines.transform.dedupe import deduplicate_incidents
from nypd_shooting_pipelines.visualize.descriptive import (
    CATEGORICAL_VIEWS,
    YEAR_VIEW,
    build_count_views,
    count_by_category,
    count_by_year,
    run_descriptive_views,
)


@pytest.fixture
def incidents(raw_incidents, config):
    return deduplicate_incidents(clean_incidents(raw_incidents, config), config.id_column)


def test_five_views(incidents):
    views = build_count_views(incidents)
    assert set(views) == {"borough", "perp_age_group", "perp_race", "perp_sex", "year"}


@pytest.mark.parametrize("view", list(CATEGORICAL_VIEWS))
def test_category_counts_sum_to_incidents(incidents, view):
    column, _ = CATEGORICAL_VIEWS[view]
    counts = count_by_category(incidents, column)
    assert counts.sum() == len(incidents) - incidents[column].isna().sum()


def test_blank_race_counted_as_unknown(incidents):
    counts = count_by_category(incidents, "PERP_RACE")

    assert counts["Unknown"] == 3
    assert counts["BLACK"] == 2
    assert "" not in counts.index


def test_borough_counts(incidents):
    counts = count_by_category(incidents, "BORO")
    assert counts.to_dict() == {
        "BRONX": 2,
        "BROOKLYN": 2,
        "MANHATTAN": 1,
        "QUEENS": 1,
        "STATEN ISLAND": 1,
    }


def test_year_counts_ascending_and_skip_null_dates(incidents):
    counts = count_by_year(incidents)

    assert counts.index.tolist() == [2020, 2021]
    assert counts.tolist() == [5, 1]
    assert counts.sum() == incidents["year"].notna().sum()


def test_views_do_not_mutate_table(incidents, config):
    before = incidents.copy()

    build_count_views(incidents)
    run_descriptive_views(incidents, config)

    pd.testing.assert_frame_equal(incidents, before)


def test_charts_saved(incidents, config):
    result = run_descriptive_views(incidents, config)

    assert result["failed"] == []
    assert set(result["figures"]) == set(CATEGORICAL_VIEWS) | {YEAR_VIEW}
    for path in result["figures"].values():
        assert path.exists()
        assert path.parent == config.figures_dir


def test_one_bad_column_does_not_stop_other_charts(incidents, config):
    broken = incidents.drop(columns=["PERP_SEX"])

    result = run_descriptive_views(broken, config)

    assert result["failed"] == ["perp_sex"]
    assert set(result["figures"]) == {"borough", "perp_age_group", "perp_race", "year"}


def test_count_views_raise_without_failure_list(incidents):
    with pytest.raises(KeyError):
        build_count_views(incidents.drop(columns=["BORO"]))


def test_count_views_collect_failures(incidents):
    failed = []

    views = build_count_views(incidents.drop(columns=["BORO"]), failed)

    assert failed == ["borough"]
    assert set(views) == {"perp_age_group", "perp_race", "perp_sex", "year"}


def test_charts_drawn_from_count_views(incidents, config):
    views = build_count_views(incidents)

    result = run_descriptive_views(incidents, config)

    assert set(result["figures"]) == set(views)
