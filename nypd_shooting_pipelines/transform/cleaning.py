# Core cleaning transformations applied before aggregation
import pandas as pd
from rich.console import Console

from config import PipelineConfig
from nypd_shooting_pipelines.transform.temporal import add_temporal_features
from nypd_shooting_pipelines.utils.logging import log_step
from nypd_shooting_pipelines.validate.core import create_snapshot, show_missing_comparison

console = Console()


def drop_location_columns(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """Drop the geographic/location columns that are present."""
    drop_cols = [c for c in config.drop_columns if c in df.columns]
    if drop_cols:
        console.print(f"[yellow]Dropped location columns:[/yellow] {', '.join(drop_cols)}")
    return df.drop(columns=drop_cols)


def normalize_missing_values(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """
    Recode missing-value sentinels to a single marker.

    Exact, case-sensitive match against config.missing_sentinels (which
    includes the empty string), applied to every column.
    """
    tokens = list(config.missing_sentinels)
    before = create_snapshot(df, tokens)

    df = df.replace(tokens, config.unknown_label)

    after = create_snapshot(df, [config.unknown_label])
    show_missing_comparison(before, after, "Sentinel normalization")
    return df


def parse_occurrence_date(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """
    Parse the occurrence date as month/day/year.

    Values that do not parse (including impossible dates like 02/30/2020)
    become NaT instead of raising.
    """
    console.print(f"\n[bold cyan]Standardizing {config.date_column}...[/bold cyan]")

    df = df.copy()
    if config.date_column not in df.columns:
        raise KeyError(f"'{config.date_column}' column not found in incident data.")

    df[config.date_column] = pd.to_datetime(
        df[config.date_column],
        format=config.date_format,
        errors="coerce",
    )

    total_rows = len(df)
    invalid = int(df[config.date_column].isna().sum())
    console.print(f"[cyan]Rows: {total_rows:,}")
    console.print(f"[green]Parsed dates: {total_rows - invalid:,}")
    console.print(f"[yellow]Unparseable dates kept as NaT: {invalid:,}")
    return df


def sort_by_occurrence(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """
    Stable ascending sort by occurrence date, null dates last.

    Rows sharing a date keep their original relative order, which decides
    the first-seen record during deduplication.
    """
    return (
        df.sort_values(config.date_column, kind="mergesort", na_position="last")
        .reset_index(drop=True)
    )


def clean_incidents(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """
    Cleaning sequence, same row count in and out.

    Steps:
        1. Drop location columns
        2. Normalize missing-value sentinels to "Unknown"
        3. Parse occurrence date (month/day/year, invalid → NaT)
        4. Derive calendar fields
        5. Stable sort by occurrence date, nulls last
    """
    df = drop_location_columns(df, config)
    df = normalize_missing_values(df, config)
    df = parse_occurrence_date(df, config)
    df = add_temporal_features(df, config)
    df = sort_by_occurrence(df, config)
    log_step("Cleaned incidents", df, {"null_dates": int(df[config.date_column].isna().sum())})
    return df


__all__ = [
    "drop_location_columns",
    "normalize_missing_values",
    "parse_occurrence_date",
    "sort_by_occurrence",
    "clean_incidents",
]
