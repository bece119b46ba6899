# Monthly incident counts (the series the trend model is fit on)

import pandas as pd
from rich.console import Console

from config import PipelineConfig

console = Console()

MONTH_COL = "month_start"
COUNT_COL = "incident_count"


def empty_monthly_series() -> pd.DataFrame:
    return pd.DataFrame(
        {
            MONTH_COL: pd.Series(dtype="datetime64[ns]"),
            COUNT_COL: pd.Series(dtype="int64"),
        }
    )


def fill_month_gaps(monthly: pd.DataFrame) -> pd.DataFrame:
    """Reindex to every month between the first and last, missing months counted as 0."""
    if monthly.empty:
        return monthly
    all_months = pd.date_range(monthly[MONTH_COL].min(), monthly[MONTH_COL].max(), freq="MS")
    filled = (
        monthly.set_index(MONTH_COL)
        .reindex(all_months, fill_value=0)
        .rename_axis(MONTH_COL)
        .reset_index()
    )
    added = len(filled) - len(monthly)
    if added:
        console.print(f"[yellow]Zero-filled months:[/yellow] {added:,}")
    return filled


def aggregate_monthly_counts(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """
    Count deduplicated incidents per calendar month.

    Rows without an occurrence date are left out of the series. The result
    is keyed by the first day of each month and sorted by it.
    """
    dated = df.dropna(subset=[config.date_column])
    skipped = len(df) - len(dated)
    if skipped:
        console.print(f"[yellow]Rows without a date excluded from monthly series:[/yellow] {skipped:,}")

    if dated.empty:
        return empty_monthly_series()

    keys = pd.DataFrame(
        {
            "year": dated[config.date_column].dt.year.astype(int),
            "month": dated[config.date_column].dt.month.astype(int),
        }
    )
    counts = keys.groupby(["year", "month"]).size().reset_index(name=COUNT_COL)
    counts[MONTH_COL] = pd.to_datetime(counts[["year", "month"]].assign(day=1))

    monthly = (
        counts[[MONTH_COL, COUNT_COL]]
        .sort_values(MONTH_COL)
        .reset_index(drop=True)
    )
    monthly[COUNT_COL] = monthly[COUNT_COL].astype("int64")

    if config.fill_missing_months:
        monthly = fill_month_gaps(monthly)

    console.print(
        f"[cyan]Monthly series:[/cyan] {len(monthly):,} months "
        f"({monthly[MONTH_COL].min():%Y-%m} → {monthly[MONTH_COL].max():%Y-%m})"
    )
    return monthly


__all__ = ["MONTH_COL", "COUNT_COL", "empty_monthly_series", "fill_month_gaps", "aggregate_monthly_counts"]
