# Adds calendar features derived from the occurrence date: year, month, weekday, weekend and holiday flags

import pandas as pd
import holidays
from rich.console import Console

from config import PipelineConfig

console = Console()

DAY_LABELS = {0: "Mon", 1: "Tue", 2: "Wed", 3: "Thu", 4: "Fri", 5: "Sat", 6: "Sun"}


def add_temporal_features(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """
    Add calendar fields computed from the parsed occurrence date.

    Rows with a NaT date get nulls in every derived field.
    """
    df = df.copy()
    occurred = pd.to_datetime(df[config.date_column])
    dt = occurred.dt
    missing = occurred.isna()

    df["year"] = dt.year.astype("Int64")
    df["month"] = dt.month.astype("Int64")
    dow = dt.dayofweek
    df["day_of_week"] = dow.map(DAY_LABELS)
    df["is_weekend"] = (dow >= 5).astype("Int64").mask(missing)

    years = sorted(int(y) for y in df["year"].dropna().unique())
    holiday_dates = holidays.country_holidays(
        config.holiday_country, subdiv=config.holiday_subdiv, years=years
    )
    df["is_holiday"] = dt.date.isin(list(holiday_dates)).astype("Int64").mask(missing)

    console.print("[green]Temporal features added.[/green]")
    return df


__all__ = ["add_temporal_features"]
