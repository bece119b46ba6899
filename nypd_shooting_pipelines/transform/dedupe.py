# Collapse the cleaned table to one row per incident

import pandas as pd
from rich.console import Console

console = Console()


def deduplicate_incidents(df: pd.DataFrame, id_column: str) -> pd.DataFrame:
    """
    Keep the first row seen for each incident identifier.

    "First" follows the current row order, i.e. the cleaner's date sort.
    """
    if id_column not in df.columns:
        raise KeyError(f"Dedupe key '{id_column}' missing from incident data.")

    total_rows = len(df)
    df_dedup = df.drop_duplicates(subset=[id_column], keep="first").reset_index(drop=True)

    console.print(f"[yellow]Incident rows:[/yellow] {total_rows:,}")
    console.print(f"[red]Removed duplicates:[/red] {total_rows - len(df_dedup):,}")
    return df_dedup


__all__ = ["deduplicate_incidents"]
