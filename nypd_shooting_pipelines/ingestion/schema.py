# Column schema for the NYPD shooting incident CSV

from typing import Dict, List
import pandas as pd
from rich.console import Console

from config import (
    ID_COLUMN,
    DATE_COLUMN,
    BORO_COLUMN,
    PERP_AGE_COLUMN,
    PERP_RACE_COLUMN,
    PERP_SEX_COLUMN,
)

console = Console()

IDENTIFIER = "identifier"
DATE = "date"
CATEGORICAL = "categorical"
TEXT = "text"

# Semantic type per column. Columns not listed are carried through as text.
INCIDENT_SCHEMA: Dict[str, str] = {
    ID_COLUMN: IDENTIFIER,
    DATE_COLUMN: DATE,
    "OCCUR_TIME": TEXT,
    BORO_COLUMN: CATEGORICAL,
    "PRECINCT": CATEGORICAL,
    "JURISDICTION_CODE": CATEGORICAL,
    "STATISTICAL_MURDER_FLAG": CATEGORICAL,
    PERP_AGE_COLUMN: CATEGORICAL,
    PERP_SEX_COLUMN: CATEGORICAL,
    PERP_RACE_COLUMN: CATEGORICAL,
    "VIC_AGE_GROUP": CATEGORICAL,
    "VIC_SEX": CATEGORICAL,
    "VIC_RACE": CATEGORICAL,
}

REQUIRED_COLUMNS: List[str] = [
    ID_COLUMN,
    DATE_COLUMN,
    BORO_COLUMN,
    PERP_AGE_COLUMN,
    PERP_RACE_COLUMN,
    PERP_SEX_COLUMN,
]


def columns_with_role(role: str, df: pd.DataFrame = None) -> List[str]:
    """Schema columns of a given role, optionally restricted to those present in df."""
    cols = [c for c, r in INCIDENT_SCHEMA.items() if r == role]
    if df is not None:
        cols = [c for c in cols if c in df.columns]
    return cols


def validate_schema(df: pd.DataFrame) -> pd.DataFrame:
    """
    Check required columns and normalize identifiers at the load boundary.

    Raises KeyError listing every missing required column.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(
            f"Incident CSV is missing required columns: {missing}. "
            f"Found: {list(df.columns)}"
        )

    df = df.copy()
    for col in columns_with_role(IDENTIFIER, df):
        df[col] = df[col].astype(str).str.strip()

    extra = [c for c in df.columns if c not in INCIDENT_SCHEMA]
    if extra:
        console.print(f"[cyan]Columns outside schema (kept as text):[/cyan] {len(extra)}")

    console.print(f"[green]PASS: schema - {len(REQUIRED_COLUMNS)} required columns present.[/green]")
    return df


__all__ = [
    "INCIDENT_SCHEMA",
    "REQUIRED_COLUMNS",
    "IDENTIFIER",
    "DATE",
    "CATEGORICAL",
    "TEXT",
    "columns_with_role",
    "validate_schema",
]
