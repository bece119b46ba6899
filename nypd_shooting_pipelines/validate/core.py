# Core data validation checks for the shooting-incident pipeline

from typing import Dict, Iterable, Tuple

import pandas as pd
import pandas.api.types as ptypes
from rich.console import Console
from rich.table import Table

from config import PipelineConfig

console = Console()


def count_duplicate_ids(df: pd.DataFrame, id_column: str) -> int:
    if id_column not in df.columns:
        return 0
    return int(df.duplicated(subset=[id_column]).sum())


def run_validation_checks(
    df: pd.DataFrame,
    step_name: str,
    config: PipelineConfig,
    expect_unique: bool = False,
) -> Dict[str, object]:
    """
    Key integrity checks:
    - incident identifier uniqueness (FAIL only when expect_unique)
    - occurrence-date completeness once the column is parsed
    - monotone occurrence-date order among non-null dates
    """
    results: Dict[str, object] = {"step": step_name}
    id_col = config.id_column
    date_col = config.date_column

    if id_col in df.columns:
        duplicates = count_duplicate_ids(df, id_col)
        results["duplicate_ids"] = duplicates
        if duplicates == 0:
            console.print(f"[green]PASS: {step_name} - {id_col} unique.[/green]")
        elif expect_unique:
            console.print(
                f"[bold red]FAIL: {step_name} - {duplicates:,} {id_col} duplicates.[/bold red]"
            )
        else:
            console.print(
                f"[yellow]INFO: {step_name} - {duplicates:,} {id_col} duplicates (removed downstream).[/yellow]"
            )

    if date_col in df.columns and ptypes.is_datetime64_any_dtype(df[date_col]):
        missing_pct = float(df[date_col].isna().mean()) if len(df) else 0.0
        results["null_date_share"] = missing_pct
        if missing_pct > 0.01:
            console.print(
                f"[bold red]FAIL: {step_name} - '{date_col}' missing {missing_pct:.2%} (>1%).[/bold red]"
            )
        else:
            console.print(
                f"[green]PASS: {step_name} - '{date_col}' completeness OK ({missing_pct:.2%} missing).[/green]"
            )

        dated = df[date_col].dropna()
        ordered = bool(dated.is_monotonic_increasing)
        results["date_ordered"] = ordered
        if ordered:
            console.print(f"[green]PASS: {step_name} - rows ordered by '{date_col}'.[/green]")
        else:
            console.print(f"[yellow]WARNING: {step_name} - rows not ordered by '{date_col}'.[/yellow]")

    return results


def create_snapshot(df: pd.DataFrame, tokens: Iterable[str]) -> Dict[str, Tuple[int, float]]:
    """
    Per-column count and percentage of cells equal to one of the tokens.
    """
    tokens = list(tokens)
    snapshot: Dict[str, Tuple[int, float]] = {}
    for col in df.columns:
        hits = int(df[col].isin(tokens).sum())
        pct = hits / len(df) * 100 if len(df) else 0.0
        snapshot[col] = (hits, pct)
    return snapshot


def show_missing_comparison(
    before: Dict[str, Tuple[int, float]],
    after: Dict[str, Tuple[int, float]],
    step_name: str,
) -> None:
    """Compare missing-value markers before/after a step (only columns that have any)."""
    table = Table(
        title=f"{step_name} - Missing Data Comparison",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Column", style="cyan")
    table.add_column("Sentinels Before", justify="right", style="red")
    table.add_column("Unknown After", justify="right", style="green")

    for col, (b_count, b_pct) in before.items():
        a_count, a_pct = after.get(col, (0, 0.0))
        if b_count == 0 and a_count == 0:
            continue
        table.add_row(
            col,
            f"{b_count:,} ({b_pct:.1f}%)",
            f"{a_count:,} ({a_pct:.1f}%)",
        )

    console.print(table)


__all__ = [
    "count_duplicate_ids",
    "run_validation_checks",
    "create_snapshot",
    "show_missing_comparison",
]
