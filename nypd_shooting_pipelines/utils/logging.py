# Step logging for the shooting-incident pipeline.

from typing import List, Dict, Any, Optional
import pandas as pd
from rich.console import Console
from rich.table import Table

console = Console()

pipeline_log: List[Dict[str, Any]] = []


def format_details(details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return ""
    return ", ".join(
        f"{key}={value:,}" if isinstance(value, int) else f"{key}={value}"
        for key, value in details.items()
    )


def log_step(step_name: str, df: Any, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Record one pipeline step: its table shape plus step-specific counts.

    Parameters:
        step_name: Description of the pipeline step
        df: DataFrame produced by the step (anything else is logged as N/A)
        details: Extra counts worth keeping, e.g. null dates or duplicates dropped
    """
    if isinstance(df, pd.DataFrame):
        rows: Any = int(df.shape[0])
        cols: Any = int(df.shape[1])
    else:
        rows = cols = "N/A"

    entry = {"step": step_name, "rows": rows, "cols": cols, "details": dict(details or {})}
    pipeline_log.append(entry)

    shape = f"{rows:,} x {cols}" if isinstance(rows, int) else "N/A x N/A"
    notes = format_details(entry["details"])
    suffix = f" [dim]({notes})[/dim]" if notes else ""
    console.print(f"[green]{step_name}[/green] [cyan]shape: {shape}[/cyan]{suffix}")


def find_step(step_name: str) -> Optional[Dict[str, Any]]:
    """Most recent log entry with this name, or None."""
    for entry in reversed(pipeline_log):
        if entry["step"] == step_name:
            return entry
    return None


def show_pipeline_table() -> None:
    """Pretty-print pipeline log as a table."""
    if not pipeline_log:
        console.print("[red]No pipeline steps logged yet.[/red]")
        return

    table = Table(title="Shooting Pipeline Summary", show_lines=True)
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Rows", style="green")
    table.add_column("Cols", style="yellow")
    table.add_column("Notes", style="magenta")

    for entry in pipeline_log:
        rows_str = f"{entry['rows']:,}" if isinstance(entry["rows"], int) else str(entry["rows"])
        table.add_row(entry["step"], rows_str, str(entry["cols"]), format_details(entry["details"]))

    console.print(table)


def clear_pipeline_log() -> None:
    """Clear the pipeline log."""
    pipeline_log.clear()
    console.print("[yellow]Pipeline log cleared.[/yellow]")


__all__ = ["log_step", "find_step", "show_pipeline_table", "clear_pipeline_log", "pipeline_log"]
