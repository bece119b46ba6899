# Descriptive count views and charts over the deduplicated incidents

from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pandas as pd
import seaborn as sns
from matplotlib import pyplot as plt
from rich.console import Console

from config import (
    PipelineConfig,
    BORO_COLUMN,
    PERP_AGE_COLUMN,
    PERP_RACE_COLUMN,
    PERP_SEX_COLUMN,
)

console = Console()

# view name -> (column, chart title)
CATEGORICAL_VIEWS: Dict[str, Tuple[str, str]] = {
    "borough": (BORO_COLUMN, "Shooting Incidents by Borough"),
    "perp_age_group": (PERP_AGE_COLUMN, "Shooting Incidents by Perpetrator Age Group"),
    "perp_race": (PERP_RACE_COLUMN, "Shooting Incidents by Perpetrator Race"),
    "perp_sex": (PERP_SEX_COLUMN, "Shooting Incidents by Perpetrator Sex"),
}
YEAR_VIEW = "year"


def count_by_category(df: pd.DataFrame, column: str) -> pd.Series:
    """Incident count per value of a column, nulls excluded, largest first."""
    counts = df[column].value_counts(dropna=True)
    counts.index.name = column
    return counts.rename("incidents")


def count_by_year(df: pd.DataFrame, year_column: str = "year") -> pd.Series:
    """One point per calendar year present, ascending."""
    years = df[year_column].dropna().astype(int)
    counts = years.value_counts().sort_index()
    counts.index.name = year_column
    return counts.rename("incidents")


def build_count_views(df: pd.DataFrame, failed: Optional[List[str]] = None) -> Dict[str, pd.Series]:
    """
    Count tables for the five descriptive views.

    With `failed` given, a view whose count raises is left out and its name
    appended there; without it the error propagates.
    """
    jobs: List[Tuple[str, Callable[[], pd.Series]]] = [
        (name, partial(count_by_category, df, column))
        for name, (column, _) in CATEGORICAL_VIEWS.items()
    ]
    jobs.append((YEAR_VIEW, partial(count_by_year, df)))

    views: Dict[str, pd.Series] = {}
    for name, job in jobs:
        try:
            views[name] = job()
        except Exception as e:
            if failed is None:
                raise
            failed.append(name)
            console.print(f"[bold red]View '{name}' failed:[/bold red] {e}")
    return views


def save_figure(fig, name: str, config: PipelineConfig) -> Path:
    config.figures_dir.mkdir(parents=True, exist_ok=True)
    path = config.figures_dir / f"{name}.png"
    fig.tight_layout()
    fig.savefig(path, dpi=config.figure_dpi, bbox_inches="tight")
    if config.show_figures:
        plt.show()
    plt.close(fig)
    return path


def plot_category_counts(counts: pd.Series, name: str, title: str, config: PipelineConfig) -> Path:
    with sns.axes_style(config.chart_style):
        fig, ax = plt.subplots(figsize=(10, 5))
        sns.barplot(
            x=counts.index.astype(str),
            y=counts.values,
            color=config.bar_color,
            ax=ax,
        )
        ax.set_title(title)
        ax.set_xlabel(counts.index.name or "")
        ax.set_ylabel("Incidents")
        ax.tick_params(axis="x", rotation=30)
    return save_figure(fig, f"incidents_by_{name}", config)


def plot_year_counts(counts: pd.Series, config: PipelineConfig) -> Path:
    with sns.axes_style(config.chart_style):
        fig, ax = plt.subplots(figsize=(12, 5))
        ax.plot(counts.index, counts.values, marker="o", color=config.line_color)
        ax.set_title("Shooting Incidents by Year")
        ax.set_xlabel("Year")
        ax.set_ylabel("Incidents")
        ax.grid(True, alpha=0.3)
    return save_figure(fig, "incidents_by_year", config)


def run_descriptive_views(df: pd.DataFrame, config: PipelineConfig) -> dict:
    """
    Draw every descriptive chart, one failure does not stop the rest.

    Returns:
        Dict with:
            - figures: {view name: saved PNG path} for charts that rendered
            - failed: view names whose count or chart raised
    """
    console.print("\n[bold cyan]=== DESCRIPTIVE VIEWS ===[/bold cyan]\n")

    failed: List[str] = []
    views = build_count_views(df, failed)

    figures: Dict[str, Path] = {}
    for name, counts in views.items():
        try:
            if name == YEAR_VIEW:
                figures[name] = plot_year_counts(counts, config)
            else:
                figures[name] = plot_category_counts(counts, name, CATEGORICAL_VIEWS[name][1], config)
            console.print(f"[green]Saved chart:[/green] {figures[name].name}")
        except Exception as e:
            plt.close("all")
            failed.append(name)
            console.print(f"[bold red]Chart '{name}' failed:[/bold red] {e}")

    return {"figures": figures, "failed": failed}


__all__ = [
    "CATEGORICAL_VIEWS",
    "YEAR_VIEW",
    "count_by_category",
    "count_by_year",
    "build_count_views",
    "save_figure",
    "plot_category_counts",
    "plot_year_counts",
    "run_descriptive_views",
]
