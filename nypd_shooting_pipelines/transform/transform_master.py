"""
transform_master.py

Orchestrates the cleaning, deduplication and monthly aggregation steps.
"""

import pandas as pd
from rich.console import Console

from config import PipelineConfig
from nypd_shooting_pipelines.validate.core import run_validation_checks
from nypd_shooting_pipelines.utils.logging import log_step

from nypd_shooting_pipelines.transform.cleaning import clean_incidents
from nypd_shooting_pipelines.transform.dedupe import deduplicate_incidents
from nypd_shooting_pipelines.transform.monthly import COUNT_COL, aggregate_monthly_counts

console = Console()


def run_transforms(df_raw: pd.DataFrame, config: PipelineConfig) -> dict:
    """
    Run the transformation pipeline.

    Parameters:
        df_raw: Raw incident table from ingestion (left untouched)
        config: Pipeline settings

    Returns:
        Dict with:
            - clean: Cleaned table, one row per raw row, sorted by date
            - incidents: Deduplicated incidents
            - monthly: Monthly series (month_start, incident_count)
    """
    console.print("\n[bold cyan]=== TRANSFORM PIPELINE START ===[/bold cyan]\n")

    df_clean = clean_incidents(df_raw, config)
    run_validation_checks(df_clean, "Transform: After cleaning", config)

    df_incidents = deduplicate_incidents(df_clean, config.id_column)
    log_step(
        "Deduplicated incidents",
        df_incidents,
        {"duplicates_removed": len(df_clean) - len(df_incidents)},
    )
    run_validation_checks(df_incidents, "Transform: After dedupe", config, expect_unique=True)

    monthly = aggregate_monthly_counts(df_incidents, config)
    log_step(
        "Monthly series",
        monthly,
        {"dated_incidents": int(monthly[COUNT_COL].sum())},
    )

    console.print("\n[green]Transformation completed successfully.[/green]\n")

    return {
        "clean": df_clean,
        "incidents": df_incidents,
        "monthly": monthly,
    }
