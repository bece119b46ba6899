# nypd_shooting_pipelines/ingestion/ingestion_master.py
from typing import Optional

import pandas as pd
import requests
from rich.console import Console

from config import PipelineConfig
from nypd_shooting_pipelines.ingestion.nypd_ingest import load_incidents
from nypd_shooting_pipelines.validate.core import run_validation_checks

console = Console()


def run_ingestion(
    config: PipelineConfig,
    session: Optional[requests.Session] = None,
) -> pd.DataFrame:
    console.print("\n[bold cyan]=== INGESTION PIPELINE START ===[/bold cyan]\n")

    df_raw = load_incidents(config, session=session)
    run_validation_checks(df_raw, "Ingestion → Raw incidents", config)

    console.print("\n[green]✓ Ingestion completed successfully.[/green]\n")
    return df_raw
