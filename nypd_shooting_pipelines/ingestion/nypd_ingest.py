# Raw data ingestion from NYC Open Data (NYPD Shooting Incident Data)
from io import BytesIO
from typing import Optional

import pandas as pd
import requests
import requests_cache
from rich.console import Console
from rich.panel import Panel

from config import PipelineConfig
from nypd_shooting_pipelines.ingestion.schema import validate_schema
from nypd_shooting_pipelines.utils.logging import log_step

console = Console()


def build_session() -> requests.Session:
    """In-memory cached session: repeated fetches within a run hit the same bytes."""
    return requests_cache.CachedSession(backend="memory", expire_after=-1)


def fetch_incident_csv(
    url: str,
    timeout: float,
    session: Optional[requests.Session] = None,
) -> bytes:
    """GET the raw CSV bytes. Network and HTTP errors propagate, no retries."""
    session = session or build_session()

    console.print(
        Panel(
            f"[bold cyan]Fetching NYPD shooting incidents[/bold cyan]\n{url}\n"
            f"timeout: {timeout:.0f}s",
            border_style="cyan",
        )
    )

    response = session.get(url, timeout=timeout)
    response.raise_for_status()

    console.print(f"[green]Downloaded {len(response.content):,} bytes[/green]")
    return response.content


def parse_incident_csv(content: bytes) -> pd.DataFrame:
    """
    Parse CSV bytes with every cell kept as uninterpreted text.

    Blank cells stay "" (not NaN) so the cleaner sees the raw sentinel values.
    """
    return pd.read_csv(BytesIO(content), dtype=str, keep_default_na=False)


def load_incidents(
    config: PipelineConfig,
    session: Optional[requests.Session] = None,
) -> pd.DataFrame:
    """Fetch → parse → schema check."""
    content = fetch_incident_csv(config.dataset_url, config.fetch_timeout, session=session)
    df = parse_incident_csv(content)
    log_step("Raw incidents loaded", df, {"bytes": len(content)})

    df = validate_schema(df)
    return df


__all__ = ["build_session", "fetch_incident_csv", "parse_incident_csv", "load_incidents"]
