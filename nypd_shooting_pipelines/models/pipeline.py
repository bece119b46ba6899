# End-to-end shooting trend pipeline with Rich console output
# To run: python -m nypd_shooting_pipelines.models.pipeline

from contextlib import contextmanager
from typing import Optional

import requests
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from config import PipelineConfig
from nypd_shooting_pipelines.ingestion.ingestion_master import run_ingestion
from nypd_shooting_pipelines.transform.transform_master import run_transforms
from nypd_shooting_pipelines.visualize.descriptive import run_descriptive_views
from nypd_shooting_pipelines.models.split import chronological_split
from nypd_shooting_pipelines.models.trend import InsufficientDataError, fit_trend
from nypd_shooting_pipelines.models.evaluate import evaluate_trend, plot_trend_overlay, report_rmse
from nypd_shooting_pipelines.utils.logging import log_step, show_pipeline_table, clear_pipeline_log

console = Console()

TOTAL_STEPS = 4


def create_header():
    header = """
    ╔═══════════════════════════════════════════════════════════════╗
    ║             NYPD SHOOTING INCIDENT TREND PIPELINE             ║
    ║   Ingest → Clean → Describe → Aggregate → Fit → Evaluate      ║
    ╚═══════════════════════════════════════════════════════════════╝
    """
    return Panel(header, style="bold cyan", border_style="bright_cyan", expand=False)


def create_step_panel(step_num, total_steps, title, status="running"):
    if status == "running":
        emoji, style = "⏳", "bold yellow"
    elif status == "complete":
        emoji, style = "✅", "bold green"
    else:
        emoji, style = "❌", "bold red"
    return Panel(f"{emoji} [bold]{title}[/bold]", title=f"[{style}]Step {step_num}/{total_steps}[/{style}]", border_style=style, expand=False)


def run_trend_stage(monthly, config: PipelineConfig) -> dict:
    """
    Split → fit → evaluate.

    A training segment too short to fit a line is reported, the RMSE line
    reads undefined, and model and rmse stay None; the rest of the pipeline
    is unaffected.
    """
    train_df, test_df = chronological_split(monthly, config.train_fraction)
    log_step("Training months", train_df)
    log_step("Testing months", test_df)

    result = {
        "train": train_df,
        "test": test_df,
        "model": None,
        "predictions": None,
        "rmse": None,
        "overlay": None,
        "rmse_line": None,
        "error": None,
    }

    try:
        model = fit_trend(train_df, config.date_encoding)
    except InsufficientDataError as e:
        console.print(Panel(f"[bold red]Trend model skipped[/bold red]\n\n{e}", border_style="red", expand=False))
        result["error"] = str(e)
        reason = "empty testing segment" if test_df.empty else "too few training months"
        result["rmse_line"] = report_rmse(None, reason)
        return result

    evaluation = evaluate_trend(model, test_df)
    result["model"] = model
    result["predictions"] = evaluation["predictions"]
    result["rmse"] = evaluation["rmse"]
    result["overlay"] = plot_trend_overlay(train_df, evaluation["predictions"], config)
    result["rmse_line"] = report_rmse(evaluation["rmse"])
    return result


@contextmanager
def pipeline_step(step_num: int, title: str, announce: bool):
    if announce:
        console.print(create_step_panel(step_num, TOTAL_STEPS, title, "running"))
    try:
        yield
    except Exception:
        if announce:
            console.print(create_step_panel(step_num, TOTAL_STEPS, f"{title} Failed", "failed"))
        raise
    if announce:
        console.print(create_step_panel(step_num, TOTAL_STEPS, f"{title} Complete", "complete"))
        console.print()


def run_pipeline(
    config: Optional[PipelineConfig] = None,
    session: Optional[requests.Session] = None,
    announce: bool = False,
) -> dict:
    """Run every stage once, in order, and return what each produced."""
    config = config or PipelineConfig()
    clear_pipeline_log()

    with pipeline_step(1, "Ingestion", announce):
        df_raw = run_ingestion(config, session=session)
    with pipeline_step(2, "Transformations", announce):
        transform_output = run_transforms(df_raw, config)
    with pipeline_step(3, "Descriptive Charts", announce):
        views = run_descriptive_views(transform_output["incidents"], config)
    with pipeline_step(4, "Trend Model", announce):
        trend = run_trend_stage(transform_output["monthly"], config)

    return {
        "raw": df_raw,
        "clean": transform_output["clean"],
        "incidents": transform_output["incidents"],
        "monthly": transform_output["monthly"],
        "figures": views["figures"],
        "failed_figures": views["failed"],
        **trend,
    }


def create_results_table(results: dict):
    table = Table(title="📊 Pipeline Results", box=box.ROUNDED, show_header=True, header_style="bold magenta", border_style="bright_magenta")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("Raw Rows", f"{len(results['raw']):,}")
    table.add_row("Unique Incidents", f"{len(results['incidents']):,}")
    table.add_row("Months", f"{len(results['monthly']):,}")
    table.add_row("Train / Test Months", f"{len(results['train']):,} / {len(results['test']):,}")
    model = results["model"]
    if model is not None:
        table.add_row("Intercept", f"{model.intercept_:.4f}")
        table.add_row(f"Slope (per {model.date_encoding[:-1]})", f"{model.slope_:.6f}")
    rmse = results["rmse"]
    table.add_row("RMSE", "undefined" if rmse is None else f"{rmse:.4f}")
    table.add_row("Charts Saved", f"{len(results['figures']) + (results['overlay'] is not None)}")
    if results["failed_figures"]:
        table.add_row("Charts Failed", ", ".join(results["failed_figures"]))
    return table


def main():
    console.print()
    console.print(create_header())
    console.print()
    try:
        results = run_pipeline(announce=True)

        console.print(Panel("[bold green] PIPELINE COMPLETED SUCCESSFULLY [/bold green]", border_style="bright_green", expand=False))
        console.print()
        console.print(create_results_table(results))
        console.print()
        console.print(Panel("[bold cyan] Pipeline Execution Summary[/bold cyan]", border_style="cyan", expand=False))
        show_pipeline_table()
    except Exception as e:
        console.print()
        console.print(Panel(f"[bold red] PIPELINE FAILED [/bold red]\n\n[red]Error:[/red] {str(e)}\n\n[dim]Check logs above for details.[/dim]", border_style="bright_red", title="[bold red]Error[/bold red]", expand=False))
        raise


if __name__ == "__main__":
    main()
