# Evaluate the trend line on the held-out months

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib import pyplot as plt
from sklearn.metrics import mean_squared_error
from rich.console import Console

from config import PipelineConfig
from nypd_shooting_pipelines.models.trend import TrendModel
from nypd_shooting_pipelines.transform.monthly import MONTH_COL, COUNT_COL
from nypd_shooting_pipelines.visualize.descriptive import save_figure

console = Console()

PRED_COL = "predicted"


def compute_rmse(y_true, y_pred) -> Optional[float]:
    """Root-mean-square error, or None when there is nothing to compare."""
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)
    if y_true.size == 0:
        return None
    if y_true.shape != y_pred.shape:
        raise ValueError(f"Shape mismatch: actual {y_true.shape} vs predicted {y_pred.shape}")
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def evaluate_trend(model: TrendModel, test: pd.DataFrame) -> dict:
    """
    Predict every testing month and score against the actual counts.

    Returns:
        Dict with:
            - predictions: month_start, incident_count, predicted
            - rmse: float, or None for an empty testing segment
    """
    predictions = test[[MONTH_COL, COUNT_COL]].copy()
    predictions[PRED_COL] = model.predict(predictions[MONTH_COL])
    rmse = compute_rmse(predictions[COUNT_COL], predictions[PRED_COL])
    return {"predictions": predictions, "rmse": rmse}


def report_rmse(rmse: Optional[float], reason: str = "empty testing segment") -> str:
    """Print and return the `RMSE: <value>` line; `reason` explains an undefined score."""
    if rmse is None:
        line = f"RMSE: undefined ({reason})"
        console.print(f"[yellow]{line}[/yellow]")
    else:
        line = f"RMSE: {rmse:.4f}"
        console.print(f"[bold green]{line}[/bold green]")
    return line


def plot_trend_overlay(
    train: pd.DataFrame,
    predictions: pd.DataFrame,
    config: PipelineConfig,
) -> Path:
    """Training actuals, testing actuals and testing predictions on one date axis."""
    with sns.axes_style(config.chart_style):
        fig, ax = plt.subplots(figsize=(14, 6))
        ax.plot(
            train[MONTH_COL], train[COUNT_COL],
            color=config.line_color, label="Training (actual)",
        )
        ax.plot(
            predictions[MONTH_COL], predictions[COUNT_COL],
            color=config.test_color, marker="o", label="Testing (actual)",
        )
        ax.plot(
            predictions[MONTH_COL], predictions[PRED_COL],
            color=config.prediction_color, linestyle="--", label="Testing (predicted)",
        )
        ax.set_title("Monthly Shooting Incidents: Linear Trend vs Actual")
        ax.set_xlabel("Month")
        ax.set_ylabel("Incidents")
        ax.legend()
        ax.grid(True, alpha=0.3)

    return save_figure(fig, "monthly_trend_overlay", config)


__all__ = ["PRED_COL", "compute_rmse", "evaluate_trend", "report_rmse", "plot_trend_overlay"]
