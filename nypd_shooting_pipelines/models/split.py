# Chronological train/test split of the monthly series

import math
from typing import Tuple

import pandas as pd
from rich.console import Console

from config import TRAIN_FRACTION

console = Console()


def split_index(n_points: int, train_fraction: float = TRAIN_FRACTION) -> int:
    # N=1: the lone point trains, testing stays empty
    if n_points == 1:
        return 1
    return math.floor(train_fraction * n_points)


def chronological_split(
    series: pd.DataFrame,
    train_fraction: float = TRAIN_FRACTION,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Leading floor(train_fraction * N) points train, the rest test.
    A single-point series is all training.

    No shuffling; the series must already be in date order.
    """
    split = split_index(len(series), train_fraction)
    train_df = series.iloc[:split].reset_index(drop=True)
    test_df = series.iloc[split:].reset_index(drop=True)

    console.print(
        f"[cyan]Split:[/cyan] {len(train_df):,} training months, {len(test_df):,} testing months"
    )
    return train_df, test_df


__all__ = ["split_index", "chronological_split"]
