# Linear trend of monthly incident counts over time

from typing import Callable, Dict

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression
from rich.console import Console

from nypd_shooting_pipelines.transform.monthly import MONTH_COL, COUNT_COL

console = Console()

EPOCH = pd.Timestamp("1970-01-01")


class InsufficientDataError(ValueError):
    """Raised when the training segment cannot determine a line."""


def days_since_epoch(dates) -> np.ndarray:
    dates = pd.to_datetime(pd.Series(dates))
    return ((dates - EPOCH) / pd.Timedelta(days=1)).to_numpy(dtype=float)


def months_since_epoch(dates) -> np.ndarray:
    dates = pd.to_datetime(pd.Series(dates))
    return ((dates.dt.year - EPOCH.year) * 12 + (dates.dt.month - 1)).to_numpy(dtype=float)


DATE_ENCODERS: Dict[str, Callable] = {
    "days": days_since_epoch,
    "months": months_since_epoch,
}


def get_encoder(name: str) -> Callable:
    if name not in DATE_ENCODERS:
        raise ValueError(f"Unknown date encoding '{name}'. Choose from {sorted(DATE_ENCODERS)}.")
    return DATE_ENCODERS[name]


class TrendModel:
    """
    OLS fit of count = intercept + slope * encode(month_start).

    The same encoding is used for fit and predict.
    """

    def __init__(self, date_encoding: str = "days"):
        self.date_encoding = date_encoding
        self.encode = get_encoder(date_encoding)
        self.regressor = LinearRegression()
        self.intercept_ = None
        self.slope_ = None

    def fit(self, train: pd.DataFrame) -> "TrendModel":
        if len(train) < 2:
            raise InsufficientDataError(
                f"Trend model needs at least 2 training months, got {len(train)}."
            )

        X = self.encode(train[MONTH_COL]).reshape(-1, 1)
        y = train[COUNT_COL].to_numpy(dtype=float)
        self.regressor.fit(X, y)

        self.intercept_ = float(self.regressor.intercept_)
        self.slope_ = float(self.regressor.coef_[0])
        console.print(
            f"[green]Trend fitted[/green] on {len(train):,} months: "
            f"count = {self.intercept_:.4f} + {self.slope_:.6f} × {self.date_encoding} since 1970-01"
        )
        return self

    def predict(self, dates) -> np.ndarray:
        if self.slope_ is None:
            raise RuntimeError("TrendModel.predict called before fit.")
        X = self.encode(dates)
        if len(X) == 0:
            return np.array([], dtype=float)
        return self.regressor.predict(X.reshape(-1, 1))


def fit_trend(train: pd.DataFrame, date_encoding: str = "days") -> TrendModel:
    return TrendModel(date_encoding).fit(train)


__all__ = [
    "InsufficientDataError",
    "days_since_epoch",
    "months_since_epoch",
    "DATE_ENCODERS",
    "get_encoder",
    "TrendModel",
    "fit_trend",
]
