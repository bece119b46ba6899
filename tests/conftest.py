import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest
import requests

from config import PipelineConfig, LOCATION_COLUMNS

RAW_COLUMNS = [
    "INCIDENT_KEY",
    "OCCUR_DATE",
    "OCCUR_TIME",
    "BORO",
    "PRECINCT",
    "STATISTICAL_MURDER_FLAG",
    "PERP_AGE_GROUP",
    "PERP_SEX",
    "PERP_RACE",
    "VIC_AGE_GROUP",
    "VIC_SEX",
    "VIC_RACE",
    *LOCATION_COLUMNS,
]

# key, date, boro, perp age, perp race, perp sex
RAW_ROWS = [
    ("100", "03/15/2020", "BRONX", "18-24", "BLACK", "M"),
    ("101", "01/02/2020", "BROOKLYN", "", "", ""),
    ("100", "03/15/2020", "BRONX", "25-44", "WHITE", "M"),
    ("102", "02/30/2020", "QUEENS", "(null)", "UNKNOWN", "U"),
    ("103", "11/07/2020", "MANHATTAN", "UNKNOWN", "null", "NULL"),
    ("104", "02/01/2020", "STATEN ISLAND", "<18", "WHITE HISPANIC", "F"),
    ("105", "01/05/2021", "BRONX", "25-44", "BLACK", "M"),
    ("101", "01/02/2020", "BROOKLYN", "45-64", "BLACK", "M"),
    ("106", "03/28/2020", "BROOKLYN", "18-24", "Null", "M"),
]


def build_raw_frame(rows) -> pd.DataFrame:
    records = []
    for key, date, boro, age, race, sex in rows:
        record = {col: "" for col in RAW_COLUMNS}
        record.update(
            {
                "INCIDENT_KEY": key,
                "OCCUR_DATE": date,
                "OCCUR_TIME": "21:30:00",
                "BORO": boro,
                "PRECINCT": "44",
                "STATISTICAL_MURDER_FLAG": "false",
                "PERP_AGE_GROUP": age,
                "PERP_SEX": sex,
                "PERP_RACE": race,
                "VIC_AGE_GROUP": "25-44",
                "VIC_SEX": "M",
                "VIC_RACE": "BLACK",
                "X_COORD_CD": "1006343",
                "Y_COORD_CD": "234270",
                "Latitude": "40.80",
                "Longitude": "-73.91",
                "Lon_Lat": "POINT (-73.91 40.80)",
                "LOCATION_DESC": "(null)",
            }
        )
        records.append(record)
    return pd.DataFrame(records, columns=RAW_COLUMNS)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")


class StubResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class StubSession:
    """Stands in for the HTTP session; records every GET."""

    def __init__(self, content: bytes = b"", status_code: int = 200, exc: Exception = None):
        self.content = content
        self.status_code = status_code
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append({"url": url, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return StubResponse(self.content, self.status_code)


@pytest.fixture
def config(tmp_path) -> PipelineConfig:
    return PipelineConfig(
        dataset_url="https://example.test/shootings.csv",
        fetch_timeout=5.0,
        figures_dir=tmp_path / "figures",
        figure_dpi=50,
    )


@pytest.fixture
def raw_incidents() -> pd.DataFrame:
    return build_raw_frame(RAW_ROWS)


@pytest.fixture
def raw_csv(raw_incidents) -> bytes:
    return to_csv_bytes(raw_incidents)
