from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

# Project Root
PROJECT_ROOT = Path(__file__).resolve().parent

# Reports
REPORTS_DIR = PROJECT_ROOT / "reports"
FIGURES_DIR = REPORTS_DIR / "figures"

# Source dataset: NYPD Shooting Incident Data (Historic)
NYPD_SHOOTING_URL = (
    "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"
)
FETCH_TIMEOUT_S = 60.0

# Schema columns
ID_COLUMN = "INCIDENT_KEY"
DATE_COLUMN = "OCCUR_DATE"
DATE_FORMAT = "%m/%d/%Y"

BORO_COLUMN = "BORO"
PERP_AGE_COLUMN = "PERP_AGE_GROUP"
PERP_RACE_COLUMN = "PERP_RACE"
PERP_SEX_COLUMN = "PERP_SEX"

# Geographic / location columns not needed downstream
LOCATION_COLUMNS = (
    "X_COORD_CD",
    "Y_COORD_CD",
    "Latitude",
    "Longitude",
    "Lon_Lat",
    "LOC_OF_OCCUR_DESC",
    "LOC_CLASSFCTN_DESC",
    "LOCATION_DESC",
)

# Cells equal to one of these (case-sensitive) become UNKNOWN_LABEL
MISSING_SENTINELS = ("", "NULL", "null", "(null)", "UNKNOWN")
UNKNOWN_LABEL = "Unknown"

TRAIN_FRACTION = 0.8


@dataclass(frozen=True)
class PipelineConfig:
    """Explicit settings threaded through every pipeline stage."""

    dataset_url: str = NYPD_SHOOTING_URL
    fetch_timeout: float = FETCH_TIMEOUT_S

    id_column: str = ID_COLUMN
    date_column: str = DATE_COLUMN
    date_format: str = DATE_FORMAT
    drop_columns: Tuple[str, ...] = LOCATION_COLUMNS
    missing_sentinels: Tuple[str, ...] = MISSING_SENTINELS
    unknown_label: str = UNKNOWN_LABEL
    holiday_country: str = "US"
    holiday_subdiv: str = "NY"

    # Monthly series / trend model
    fill_missing_months: bool = False
    train_fraction: float = TRAIN_FRACTION
    date_encoding: str = "days"

    # Charts
    figures_dir: Path = FIGURES_DIR
    chart_style: str = "whitegrid"
    bar_color: str = "steelblue"
    line_color: str = "#0B5ED7"
    test_color: str = "#F1B434"
    prediction_color: str = "#D62728"
    figure_dpi: int = 300
    show_figures: bool = False
