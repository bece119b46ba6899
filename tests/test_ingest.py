import pandas as pd
import pytest
import requests

from conftest import StubSession, build_raw_frame, to_csv_bytes
from nypd_shooting_pipelines.ingestion.nypd_ingest import (
    fetch_incident_csv,
    load_incidents,
    parse_incident_csv,
)
from nypd_shooting_pipelines.ingestion.schema import (
    CATEGORICAL,
    INCIDENT_SCHEMA,
    columns_with_role,
    validate_schema,
)


def test_parse_keeps_every_cell_as_text(raw_csv):
    df = parse_incident_csv(raw_csv)

    assert len(df) == 9
    assert df["PERP_RACE"].iloc[1] == ""
    assert df["INCIDENT_KEY"].iloc[0] == "100"
    assert df["PRECINCT"].iloc[0] == "44"
    assert not df.isna().any().any()


def test_parse_preserves_row_order_and_columns(raw_incidents, raw_csv):
    df = parse_incident_csv(raw_csv)

    assert list(df.columns) == list(raw_incidents.columns)
    assert df["INCIDENT_KEY"].tolist() == raw_incidents["INCIDENT_KEY"].tolist()


def test_parse_keeps_leading_zeros():
    df = parse_incident_csv(b"INCIDENT_KEY,OCCUR_DATE\n00123,01/01/2020\n")
    assert df["INCIDENT_KEY"].iloc[0] == "00123"


def test_parse_error_propagates():
    with pytest.raises(pd.errors.EmptyDataError):
        parse_incident_csv(b"")


def test_fetch_passes_timeout(raw_csv):
    session = StubSession(raw_csv)

    content = fetch_incident_csv("https://example.test/a.csv", 12.5, session=session)

    assert content == raw_csv
    assert session.calls == [{"url": "https://example.test/a.csv", "timeout": 12.5}]


def test_fetch_http_error_is_not_retried():
    session = StubSession(status_code=503)

    with pytest.raises(requests.HTTPError):
        fetch_incident_csv("https://example.test/a.csv", 5.0, session=session)
    assert len(session.calls) == 1


def test_fetch_connection_error_propagates():
    session = StubSession(exc=requests.ConnectionError("unreachable"))

    with pytest.raises(requests.ConnectionError):
        fetch_incident_csv("https://example.test/a.csv", 5.0, session=session)


def test_validate_schema_reports_missing_columns(raw_incidents):
    with pytest.raises(KeyError, match="PERP_SEX"):
        validate_schema(raw_incidents.drop(columns=["PERP_SEX"]))


def test_validate_schema_strips_identifiers():
    df = build_raw_frame([(" 42 ", "01/01/2020", "BRONX", "18-24", "BLACK", "M")])

    out = validate_schema(df)

    assert out["INCIDENT_KEY"].iloc[0] == "42"
    assert df["INCIDENT_KEY"].iloc[0] == " 42 "


def test_schema_roles():
    assert INCIDENT_SCHEMA["INCIDENT_KEY"] == "identifier"
    assert INCIDENT_SCHEMA["OCCUR_DATE"] == "date"
    assert {"BORO", "PERP_AGE_GROUP", "PERP_RACE", "PERP_SEX"} <= set(columns_with_role(CATEGORICAL))


def test_load_incidents_uses_config(config, raw_csv):
    session = StubSession(raw_csv)

    df = load_incidents(config, session=session)

    assert len(df) == 9
    assert session.calls[0]["url"] == config.dataset_url
    assert session.calls[0]["timeout"] == config.fetch_timeout


def test_load_incidents_rejects_wrong_csv(config):
    session = StubSession(to_csv_bytes(pd.DataFrame({"a": ["1"], "b": ["2"]})))

    with pytest.raises(KeyError):
        load_incidents(config, session=session)
