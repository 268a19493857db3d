from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from lunar_api import app, us_week_fields


@pytest.fixture(scope="session")
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "first_year": 1900, "last_year": 2099}


def test_lunar_endpoint(client):
    response = client.get("/lunar", params={"date": "2024-02-10"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["solar_date"] == "2024-02-10"
    assert payload["lunar_year"] == 2024
    assert payload["lunar_month"] == 1
    assert payload["lunar_day"] == 1
    assert payload["lunar_holiday"] == "春节"
    assert payload["cyclical_day"] == "甲辰"
    assert payload["week_of_year"] == 6
    assert payload["day_of_week"] == 7
    assert payload["twenty_eight_star"] == "北方女士蝠-凶"


def test_lunar_endpoint_week_override(client):
    response = client.get(
        "/lunar", params={"date": "2024-02-10", "week_of_year": 1, "day_of_week": 1}
    )
    assert response.status_code == 200
    assert response.json()["twenty_eight_star"] == "东方房日兔-吉"


def test_lunar_endpoint_out_of_range(client):
    response = client.get("/lunar", params={"date": "2101-01-01"})
    assert response.status_code == 400
    payload = response.json()
    assert payload["ok"] is False
    assert payload["code"] == "http_400"


def test_lunar_endpoint_rejects_bad_date(client):
    response = client.get("/lunar", params={"date": "2023-02-29"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_lunar_endpoint_requires_date(client):
    response = client.get("/lunar")
    assert response.status_code == 422
    assert response.json()["ok"] is False


def test_reverse_endpoint(client):
    response = client.get(
        "/lunar/reverse", params={"year": 2017, "month": 6, "day": 1, "leap": "true"}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["solar_date"] == "2017-07-23"
    assert payload["is_leap_month"] is True
    assert payload["lunar_month_name"] == "闰六"


def test_reverse_endpoint_nonexistent_leap_month(client):
    response = client.get(
        "/lunar/reverse", params={"year": 2021, "month": 6, "day": 1, "leap": "true"}
    )
    assert response.status_code == 400
    assert response.json()["code"] == "http_400"


def test_reverse_endpoint_validates_ranges(client):
    response = client.get("/lunar/reverse", params={"year": 2100, "month": 1, "day": 1})
    assert response.status_code == 422


def test_solar_terms_endpoint(client):
    response = client.get("/solar-terms", params={"year": 2024})
    assert response.status_code == 200
    payload = response.json()
    assert payload["year"] == 2024
    assert len(payload["terms"]) == 24
    assert payload["terms"][2] == {"name": "立春", "solar_date": "2024-02-04"}


def test_solar_terms_endpoint_rejects_year(client):
    response = client.get("/solar-terms", params={"year": 1800})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


@pytest.mark.parametrize(
    "value, expected",
    [
        (date(2024, 1, 1), (1, 2)),
        (date(2024, 1, 6), (1, 7)),
        (date(2024, 1, 7), (2, 1)),
        (date(2024, 2, 10), (6, 7)),
        (date(2023, 12, 31), (1, 1)),
        (date(2022, 1, 1), (1, 7)),
        (date(2022, 12, 31), (53, 7)),
    ],
)
def test_us_week_fields(value, expected):
    assert us_week_fields(value) == expected
