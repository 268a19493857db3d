"""FastAPI application exposing lunar calendar conversions and almanac data."""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import date, timedelta
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lunarcal import CalendarError, LunarCalendarDay, solar_terms_of_year
from lunarcal.tables import FIRST_YEAR, LAST_YEAR, verify_year_table
from models import (
    ErrorResponse,
    HealthResponse,
    LunarDayResponse,
    LunarQueryParams,
    ReverseQueryParams,
    SolarTermEntry,
    SolarTermsQueryParams,
    SolarTermsResponse,
)

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("lunar-api")

APP_DESCRIPTION = (
    "Chinese lunar calendar conversion and daily almanac for 1900-2099"
)

DEFAULT_CORS_ORIGINS = "http://localhost:3000"


def _cors_origins() -> List[str]:
    raw = os.environ.get("LUNAR_API_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    verify_year_table()
    LOGGER.info(
        json.dumps({"event": "startup", "first_year": FIRST_YEAR, "last_year": LAST_YEAR})
    )
    yield


app = FastAPI(
    title="Lunar Almanac API",
    description=APP_DESCRIPTION,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def us_week_fields(value: date) -> tuple[int, int]:
    """Return ``(week_of_year, day_of_week)`` with Sunday-first weeks.

    Week 1 is the week containing January 1, and day 1 is Sunday.
    """

    day_of_week = value.isoweekday() % 7 + 1
    january_first = date(value.year, 1, 1)
    first_sunday = january_first - timedelta(days=january_first.isoweekday() % 7)
    week_of_year = (value - first_sunday).days // 7 + 1
    # The last days of December belong to week 1 of the following year.
    next_january_first = date(value.year + 1, 1, 1)
    next_first_sunday = next_january_first - timedelta(days=next_january_first.isoweekday() % 7)
    if value >= next_first_sunday:
        week_of_year = 1
    return week_of_year, day_of_week


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}, ensure_ascii=False))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


def _day_response(day: LunarCalendarDay, week_of_year: int, day_of_week: int) -> LunarDayResponse:
    return LunarDayResponse(
        **day.as_dict(),
        week_of_year=week_of_year,
        twenty_eight_star=day.twenty_eight_star(week_of_year, day_of_week),
    )


def _log_request(event: str, started: float, **fields: object) -> None:
    duration_ms = (time.perf_counter() - started) * 1000.0
    payload = {"event": event, **fields, "duration_ms": round(duration_ms, 3)}
    LOGGER.info(json.dumps(payload, ensure_ascii=False))


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, first_year=FIRST_YEAR, last_year=LAST_YEAR)


@app.get(
    "/lunar",
    response_model=LunarDayResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def lunar_endpoint(params: LunarQueryParams = Depends()) -> LunarDayResponse:
    start_time = time.perf_counter()
    try:
        day = LunarCalendarDay.from_date(params.solar_date)
    except CalendarError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    week_of_year, day_of_week = us_week_fields(params.solar_date)
    if params.week_of_year is not None:
        week_of_year = params.week_of_year
    if params.day_of_week is not None:
        day_of_week = params.day_of_week

    response = _day_response(day, week_of_year, day_of_week)
    _log_request(
        "lunar",
        start_time,
        date=params.solar_date.isoformat(),
        lunar=f"{day.lunar_year}-{day.lunar_month}-{day.lunar_day}",
        leap=day.is_leap_month,
    )
    return response


@app.get(
    "/lunar/reverse",
    response_model=LunarDayResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def reverse_endpoint(params: ReverseQueryParams = Depends()) -> LunarDayResponse:
    start_time = time.perf_counter()
    try:
        day = LunarCalendarDay.from_lunar(params.year, params.month, params.day, params.leap)
    except CalendarError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    week_of_year, day_of_week = us_week_fields(day.solar.to_date())
    response = _day_response(day, week_of_year, day_of_week)
    _log_request(
        "lunar_reverse",
        start_time,
        lunar=f"{params.year}-{params.month}-{params.day}",
        leap=params.leap,
        date=day.solar.isoformat(),
    )
    return response


@app.get(
    "/solar-terms",
    response_model=SolarTermsResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def solar_terms_endpoint(params: SolarTermsQueryParams = Depends()) -> SolarTermsResponse:
    start_time = time.perf_counter()
    try:
        terms = solar_terms_of_year(params.year)
    except CalendarError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    response = SolarTermsResponse(
        year=params.year,
        terms=[SolarTermEntry(name=name, solar_date=when.to_date()) for name, when in terms],
    )
    _log_request("solar_terms", start_time, year=params.year)
    return response
