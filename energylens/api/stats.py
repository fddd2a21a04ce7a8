"""
Consumption statistics API endpoints.

Exposes the analytics engine over HTTP. Each route loads a fresh reading
snapshot, hands it to the pure engine functions and returns both the raw
figure and its display string (``"-"`` when there is no data):

- ``GET /v1/meters/{meter_number}/stats``: single-meter statistics
  (cached in Redis).
- ``GET /v1/meters/{meter_number}/chart``: step-chart series.
- ``GET /v1/consumption``: interval analytics and both projection
  families over the selected meters.
- ``GET /v1/comparison``: cross-meter comparison and percentage breakdown.

Multi-meter routes take repeated ``meter`` query parameters; omitting them
selects every stored meter.

CHANGELOG:
- 2026-10-19: Chart tooltip lookup via ``at`` (STORY-013)
- 2026-10-17: Add chart and comparison routes (STORY-012)
- 2026-10-16: Initial creation (STORY-010)

TODO:
- None
"""

import logging
from collections.abc import Callable

from fastapi import APIRouter, HTTPException, Query
from pydantic import AwareDatetime, BaseModel

from energylens.analytics import chart, comparison, consumption, single_meter
from energylens.analytics.formatting import NO_DATA, format_daily, format_whole
from energylens.analytics.models import IntervalConsumption, Meter
from energylens.api.deps import AppSettings, DbSession
from energylens.cache.redis_client import get_cached_stats, set_cached_stats
from energylens.services.meters import get_meter, list_meters
from energylens.services.readings import load_meter_readings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["stats"])


# ---------------------------------------------------------------------------
# Pydantic response schemas
# ---------------------------------------------------------------------------


class Metric(BaseModel):
    """A figure as the raw number and its display string.

    Attributes:
        value: Raw number, ``None`` when there is not enough data.
        display: Fixed-decimal text, or ``"-"`` when ``value`` is ``None``.
    """

    value: float | None
    display: str


def _metric(value: float | None, formatter: Callable[[float | None], str]) -> Metric:
    return Metric(value=value, display=formatter(value))


class MeterStatsResponse(BaseModel):
    meter_number: str
    reading_count: int
    average_daily_kwh: Metric
    year_end_reading_kwh: Metric
    annual_consumption_kwh: Metric
    monthly_prediction_kwh: Metric


class ChartResponse(BaseModel):
    meter_number: str
    intervals: list[IntervalConsumption]
    step_points: list[chart.StepPoint]
    average_line: chart.AverageLine | None
    tooltip: chart.IntervalTooltip | None = None


class ConsumptionResponse(BaseModel):
    """Interval analytics over the selected meters.

    Attributes:
        meters: Selected meter numbers.
        intervals: Every admitted interval, by start date.
        last_intervals: Latest admitted interval per meter, by end date.
        average_hourly_kwh: Time-weighted all-data average in kWh/h.
        total_kwh: Consumption summed over admitted intervals.
        projected_daily_all_data_kwh: All-data rate x 24.
        projected_yearly_all_data_kwh: All-data rate x 8760.
        projected_daily_last_interval_kwh: Summed latest rates x 24.
        projected_yearly_last_interval_kwh: Summed latest rates x 8760.
    """

    meters: list[str]
    intervals: list[IntervalConsumption]
    last_intervals: list[IntervalConsumption]
    average_hourly_kwh: float | None
    total_kwh: Metric
    projected_daily_all_data_kwh: Metric
    projected_yearly_all_data_kwh: Metric
    projected_daily_last_interval_kwh: Metric
    projected_yearly_last_interval_kwh: Metric


class ConsumptionShare(BaseModel):
    name: str
    percentage: float


class ComparisonResponse(BaseModel):
    meters: list[str]
    total_consumption_kwh: Metric
    average_daily_kwh: Metric
    highest_consuming_meter: str | None
    highest_consuming_meter_display: str
    combined_monthly_prediction_kwh: Metric
    percentages: list[ConsumptionShare]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _require_meter(db: DbSession, meter_number: str) -> Meter:
    meter = await get_meter(db, meter_number)
    if meter is None:
        raise HTTPException(status_code=404, detail=f"Meter '{meter_number}' not found")
    return meter


async def _select_meters(db: DbSession, selected: list[str] | None) -> list[Meter]:
    """Resolve the ``meter`` query parameters against stored meters.

    Raises:
        HTTPException: 404 naming any selected meter that does not exist.
    """
    meters = await list_meters(db)
    if not selected:
        return meters

    by_number = {m.meter_number: m for m in meters}
    unknown = sorted({n for n in selected if n not in by_number})
    if unknown:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown meter(s): {', '.join(unknown)}",
        )
    return [by_number[n] for n in dict.fromkeys(selected)]


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/meters/{meter_number}/stats", response_model=MeterStatsResponse)
async def get_meter_stats(
    meter_number: str,
    db: DbSession,
    settings: AppSettings,
) -> MeterStatsResponse:
    """Single-meter statistics for the detail view.

    Serves from the Redis cache when possible; on a miss computes the
    figures from the meter's readings and caches them.

    Raises:
        HTTPException: 404 if the meter does not exist.
    """
    cached = await get_cached_stats(meter_number)
    if cached is not None:
        return MeterStatsResponse(**cached)

    await _require_meter(db, meter_number)
    snapshot = await load_meter_readings(db, [meter_number])
    readings = snapshot[meter_number]
    now = settings.now()

    response = MeterStatsResponse(
        meter_number=meter_number,
        reading_count=len(readings),
        average_daily_kwh=_metric(
            single_meter.average_daily_consumption(readings), format_daily,
        ),
        year_end_reading_kwh=_metric(
            single_meter.predicted_year_end_reading(readings, now), format_whole,
        ),
        annual_consumption_kwh=_metric(
            single_meter.projected_annual_consumption_from_all_data(readings), format_whole,
        ),
        monthly_prediction_kwh=_metric(
            single_meter.monthly_prediction(readings, now), format_whole,
        ),
    )

    await set_cached_stats(meter_number, response.model_dump(mode="json"))
    return response


@router.get("/meters/{meter_number}/chart", response_model=ChartResponse)
async def get_meter_chart(
    meter_number: str,
    db: DbSession,
    at: AwareDatetime | None = Query(default=None, description="Tooltip position"),
) -> ChartResponse:
    """Step-chart series of a meter's consumption rate.

    With ``at``, the response also carries the tooltip of the first
    interval containing that instant (``null`` when none does).

    Raises:
        HTTPException: 404 if the meter does not exist.
    """
    await _require_meter(db, meter_number)
    snapshot = await load_meter_readings(db, [meter_number])
    readings = snapshot[meter_number]
    intervals = chart.meter_intervals(readings)

    return ChartResponse(
        meter_number=meter_number,
        intervals=intervals,
        step_points=chart.step_points(readings),
        average_line=chart.average_line(readings),
        tooltip=chart.interval_at(intervals, at) if at is not None else None,
    )


@router.get("/consumption", response_model=ConsumptionResponse)
async def get_consumption(
    db: DbSession,
    meter: list[str] | None = Query(default=None, description="Meter number(s)"),
) -> ConsumptionResponse:
    """Interval analytics and projections across the selected meters.

    Raises:
        HTTPException: 404 if a selected meter does not exist.
    """
    meters = await _select_meters(db, meter)
    numbers = [m.meter_number for m in meters]
    snapshot = await load_meter_readings(db, numbers)

    return ConsumptionResponse(
        meters=numbers,
        intervals=consumption.hourly_consumption_per_interval(snapshot),
        last_intervals=consumption.last_interval_per_meter(snapshot),
        average_hourly_kwh=consumption.average_hourly_consumption_all_data(snapshot),
        total_kwh=_metric(consumption.total_consumption_kwh(snapshot), format_whole),
        projected_daily_all_data_kwh=_metric(
            consumption.projected_daily_consumption_all_data(snapshot), format_daily,
        ),
        projected_yearly_all_data_kwh=_metric(
            consumption.projected_yearly_consumption_all_data(snapshot), format_whole,
        ),
        projected_daily_last_interval_kwh=_metric(
            consumption.projected_daily_consumption_from_last_interval(snapshot), format_daily,
        ),
        projected_yearly_last_interval_kwh=_metric(
            consumption.projected_yearly_consumption_from_last_interval(snapshot), format_whole,
        ),
    )


@router.get("/comparison", response_model=ComparisonResponse)
async def get_comparison(
    db: DbSession,
    settings: AppSettings,
    meter: list[str] | None = Query(default=None, description="Meter number(s)"),
) -> ComparisonResponse:
    """Side-by-side comparison of the selected meters.

    Raises:
        HTTPException: 404 if a selected meter does not exist.
    """
    meters = await _select_meters(db, meter)
    numbers = [m.meter_number for m in meters]
    snapshot = await load_meter_readings(db, numbers)

    highest = comparison.find_highest_consuming_meter(snapshot, meters)
    shares = comparison.calculate_consumption_percentages(snapshot, meters)
    logger.debug("Comparison over %d meter(s)", len(numbers))

    return ComparisonResponse(
        meters=numbers,
        total_consumption_kwh=_metric(
            comparison.calculate_total_consumption(snapshot), format_whole,
        ),
        average_daily_kwh=_metric(
            comparison.calculate_average_daily_consumption(snapshot), format_daily,
        ),
        highest_consuming_meter=highest,
        highest_consuming_meter_display=highest if highest is not None else NO_DATA,
        combined_monthly_prediction_kwh=_metric(
            comparison.calculate_combined_monthly_prediction(snapshot, settings.now()),
            format_whole,
        ),
        percentages=[ConsumptionShare(name=n, percentage=p) for n, p in shares],
    )
