"""Query endpoint used by the client widget."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from uniqueness.domain.models import AggregationResult, QueryValues, ResultRecord
from uniqueness.logging import logger
from uniqueness.services.aggregator import ResultAggregator
from uniqueness.web.dependencies import get_aggregator

router = APIRouter(tags=["uniqueness"])


def build_records(result: AggregationResult) -> list[ResultRecord]:
    """Serialize candidates, appending one ``more`` sentinel on overflow."""

    records = [ResultRecord.from_candidate(candidate) for candidate in result.candidates]
    if records and result.has_more:
        records.append(ResultRecord.sentinel())
    return records


@router.get("/search", response_model=list[ResultRecord])
async def search(
    request: Request,
    aggregator: ResultAggregator = Depends(get_aggregator),
) -> list[ResultRecord]:
    values = QueryValues.from_params(request.query_params)
    if not values.searchable:
        return []
    try:
        result = await aggregator.aggregate(values, limit_results=True)
    except Exception:
        logger.exception("search_endpoint_failed")
        return []
    return build_records(result)


__all__ = ["build_records", "router"]
