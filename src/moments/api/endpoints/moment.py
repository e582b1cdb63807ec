import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from moments.api.deps import get_moment_service
from moments.core.config import configs
from moments.schemas.moment import (
    MomentResponse,
    MonthSectionResponse,
    ProgressResponse,
    RebuildResponse,
    YearSummaryResponse,
)
from moments.services.moment import MomentService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/moments", response_model=List[MomentResponse])
async def list_moments(service: MomentService = Depends(get_moment_service)):
    return [MomentResponse.from_domain(m) for m in service.catalog.filtered]


@router.get("/moments/suggested", response_model=List[MomentResponse])
async def list_suggested_moments(
    limit: int = Query(default=configs.SUGGESTED_LIMIT, ge=1, le=50),
    service: MomentService = Depends(get_moment_service),
):
    return [MomentResponse.from_domain(m) for m in service.catalog.suggested(limit=limit)]


@router.get("/moments/years", response_model=List[YearSummaryResponse])
async def list_years(service: MomentService = Depends(get_moment_service)):
    catalog = service.catalog
    return [YearSummaryResponse.from_domain(s, catalog.sample_events(s.year)) for s in catalog.year_summaries()]


@router.get("/moments/years/{year}", response_model=List[MonthSectionResponse])
async def list_month_sections(year: int, service: MomentService = Depends(get_moment_service)):
    return [MonthSectionResponse.from_domain(s) for s in service.catalog.month_sections(year)]


@router.get("/moments/progress", response_model=ProgressResponse)
async def get_progress(service: MomentService = Depends(get_moment_service)):
    catalog = service.catalog
    return ProgressResponse(
        total_events=service.total_events,
        moment_count=len(catalog.filtered),
        to_review_count=catalog.to_review_count,
        reviewed_fraction=catalog.reviewed_fraction(service.total_events),
    )


@router.post("/moments/rebuild", response_model=RebuildResponse)
async def rebuild_moments(service: MomentService = Depends(get_moment_service)):
    logger.info("Rebuild requested via API.")
    catalog = await service.rebuild()
    return RebuildResponse(
        total_events=service.total_events,
        moment_count=len(catalog.moments),
        visible_count=len(catalog.filtered),
    )


@router.get("/moments/{moment_id}", response_model=MomentResponse)
async def get_moment(moment_id: str, service: MomentService = Depends(get_moment_service)):
    moment = service.catalog.get(moment_id)
    if moment is None:
        raise HTTPException(status_code=404, detail="Moment not found")
    return MomentResponse.from_domain(moment)
