import logging

from fastapi import APIRouter, Depends, HTTPException, status

from moments.api.deps import get_moment_service
from moments.schemas.event import CuratedUpdateRequest
from moments.services.moment import MomentService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/events/{event_id}/reviewed", status_code=status.HTTP_204_NO_CONTENT)
async def mark_reviewed(event_id: str, service: MomentService = Depends(get_moment_service)):
    service.mark_reviewed(event_id)
    return


@router.put("/events/{event_id}/curated", status_code=status.HTTP_204_NO_CONTENT)
async def set_curated(
    event_id: str,
    payload: CuratedUpdateRequest,
    service: MomentService = Depends(get_moment_service),
):
    updated = await service.set_curated(event_id, payload.is_curated)
    if not updated:
        raise HTTPException(status_code=404, detail="Event not found")
    return
