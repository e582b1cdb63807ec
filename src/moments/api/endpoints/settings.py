import logging

from fastapi import APIRouter, Depends

from moments.api.deps import get_moment_service
from moments.schemas.settings import ClusteringSettingsSchema
from moments.services.moment import MomentService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/settings", response_model=ClusteringSettingsSchema)
async def get_settings(service: MomentService = Depends(get_moment_service)):
    return ClusteringSettingsSchema.from_domain(service.settings)


@router.put("/settings", response_model=ClusteringSettingsSchema)
async def update_settings(payload: ClusteringSettingsSchema, service: MomentService = Depends(get_moment_service)):
    logger.info(f"Updating settings: {payload.model_dump()}")
    await service.update_settings(payload.to_domain())
    return ClusteringSettingsSchema.from_domain(service.settings)
