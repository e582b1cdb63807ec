from fastapi import APIRouter

from moments.api.endpoints import event, moment, settings

api_router = APIRouter()
api_router.include_router(moment.router, tags=["Moments"])
api_router.include_router(event.router, tags=["Events"])
api_router.include_router(settings.router, tags=["Settings"])
