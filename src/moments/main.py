import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from zoneinfo import ZoneInfo

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from moments.api.api import api_router
from moments.core.config import configs
from moments.core.logger import setup_logging
from moments.domain.reviewed_set import ReviewedSet
from moments.domain.storage import get_event_source, get_reviewed_store
from moments.schemas.settings import ClusteringSettingsSchema
from moments.services.moment import MomentService

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting application lifespan...")
    # Clustering runs in a worker thread so enumeration-heavy rebuilds never block requests
    app.state.thread_executor = ThreadPoolExecutor(max_workers=2)

    reviewed_set = await ReviewedSet.load(get_reviewed_store())
    app.state.moment_service = MomentService(
        event_source=get_event_source(),
        reviewed_set=reviewed_set,
        settings=ClusteringSettingsSchema.from_config(configs).to_domain(),
        tz=ZoneInfo(configs.DISPLAY_TIMEZONE),
        executor=app.state.thread_executor,
    )
    await app.state.moment_service.rebuild()
    yield
    logger.info("🛑 Shutting down application lifespan...")
    await reviewed_set.aclose()
    app.state.thread_executor.shutdown(wait=False)


def create_app() -> FastAPI:
    app = FastAPI(
        title=configs.APP_NAME,
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=configs.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=configs.API_V1_STR)

    @app.get("/", tags=["Root"])
    async def read_root():
        return {"message": "Welcome!", "docs_url": "/docs"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # /metrics endpoint
    Instrumentator().instrument(app).expose(app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    is_dev = configs.ENVIRONMENT != "production"

    uvicorn.run(
        "moments.main:app",
        host=configs.APP_HOST,
        port=configs.APP_PORT,
        reload=is_dev,
        log_config=None,
    )
