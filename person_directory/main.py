"""
Person Directory API Server
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import Settings, get_settings
from .core.logging_config import setup_logging
from .core.embedders import BaseEmbeddingModel, ModelFactory
from .core.store import DirectoryStore, LocalBlobStore, SqlDirectoryStore
from .services.dashboard_service import DashboardService
from .services.gateway_service import ImageFetcher, ImageSearchGateway
from .services.person_service import PersonService
from .services.search_service import SearchService
from .services.upload_service import UploadPipeline
from .utils.image_utils import fetch_image_bytes
from .api.routes.search import create_search_router
from .api.routes.persons import create_persons_router
from .api.routes.gateway import create_gateway_app
from .api.routes.dashboard import create_dashboard_router

logger = logging.getLogger(__name__)

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DirectoryStore] = None,
    blob_store: Optional[LocalBlobStore] = None,
    embedding_model: Optional[BaseEmbeddingModel] = None,
    fetch_image: Optional[ImageFetcher] = None
) -> FastAPI:
    """
    Build the API application.

    Collaborators not passed in are built from settings.
    """
    settings = settings or get_settings()

    store = store or SqlDirectoryStore.from_url(settings.database_url)
    blob_store = blob_store or LocalBlobStore(
        bucket_dir=str(settings.bucket_dir),
        public_url=settings.public_storage_url
    )
    embedding_model = embedding_model or ModelFactory.create_embedding_model(settings)
    fetch_image = fetch_image or (lambda url: fetch_image_bytes(url, timeout=settings.http_timeout))

    upload_pipeline = UploadPipeline(
        blob_store,
        temp_prefix=settings.temp_prefix,
        max_upload_bytes=settings.max_upload_bytes
    )
    gateway = ImageSearchGateway(
        store,
        embedding_model,
        fetch_image=fetch_image,
        result_limit=settings.gateway_result_limit
    )
    search_service = SearchService(store, upload_pipeline, gateway)
    person_service = PersonService(store, upload_pipeline)
    dashboard_service = DashboardService(store, recent_limit=settings.recent_searches_limit)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Person Directory API startup complete")
        yield
        logger.info("API shutting down")

    api = FastAPI(
        title="Person Directory API",
        description="Directory lookup by text and image",
        version=__version__
    )

    api.include_router(create_search_router(search_service))
    api.include_router(create_persons_router(person_service))
    api.include_router(create_dashboard_router(dashboard_service))

    # Uploaded photos are served from the bucket directory
    api.mount(
        f"/storage/{settings.photo_bucket}",
        StaticFiles(directory=str(blob_store.bucket_dir)),
        name="storage"
    )
    logger.info(f"Mounted blob storage from: {blob_store.bucket_dir}")

    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @api.get("/")
    async def root():
        return {"message": "Person Directory API", "status": "running", "version": __version__}

    @api.get("/health")
    async def health():
        return {"status": "healthy"}

    # The gateway keeps its own open CORS policy, so it is mounted beside
    # the directory API rather than inside it
    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/api", create_gateway_app(gateway), name="gateway")
    app.mount("/", api, name="directory")

    return app

def run():
    """Console entry point."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # uvicorn logs through the handlers installed above
        reload=False
    )


if __name__ == "__main__":
    run()
