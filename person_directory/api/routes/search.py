"""
Search API routes.
"""
import logging
from fastapi import APIRouter, BackgroundTasks, File, UploadFile, HTTPException, Query

from ...api.schemas import PersonResponse, SearchResultsResponse
from ...core.exceptions import GatewayError, QueryError, UploadError
from ...core.records import IMAGE_QUERY_MARKER, SearchType
from ...services.search_service import SearchService

logger = logging.getLogger(__name__)

def create_search_router(search_service: SearchService) -> APIRouter:
    """Create search router with dependencies."""
    router = APIRouter(prefix="/search", tags=["search"])

    @router.get("/text", response_model=SearchResultsResponse)
    async def search_by_text(
        background_tasks: BackgroundTasks,
        q: str = Query("")
    ):
        """Search persons by name, address, phone number, email or NID number."""
        try:
            results = search_service.search_by_text(q)
        except QueryError as e:
            raise HTTPException(status_code=500, detail=str(e))

        background_tasks.add_task(search_service.log_search, q, SearchType.TEXT)
        return SearchResultsResponse(
            results=[PersonResponse.model_validate(person) for person in results]
        )

    # Plain def: runs in the threadpool while the gateway fetches the
    # temporary image back from this server
    @router.post("/image", response_model=SearchResultsResponse)
    def search_by_image(
        background_tasks: BackgroundTasks,
        file: UploadFile = File(...)
    ):
        """Search persons by uploading an image."""
        try:
            logger.info(f"Image search request received: {file.filename}")
            contents = file.file.read()
            results = search_service.search_by_image(contents, file.filename)
        except UploadError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except GatewayError as e:
            raise HTTPException(status_code=502, detail=str(e))

        background_tasks.add_task(search_service.log_search, IMAGE_QUERY_MARKER, SearchType.IMAGE)
        logger.info(f"Returning {len(results)} persons")
        return SearchResultsResponse(
            results=[PersonResponse.model_validate(person) for person in results]
        )

    return router
