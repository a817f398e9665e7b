"""
Image search gateway.

Served as its own application under ``/api``: it is called cross-origin from
the browser and always grants ``*``, independent of the directory API's CORS
settings. Every failure, including an unreadable body, is answered with a
500 ``{error, details}`` body.
"""
import logging
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ...api.schemas import GatewayErrorResponse, ImageSearchRequest, PersonResponse, SearchResultsResponse
from ...services.gateway_service import ImageSearchGateway

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

def create_gateway_router(gateway: ImageSearchGateway) -> APIRouter:
    """Create gateway router with dependencies."""
    router = APIRouter(tags=["gateway"])

    @router.options("/image-search")
    async def image_search_preflight():
        return Response(status_code=204, headers=CORS_HEADERS)

    @router.post(
        "/image-search",
        response_model=SearchResultsResponse,
        responses={500: {"model": GatewayErrorResponse}}
    )
    async def image_search(request: Request):
        """Return candidate persons for ``{"imageUrl": ...}``."""
        try:
            payload = ImageSearchRequest.model_validate(await request.json())
            results = await run_in_threadpool(gateway.search, payload.image_url)
        except Exception as e:
            logger.error(f"Image search gateway request failed: {e}")
            body = GatewayErrorResponse(error="An unexpected error occurred", details=str(e))
            return JSONResponse(status_code=500, content=body.model_dump(), headers=CORS_HEADERS)

        body = SearchResultsResponse(
            results=[PersonResponse.model_validate(person) for person in results]
        )
        return JSONResponse(content=body.model_dump(mode="json"), headers=CORS_HEADERS)

    return router

def create_gateway_app(gateway: ImageSearchGateway) -> FastAPI:
    """Gateway application with open cross-origin access."""
    app = FastAPI(title="Image Search Gateway", docs_url=None, redoc_url=None, openapi_url=None)
    app.include_router(create_gateway_router(gateway))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=ALLOWED_HEADERS,
    )
    return app
