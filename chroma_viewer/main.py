import logging
from fastapi import FastAPI, Request
from fastapi import status as http
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chroma_viewer.api.routers.collections import MISSING_URL, router as collections_router
from chroma_viewer.api.routers.collection_data import MISSING_FIELDS, router as collection_data_router
from chroma_viewer.core.config import settings
from chroma_viewer.core.errors import ChromaConnectionError, MissingFieldError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = FastAPI(title="ChromaDB Viewer")

app.include_router(collections_router, prefix="/collections", tags=["collections"])
app.include_router(collection_data_router, prefix="/collection-data", tags=["collection-data"])

# No body, a non-object body or unparseable JSON means the required fields are missing
REQUIRED_FIELDS_MESSAGES = {
    "/collections": MISSING_URL,
    "/collection-data": MISSING_FIELDS,
}


@app.exception_handler(MissingFieldError)
async def missing_field_handler(request: Request, exc: MissingFieldError):
    return JSONResponse(status_code=http.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = REQUIRED_FIELDS_MESSAGES.get(request.url.path.rstrip("/"), "Invalid request body")
    return JSONResponse(status_code=http.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(ChromaConnectionError)
async def connection_error_handler(request: Request, exc: ChromaConnectionError):
    return JSONResponse(status_code=http.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})
