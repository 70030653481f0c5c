import re
import threading
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.schemas import (
    CreateDocumentRequest,
    ReplaceSelectionsRequest,
    StatusUpdateRequest,
)
from app.logging.logger import Log
from app.registry.exceptions import DocumentNotFoundError
from app.registry.registry import DocumentRegistry

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_DOCUMENT_ID = re.compile(r"[\w-]+", re.ASCII)


def _require_route_id(document_id: str) -> str:
    if not _DOCUMENT_ID.fullmatch(document_id):
        raise StarletteHTTPException(status_code=404)
    return document_id


def create_app(registry: DocumentRegistry) -> FastAPI:
    """Build the HTTP surface around one registry instance.

    Requests reach the registry one at a time through a single lock.
    """
    app = FastAPI(title="Document Registry API", redirect_slashes=False)
    lock = threading.Lock()

    @app.middleware("http")
    async def cors_and_errors(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method == "OPTIONS":
            response: Response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception:
                Log.exception(f"Unhandled error on {request.method} {request.url.path}")
                response = JSONResponse(
                    {"error": "Internal server error"}, status_code=500
                )
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(DocumentNotFoundError)
    async def document_not_found(
        _request: Request, _exc: DocumentNotFoundError
    ) -> JSONResponse:
        return JSONResponse({"error": "Document not found"}, status_code=404)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        Log.warning(f"Rejected body on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse({"error": "Invalid request body"}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def not_found(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return JSONResponse({"error": "Not found"}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.get("/api/documents")
    def list_documents() -> JSONResponse:
        with lock:
            documents = registry.list_documents()
        return JSONResponse([d.to_dict() for d in documents])

    @app.post("/api/documents")
    def create_document(body: CreateDocumentRequest) -> JSONResponse:
        with lock:
            document = registry.create(body.title, body.type, body.urls)
        return JSONResponse(document.to_dict(), status_code=201)

    @app.get("/api/documents/{document_id}")
    def get_document(document_id: str) -> JSONResponse:
        _require_route_id(document_id)
        with lock:
            document = registry.get(document_id)
        return JSONResponse(document.to_dict())

    @app.put("/api/documents/{document_id}/selections")
    def replace_selections(
        document_id: str, body: ReplaceSelectionsRequest
    ) -> JSONResponse:
        _require_route_id(document_id)
        selections = [s.to_selection() for s in body.selections]
        with lock:
            registry.replace_selections(document_id, selections)
        return JSONResponse({"success": True})

    @app.put("/api/documents/{document_id}/status")
    def transition_status(document_id: str, body: StatusUpdateRequest) -> JSONResponse:
        _require_route_id(document_id)
        with lock:
            registry.transition_status(document_id, body.status)
        return JSONResponse({"success": True})

    @app.get("/api/maintenance/consistency")
    def check_consistency() -> JSONResponse:
        with lock:
            report = registry.check()
        return JSONResponse(report.to_dict())

    @app.post("/api/maintenance/reconcile")
    def reconcile() -> JSONResponse:
        with lock:
            report = registry.reconcile()
        return JSONResponse(report.to_dict())

    return app
