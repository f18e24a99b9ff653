"""
HTTP API for saved SWeb programs.

Routes:
    GET    /api/apps                          - List applications
    GET    /api/apps/{app_id}                 - Get one application
    POST   /api/apps                          - Create an application
    PUT    /api/apps/{app_id}                 - Partially update an application
    DELETE /api/apps/{app_id}                 - Delete an application
    GET    /api/apps/{app_id}/preview         - Compiled standalone HTML document
    GET    /api/apps/{app_id}/data/{model}    - Runtime data for one model
    POST   /api/data                          - Create a data record
    PUT    /api/data/{data_id}                - Update a data record
    DELETE /api/data/{data_id}                - Delete a data record
    POST   /api/compile                       - Compile source to artifacts
    POST   /api/run                           - Check that source compiles
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..core.compiler import compile_source
from ..core.errors import SWebError
from ..core.options import CompileOptions
from ..generators.document import build_document
from .storage import (
    AppCreate,
    AppRecord,
    AppUpdate,
    DataCreate,
    DataRecord,
    DataUpdate,
    MemStorage,
    Storage,
)

logger = logging.getLogger(__name__)


class SourceRequest(BaseModel):
    """Request body carrying SWeb source text."""

    code: str


def create_app(storage: Storage | None = None, options: CompileOptions | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        storage: Storage backend (default: a fresh MemStorage)
        options: Compiler options used by compile, run and preview

    Returns:
        FastAPI application

    Example:
        >>> app = create_app()
        >>> # Run with uvicorn: uvicorn mymodule:app
    """
    store = storage or MemStorage()
    compile_options = options or CompileOptions()

    app = FastAPI(
        title="SWeb",
        description="Compile and store SWeb applications",
        version=__version__,
    )
    app.state.storage = store

    @app.exception_handler(SWebError)
    async def sweb_error_handler(request: Request, exc: SWebError) -> JSONResponse:
        """Convert compilation failures to 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={"message": str(exc), "kind": type(exc).__name__},
        )

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    @app.get("/api/apps", response_model=list[AppRecord])
    async def list_apps() -> list[AppRecord]:
        return store.list_apps()

    @app.get("/api/apps/{app_id}", response_model=AppRecord)
    async def get_app(app_id: int) -> AppRecord:
        record = store.get_app(app_id)
        if record is None:
            raise HTTPException(status_code=404, detail="App not found")
        return record

    @app.post("/api/apps", response_model=AppRecord, status_code=201)
    async def create_app_route(payload: AppCreate) -> AppRecord:
        return store.create_app(payload)

    @app.put("/api/apps/{app_id}", response_model=AppRecord)
    async def update_app(app_id: int, payload: AppUpdate) -> AppRecord:
        record = store.update_app(app_id, payload)
        if record is None:
            raise HTTPException(status_code=404, detail="App not found")
        return record

    @app.delete("/api/apps/{app_id}", status_code=204)
    async def delete_app(app_id: int) -> Response:
        if not store.delete_app(app_id):
            raise HTTPException(status_code=404, detail="App not found")
        return Response(status_code=204)

    @app.get("/api/apps/{app_id}/preview", response_class=HTMLResponse)
    async def preview_app(app_id: int) -> HTMLResponse:
        """Compile the stored source into a standalone document."""
        record = store.get_app(app_id)
        if record is None:
            raise HTTPException(status_code=404, detail="App not found")
        result = compile_source(record.code, options=compile_options)
        return HTMLResponse(build_document(result, record.name))

    # -------------------------------------------------------------------------
    # Runtime data
    # -------------------------------------------------------------------------

    @app.get("/api/apps/{app_id}/data/{model_name}", response_model=list[DataRecord])
    async def list_data(app_id: int, model_name: str) -> list[DataRecord]:
        return store.list_data(app_id, model_name)

    @app.post("/api/data", response_model=DataRecord, status_code=201)
    async def create_data(payload: DataCreate) -> DataRecord:
        if store.get_app(payload.app_id) is None:
            raise HTTPException(status_code=404, detail="App not found")
        return store.create_data(payload)

    @app.put("/api/data/{data_id}", response_model=DataRecord)
    async def update_data(data_id: int, payload: DataUpdate) -> DataRecord:
        record = store.update_data(data_id, payload)
        if record is None:
            raise HTTPException(status_code=404, detail="Data not found")
        return record

    @app.delete("/api/data/{data_id}", status_code=204)
    async def delete_data(data_id: int) -> Response:
        if not store.delete_data(data_id):
            raise HTTPException(status_code=404, detail="Data not found")
        return Response(status_code=204)

    # -------------------------------------------------------------------------
    # Compilation
    # -------------------------------------------------------------------------

    @app.post("/api/compile")
    async def compile_code(payload: SourceRequest) -> dict[str, Any]:
        """Compile source text; failures become 400 via the SWebError handler."""
        return compile_source(payload.code, options=compile_options).to_dict()

    @app.post("/api/run")
    async def run_code(payload: SourceRequest) -> dict[str, bool]:
        """Verify that source text compiles before the client runs it."""
        if not payload.code.strip():
            raise HTTPException(status_code=400, detail="Code is required")
        compile_source(payload.code, options=compile_options)
        logger.debug("Run request compiled successfully")
        return {"success": True}

    return app


def run_server(
    host: str = "127.0.0.1",
    port: int = 8000,
    storage: Storage | None = None,
    options: CompileOptions | None = None,
) -> None:
    """
    Serve the HTTP API with uvicorn.

    Example:
        >>> run_server()  # Starts server on http://127.0.0.1:8000
    """
    import uvicorn

    app = create_app(storage, options)
    logger.info("Serving SWeb API on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level="info")
