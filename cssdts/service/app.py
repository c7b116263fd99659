"""FastAPI application exposing declaration generation to editor and bundler plugins."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import RunConfiguration
from ..loader import SourceReadError
from ..orchestrator import DtsCreator
from ..persistence import PersistError


class CreateRequest(BaseModel):
    path: str
    contents: Optional[str] = None
    clear_cache: bool = False
    persist: bool = False


class CreateResponse(BaseModel):
    input_path: str
    output_path: str
    contents: str
    tokens: List[str]
    warnings: List[str]
    written: Optional[bool] = None


class HealthResponse(BaseModel):
    status: str


def _default_creator() -> DtsCreator:
    return DtsCreator(RunConfiguration.from_options())


def create_app(creator_factory: Callable[[], DtsCreator] = _default_creator) -> FastAPI:
    """Create the FastAPI application around a single long-lived creator."""

    app = FastAPI(title="cssdts service", version="1.0.0")
    # One creator per app so the token cache survives between requests.
    app.state.creator = creator_factory()

    async def get_creator() -> DtsCreator:
        return app.state.creator

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/create", response_model=CreateResponse)
    async def create(
        payload: CreateRequest,
        creator: DtsCreator = Depends(get_creator),
    ) -> CreateResponse:
        result = await creator.create(
            payload.path,
            initial_contents=payload.contents,
            clear_cache=payload.clear_cache,
        )
        written: Optional[bool] = None
        if payload.persist:
            outcome = await result.persist()
            written = outcome.written
        return CreateResponse(
            input_path=str(result.input_path),
            output_path=str(result.output_path),
            contents=result.contents,
            tokens=list(result.tokens),
            warnings=list(result.warnings),
            written=written,
        )

    @app.exception_handler(SourceReadError)
    async def source_read_handler(_: Any, exc: SourceReadError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PersistError)
    async def persist_handler(_: Any, exc: PersistError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


def run_service(
    creator_factory: Callable[[], DtsCreator] = _default_creator,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(creator_factory), host=host, port=port)
