"""FastAPI application entrypoint for jsonshape service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Literal, Optional

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..core.typelang import DEFAULT_INTERFACE_NAME
from ..errors import ClipboardError, ParseError
from ..models import Policy, Span
from ..orchestrator import CompareOutcome, ExtractOutcome, Orchestrator
from ..stores import DisplayOptions


class PolicyModel(BaseModel):
    show_length: bool = True
    show_sample: bool = False
    keys_only: bool = False
    compact: bool = False
    max_depth: int = 0


class SpanModel(BaseModel):
    text: str
    kind: Optional[str] = None


class StatsModel(BaseModel):
    keys: int
    depth: int


class ExtractRequest(BaseModel):
    text: str
    policy: PolicyModel = PolicyModel()
    format: Literal["structure", "typescript"] = "structure"
    interface_name: str = DEFAULT_INTERFACE_NAME


class ExtractResponse(BaseModel):
    text: str
    format: str
    spans: List[SpanModel]
    stats: StatsModel


class DiffRequest(BaseModel):
    a: str
    b: str


class DiffEntryModel(BaseModel):
    path: str
    type: str


class DiffResponse(BaseModel):
    identical: bool
    same: List[DiffEntryModel]
    added: List[DiffEntryModel]
    removed: List[DiffEntryModel]
    report: str


class FormatRequest(BaseModel):
    text: str


class FormatResponse(BaseModel):
    text: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    # No history store: service requests are not recorded.
    return Orchestrator()


def _spans(spans: List[Span]) -> List[Dict[str, Optional[str]]]:
    return [{"text": span.text, "kind": span.kind} for span in spans]


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing jsonshape operations."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    app = FastAPI(title="jsonshape Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    async def _run(func: Callable[[], Any]) -> Any:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:  # pragma: no cover - fallback path when not in async context
            return func()
        return await loop.run_in_executor(None, func)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/extract", response_model=ExtractResponse)
    async def extract(
        payload: ExtractRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ExtractResponse:
        options = DisplayOptions(
            policy=Policy(**payload.policy.model_dump()),
            output_format=payload.format,
        )

        def _run_extract() -> ExtractOutcome:
            return orchestrator.extract(
                payload.text,
                options,
                interface_name=payload.interface_name,
                record=False,
            )

        outcome: ExtractOutcome = await _run(_run_extract)
        return ExtractResponse(
            text=outcome.text,
            format=outcome.output_format,
            spans=_spans(outcome.spans),
            stats={"keys": outcome.stats.keys, "depth": outcome.stats.depth},
        )

    @app.post("/diff", response_model=DiffResponse)
    async def diff(
        payload: DiffRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> DiffResponse:
        def _run_diff() -> CompareOutcome:
            return orchestrator.compare(payload.a, payload.b)

        outcome: CompareOutcome = await _run(_run_diff)
        entries = outcome.result.to_dict()
        return DiffResponse(
            identical=outcome.result.identical,
            same=entries["same"],
            added=entries["added"],
            removed=entries["removed"],
            report=outcome.report,
        )

    @app.post("/format", response_model=FormatResponse)
    async def format_json(
        payload: FormatRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> FormatResponse:
        text = await _run(lambda: orchestrator.format(payload.text))
        return FormatResponse(text=text)

    @app.exception_handler(ParseError)
    async def parse_error_handler(_: Any, exc: ParseError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "line": exc.line, "column": exc.column},
        )

    @app.exception_handler(ClipboardError)
    async def clipboard_error_handler(
        _: Any, exc: ClipboardError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)
