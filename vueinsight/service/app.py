"""FastAPI application entrypoint for vueinsight service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError
from ..models import Dependency, Event, Prop, Slot, VueComponent
from ..orchestrator import Orchestrator
from ..report import ProjectReport


class MemberPayload(BaseModel):
    name: str


class ComponentPayload(BaseModel):
    name: str
    fullPath: str
    props: List[MemberPayload] = Field(default_factory=list)
    events: List[MemberPayload] = Field(default_factory=list)
    slots: List[MemberPayload] = Field(default_factory=list)

    def to_component(self) -> VueComponent:
        return VueComponent(
            name=self.name,
            full_path=self.fullPath,
            props=[Prop(name=item.name) for item in self.props],
            events=[Event(name=item.name) for item in self.events],
            slots=[Slot(name=item.name) for item in self.slots],
        )


class AnalyzeRequest(BaseModel):
    template: str
    component: ComponentPayload


class AnalyzeResponse(BaseModel):
    fullPath: str
    usedProps: List[int]
    usedEvents: List[int]
    usedSlots: List[int]


class ScanRequest(BaseModel):
    path: str
    useCache: bool = True


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing vueinsight operations."""

    app = FastAPI(title="vueinsight Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # One orchestrator per request.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        component = payload.component.to_component()

        def _run_analyze() -> Dependency:
            return orchestrator.analyze_template(payload.template, component)

        loop = asyncio.get_running_loop()
        dependency = await loop.run_in_executor(None, _run_analyze)
        return AnalyzeResponse(**dependency.to_dict())

    @app.post("/scan")
    async def scan(
        payload: ScanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Dict[str, Any]:
        orchestrator.use_cache = payload.useCache

        def _run_scan() -> ProjectReport:
            return orchestrator.run_analysis(payload.path)

        # run_analysis drives its own event loop, so keep it off this one.
        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run_scan)
        return report.to_dict()

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
