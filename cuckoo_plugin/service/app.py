"""FastAPI application entrypoint for cuckoo-plugin service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..models import CommandPlan
from ..orchestrator import Orchestrator


class PlanRequest(BaseModel):
    package_dir: str
    target: str
    graph: Optional[str] = None
    work_dir: Optional[str] = None
    tools: Dict[str, str] = {}


class CommandPlanModel(BaseModel):
    display_name: str
    executable: str
    arguments: List[str]
    input_files: List[str]
    output_files: List[str]


class PlanResponse(BaseModel):
    commands: List[CommandPlanModel]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing build-command planning."""

    app = FastAPI(title="Cuckoo Plugin Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh orchestrator per request; evaluations share no state.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/plan", response_model=PlanResponse)
    async def plan(
        payload: PlanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> PlanResponse:
        def _run_plan() -> List[CommandPlan]:
            return orchestrator.plan_target(
                payload.package_dir,
                payload.target,
                graph_path=payload.graph,
                work_dir=payload.work_dir,
                tools=payload.tools,
            )

        loop = asyncio.get_running_loop()
        plans = await loop.run_in_executor(None, _run_plan)
        return PlanResponse(
            commands=[CommandPlanModel(**plan.to_dict()) for plan in plans]
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
