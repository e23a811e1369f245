import logging
import time
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from pydantic import BaseModel, ConfigDict, Field

from leetsrs.application.problem_service import ProblemService
from leetsrs.application.utils.log_files import attach_log_file
from leetsrs.consts import VERSION
from leetsrs.domain.errors import InvalidBackupFormatError, ProblemNotFoundError
from leetsrs.domain.problems.models import AttemptInput, Difficulty
from leetsrs.infrastructure.serialization import problem_to_dict, stats_to_dict

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("leetsrs.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"leetsrs server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("leetsrs server shutting down...")


app = FastAPI(
    title="leetsrs",
    description="Spaced-repetition API for coding-interview practice.",
    version=VERSION,
    lifespan=lifespan,
)


def get_service() -> ProblemService:
    """Build a service from the resolved configuration (overridable in tests)."""
    from leetsrs.application.config import resolve_config
    from leetsrs.application.factory import get_problem_service

    config = resolve_config()
    attach_log_file(config.log_dir)
    return get_problem_service(config)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class ProblemCreateRequest(BaseModel):
    name: str
    url: str = ""
    difficulty: Difficulty
    category: str = ""


class ProblemEditRequest(BaseModel):
    name: str | None = None
    url: str | None = None
    difficulty: Difficulty | None = None
    category: str | None = None


class AttemptRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    # Out-of-range ratings are clamped by the update engine, not rejected.
    difficulty_rating: int = Field(alias="difficultyRating")
    notes: str | None = None


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/problems")
def list_problems(
    view: Literal["active", "due", "mastered", "all"] = "active",
    service: ProblemService = Depends(get_service),
):
    return [problem_to_dict(p) for p in service.list_problems(view)]


@app.post("/problems", status_code=201)
def create_problem(req: ProblemCreateRequest, service: ProblemService = Depends(get_service)):
    problem = service.add_problem(req.name, req.url, req.difficulty, req.category)
    return problem_to_dict(problem)


@app.get("/problems/{problem_id}")
def get_problem(problem_id: str, service: ProblemService = Depends(get_service)):
    try:
        return problem_to_dict(service.get_problem(problem_id))
    except ProblemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.patch("/problems/{problem_id}")
def edit_problem(
    problem_id: str,
    req: ProblemEditRequest,
    service: ProblemService = Depends(get_service),
):
    try:
        problem = service.edit_problem(problem_id, **req.model_dump(exclude_none=True))
    except ProblemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return problem_to_dict(problem)


@app.delete("/problems/{problem_id}", status_code=204)
def delete_problem(problem_id: str, service: ProblemService = Depends(get_service)):
    try:
        service.delete_problem(problem_id)
    except ProblemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=204)


@app.post("/problems/{problem_id}/attempts")
def record_attempt(
    problem_id: str,
    req: AttemptRequest,
    service: ProblemService = Depends(get_service),
):
    """
    Record an attempt and return the rescheduled problem.
    """
    attempt = AttemptInput(
        success=req.success, difficulty_rating=req.difficulty_rating, notes=req.notes
    )
    try:
        problem = service.record_attempt(problem_id, attempt)
    except ProblemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return problem_to_dict(problem)


@app.get("/due")
def due_today(service: ProblemService = Depends(get_service)):
    return [problem_to_dict(p) for p in service.due_today()]


@app.get("/stats")
def get_stats(service: ProblemService = Depends(get_service)):
    return stats_to_dict(service.stats())


@app.get("/export")
def export_backup(service: ProblemService = Depends(get_service)):
    return Response(content=service.export_json(), media_type="application/json")


@app.post("/import")
async def import_backup(request: Request, service: ProblemService = Depends(get_service)):
    """
    Replace the collection with the posted backup document.
    """
    body = (await request.body()).decode("utf-8", errors="replace")
    try:
        count = service.import_json(body)
    except InvalidBackupFormatError as e:
        logger.error(f"Import rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"imported": count}
