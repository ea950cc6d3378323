import asyncio
import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import click
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import ExamType, SchedulingConfig
from .conflicts import detect_conflicts
from .exceptions import SchedulerError
from .logging import logger
from .reports import (
    exams_of_type,
    instructor_timetable,
    schedule_statistics,
    student_timetable,
)
from .scheduler import run_scheduling
from .store import DataStore


class ErrorResponse(BaseModel):
    error: str
    message: str


data_store = DataStore(os.environ.get("EXAM_SCHEDULER_DATA_DIR", "data"))


def get_store() -> DataStore:
    return data_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the scheduling thread and the lock that serializes writes."""
    app.state.executor = ThreadPoolExecutor(
        max_workers=1, thread_name_prefix="exam-scheduler"
    )
    app.state.write_lock = asyncio.Lock()
    yield
    app.state.executor.shutdown(wait=True)


app = FastAPI(
    title="Exam Scheduler API",
    description="HTTP API for scheduling exams and auditing schedule conflicts",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchedulerError)
async def scheduler_error_handler(request: Request, exc: SchedulerError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=type(exc).__name__, message=str(exc)).model_dump(),
    )


@app.post("/schedule")
async def schedule_exams(
    request: Request,
    config: Optional[SchedulingConfig] = None,
    store: DataStore = Depends(get_store),
) -> Dict[str, Any]:
    """Run one scheduling pass. Runs are serialized; each works on a fresh snapshot."""
    config = config or SchedulingConfig()
    async with request.app.state.write_lock:
        result = await asyncio.wrap_future(
            request.app.state.executor.submit(run_scheduling, store, config)
        )
    logger.info(
        f"Scheduled {len(result.new_exams)} exams, "
        f"{len(result.unscheduled_courses)} unscheduled"
    )
    return result.as_json()


@app.get("/conflicts")
def get_conflicts(store: DataStore = Depends(get_store)) -> Dict[str, Any]:
    report = detect_conflicts(
        store.get_exams(),
        store.get_courses(),
        store.get_instructors(),
        store.get_rooms(),
        store.get_students(),
    )
    return report.as_json()


@app.get("/exams")
def list_exams(
    exam_type: Optional[ExamType] = None, store: DataStore = Depends(get_store)
) -> list[Dict[str, Any]]:
    exams = store.get_exams()
    if exam_type is not None:
        exams = exams_of_type(exams, exam_type)
    return [e.as_json() for e in exams]


@app.delete("/exams/{exam_id}")
async def delete_exam(
    exam_id: str, request: Request, store: DataStore = Depends(get_store)
) -> Dict[str, Any]:
    async with request.app.state.write_lock:
        removed = await asyncio.wrap_future(
            request.app.state.executor.submit(store.delete_exam, exam_id)
        )
    if removed is None:
        raise HTTPException(status_code=404, detail="Exam not found")
    logger.info(f"Deleted exam {exam_id}")
    return removed.as_json()


@app.delete("/exams")
async def clear_exams(request: Request, store: DataStore = Depends(get_store)):
    async with request.app.state.write_lock:
        count = await asyncio.wrap_future(
            request.app.state.executor.submit(store.clear_exams)
        )
    logger.info(f"Cleared {count} exams")
    return {"deleted": count}


@app.get("/students/{student_id}/exams")
def get_student_exams(
    student_id: str, store: DataStore = Depends(get_store)
) -> list[Dict[str, Any]]:
    student = next((s for s in store.get_students() if s.student_id == student_id), None)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return [e.as_json() for e in student_timetable(student, store.get_exams())]


@app.get("/instructors/{employee_id}/exams")
def get_instructor_exams(
    employee_id: str, store: DataStore = Depends(get_store)
) -> list[Dict[str, Any]]:
    instructors = store.get_instructors()
    instructor = next((i for i in instructors if i.employee_id == employee_id), None)
    if instructor is None:
        raise HTTPException(status_code=404, detail="Instructor not found")
    known_ids = {i.employee_id for i in instructors}
    timetable = instructor_timetable(instructor, store.get_exams(), known_ids)
    return [e.as_json() for e in timetable]


@app.get("/statistics")
def get_statistics(
    exam_type: Optional[ExamType] = None, store: DataStore = Depends(get_store)
) -> Dict[str, Any]:
    return schedule_statistics(store.get_exams(), exam_type).as_json()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@click.command()
@click.option("--port", "-p", default=8000, help="Port to run the server on", type=int)
@click.option(
    "--log-level",
    "-l",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error", "critical"]),
    help="Log level for the server",
)
@click.option("--host", "-h", default="0.0.0.0", help="Host to bind the server to")
@click.option(
    "--data-dir",
    "-d",
    default="data",
    envvar="EXAM_SCHEDULER_DATA_DIR",
    help="Directory holding the JSON collections",
)
def main(port: int, log_level: str, host: str, data_dir: str):
    """Run the Exam Scheduler HTTP API server."""
    import uvicorn

    global data_store
    data_store = DataStore(data_dir)

    logger.info(f"Starting server on {host}:{port} with data in {data_dir}")

    uvicorn.run(app, host=host, port=port, log_level=log_level, reload=False)


if __name__ == "__main__":
    main()
