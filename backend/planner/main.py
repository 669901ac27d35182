import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException

from planner.api.customers import router as customers_router
from planner.api.schedules import router as schedules_router
from planner.api.targets import router as targets_router
from planner.api.tasks import router as tasks_router
from planner.api.weeks import router as weeks_router
from planner.core.config import settings
from planner.core.validation import ValidationFailed
from planner.db import Base, engine
from planner.models.customer import Customer  # noqa: F401  (import ensures table is registered)
from planner.models.weekly_schedule import WeeklySchedule  # noqa: F401
from planner.models.target import Target  # noqa: F401
from planner.models.task import Task  # noqa: F401


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Weekly Planner")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on startup
Base.metadata.create_all(bind=engine)


def _clean_errors(errors) -> list[dict]:
    # pydantic error dicts can carry exception objects in "ctx"; keep the JSON-safe parts
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in errors
    ]


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": _clean_errors(exc.errors())},
    )


@app.exception_handler(ValidationError)
def handle_model_validation(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": _clean_errors(exc.errors())},
    )


@app.exception_handler(ValidationFailed)
def handle_domain_validation(request: Request, exc: ValidationFailed):
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=400,
        content={"message": exc.message, "errors": exc.errors},
    )


@app.exception_handler(HTTPException)
def handle_http_error(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.include_router(customers_router)
app.include_router(schedules_router)
app.include_router(targets_router)
app.include_router(tasks_router)
app.include_router(weeks_router)


@app.get("/")
def root():
    return {"message": "Weekly planner backend is running"}
