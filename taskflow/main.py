import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from taskflow.app.config import get_settings
from taskflow.app.core.logging_config import configure_logging
from taskflow.app.deps import get_task_store
from taskflow.app.routers import tasks as tasks_router

BASE_DIR = Path(__file__).resolve().parent / "app"
STATIC_DIR = BASE_DIR / "static"

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(
    title=settings.app_title,
    version="1.0.0",
    docs_url="/docs",
    redoc_url=None,
)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.on_event("startup")
def on_startup() -> None:
    # Build the process-wide store before the first request
    get_task_store()
    logger.info("TaskFlow ready backend=%s", settings.task_store_backend)


app.include_router(tasks_router.pages_router)
app.include_router(tasks_router.api_router)


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}
