import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, settings as default_settings
from app.core.errors import AppError, app_error_handler, request_validation_error_handler
from app.core.logging import setup_logging
from app.db.seed import seed_default_labels
from app.db.session import Database

from app.api.todo.task.routes import router as todo_task_router
from app.api.todo.label.routes import router as todo_label_router
from app.api.health.routes import router as health_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        db = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
        if settings.AUTO_CREATE_SCHEMA:
            db.create_all()
        if settings.SEED_DEFAULT_LABELS:
            session = db.session()
            try:
                seed_default_labels(session)
            finally:
                session.close()
        app.state.db = db
        yield
        # Shutdown
        db.dispose()

    app = FastAPI(
        title="Task Tracker API",
        description="Tasks with reusable labels, filtering and search",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Routers
    app.include_router(todo_task_router, prefix="/api/tasks", tags=["Tasks"])
    app.include_router(todo_label_router, prefix="/api/labels", tags=["Labels"])
    app.include_router(health_router, prefix="/api", tags=["Health"])

    return app


app = create_app()
