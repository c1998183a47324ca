from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings
from .database import create_db_engine, create_session_factory, create_tables
from .errors import register_exception_handlers
from .logging_setup import configure_logging
from .routers import auth, tasks


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around one fixed set of settings."""
    settings = settings or Settings.from_env()
    engine = create_db_engine(settings.database_url)

    # Create tables on startup
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        create_tables(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title="Taskboard API",
        description="Personal task management with token authentication",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    @app.get("/")
    def read_root():
        return {"message": "Taskboard API"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
