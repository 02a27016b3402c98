import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api import admin as admin_api
from .api import auth as auth_api
from .api import job as job_api
from .config import Settings
from .database import JsonFileStore
from .seed import sample_job_records
from .services.identity import IdentityService
from .services.job_catalog import JobCatalog
from .services.sessions import SessionTokens
from .utils.error_handlers import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API with its services wired from ``settings``.

    Each service owns its collection; nothing is shared through module globals, so
    tests can build as many independent apps as they like.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    seeds = {"jobs": sample_job_records()} if settings.seed_sample_jobs else {}
    store = JsonFileStore(settings.data_dir, seeds=seeds)
    identity = IdentityService(
        store,
        admin_username=settings.admin_username,
        admin_email=settings.admin_email,
        admin_password=settings.admin_password,
        admin_name=settings.admin_name,
        bcrypt_rounds=settings.bcrypt_rounds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        identity.ensure_bootstrap_admin()
        logger.info(
            "Job board API ready (environment=%s, data_dir=%s)",
            settings.environment,
            settings.data_dir,
        )
        yield

    app = FastAPI(title="Job Board API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.identity = identity
    app.state.tokens = SessionTokens(
        settings.secret_key,
        admin_expire_minutes=settings.admin_token_expire_minutes,
        user_expire_minutes=settings.user_token_expire_minutes,
    )
    app.state.catalog = JobCatalog(store)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_api.router)
    app.include_router(admin_api.router)
    app.include_router(job_api.router)

    @app.get("/api/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "OK",
            "message": "Server is running",
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # Mounted last so the API routes above take precedence.
    if settings.frontend_dir:
        frontend = Path(settings.frontend_dir)
        if frontend.is_dir():
            app.mount("/", StaticFiles(directory=frontend, html=True), name="frontend")
        else:
            logger.warning("FRONTEND_DIR %s is not a directory; static files disabled", frontend)

    return app


app = create_app()
