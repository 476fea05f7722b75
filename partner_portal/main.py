import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from partner_portal.api.deps import memory_store
from partner_portal.api.errors import register_exception_handlers
from partner_portal.api.middleware import install_request_id_middleware
from partner_portal.api.v1.router import router as v1_router
from partner_portal.config import settings
from partner_portal.scripts.seed_dev_data import seed_dev_data


def configure_logging(level: str | None = None) -> None:
    level = (level or settings.log_level).upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logging.getLogger("portal").setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The process-local store starts with the demo users and sample partner.
    if settings.store_backend == "memory":
        await seed_dev_data(memory_store())
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Partner Onboarding Portal API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_id_middleware(app)
    register_exception_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()
