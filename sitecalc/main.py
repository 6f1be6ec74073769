from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .database import engine, Base
from .routers import calculations, prices

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("sitecalc")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)


def _run_migrations():
    """Run pending Alembic migrations on startup.

    Databases created by Base.metadata.create_all() before Alembic was run
    against them have the tables but no alembic_version; those are stamped
    with the base migration first.
    """
    try:
        from alembic.config import Config
        from alembic import command
        from sqlalchemy import inspect

        alembic_ini = os.path.join(os.path.dirname(__file__), "..", "alembic.ini")
        if not os.path.exists(alembic_ini):
            logger.info("alembic.ini not found, skipping migrations")
            return

        alembic_cfg = Config(alembic_ini)
        alembic_cfg.set_main_option("script_location", os.path.join(os.path.dirname(alembic_ini), "alembic"))
        alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

        insp = inspect(engine)
        has_alembic = "alembic_version" in insp.get_table_names()
        has_history = "calculation_history" in insp.get_table_names()

        if not has_alembic and has_history:
            logger.info("Stamping base migration 3b7e51c0d2a4 (tables already exist)")
            command.stamp(alembic_cfg, "3b7e51c0d2a4")

        logger.info("Running pending Alembic migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")

    except Exception as e:
        # Never let migration errors prevent app startup
        logger.warning(f"Alembic migration warning: {e}")

app = FastAPI(
    title=settings.APP_NAME,
    description="Construction material quantity and cost calculators",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculations.router, prefix="/api")
app.include_router(prices.router, prefix="/api")

@app.get("/health")
def health():
    return {"status": "ok", "app": "sitecalc"}


@app.on_event("startup")
def auto_migrate():
    """Run pending Alembic migrations on startup."""
    _run_migrations()


@app.on_event("startup")
def auto_seed():
    """Auto-seed the unit-price book on first run."""
    from .database import SessionLocal
    from .routers.prices import seed_defaults
    db = SessionLocal()
    try:
        added = seed_defaults(db)
        if added:
            logger.info("Seeded %d default prices", added)
    finally:
        db.close()
