from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .database import engine, Base
from .routers import auth, estimates, exhibitors, quotes, travel, vendors, wizard

logger = logging.getLogger("expo_estimator")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

# Revision that creates the initial schema
BASE_REVISION = "5b2e9c1d7a40"


def _run_migrations():
    """Run pending Alembic migrations on startup.

    Tables made by create_all() above have no alembic_version row yet, so the
    base revision is stamped first and only later revisions run.
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
        alembic_cfg.set_main_option(
            "script_location", os.path.join(os.path.dirname(__file__), "..", "alembic")
        )

        database_url = os.environ.get("DATABASE_URL")
        if database_url:
            alembic_cfg.set_main_option("sqlalchemy.url", database_url)

        insp = inspect(engine)
        tables = insp.get_table_names()
        if "alembic_version" not in tables and "quotes" in tables:
            logger.info("Stamping base migration %s (tables already exist)", BASE_REVISION)
            command.stamp(alembic_cfg, BASE_REVISION)

        logger.info("Running pending Alembic migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")

    except Exception as e:
        # Never let migration errors prevent app startup
        logger.warning(f"Alembic migration warning: {e}")


app = FastAPI(
    title="Exhibition Cost Estimator",
    description="Stall, travel and logistics cost estimates for trade-show exhibitors",
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
app.include_router(estimates.router, prefix="/api")
app.include_router(wizard.router, prefix="/api")
app.include_router(quotes.router, prefix="/api")
app.include_router(exhibitors.router, prefix="/api")
app.include_router(travel.router, prefix="/api")
app.include_router(vendors.router, prefix="/api")
app.include_router(vendors.admin_router, prefix="/api")
app.include_router(auth.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "expo-estimator"}


@app.on_event("startup")
def auto_migrate():
    """Run pending Alembic migrations on startup."""
    _run_migrations()


@app.on_event("startup")
def auto_seed():
    """Seed the default vendor directory on first run."""
    from .database import SessionLocal
    from .vendor_directory import DEFAULT_VENDORS
    from . import models
    db = SessionLocal()
    try:
        if db.query(models.Vendor).count() == 0:
            for data in DEFAULT_VENDORS:
                db.add(models.Vendor(**data))
            db.commit()
            logger.info("Seeded %d default vendors", len(DEFAULT_VENDORS))
    finally:
        db.close()
