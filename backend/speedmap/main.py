import logging
import random

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from speedmap.api.auth import router as auth_router
from speedmap.api.heatmap import router as heatmap_router
from speedmap.api.sessions import router as sessions_router
from speedmap.api.settings import router as settings_router
from speedmap.api.speed import router as speed_router
from speedmap.db import Base, engine, SessionLocal
from speedmap.models import app_settings, sample, tracking_session, user  # noqa: F401  (import ensures tables are registered)
from speedmap.core.config import settings
from speedmap.core.logging import setup_logging
from speedmap.core.projection import surface_for
from speedmap.services.auth import ensure_test_user
from speedmap.services.simulator import WalkSimulator
from speedmap.services.speed_probe import EndpointRotator, LatencyProber, SpeedEstimator


setup_logging(settings.log_level)
logger = logging.getLogger("speedmap")

app = FastAPI(title="speedmap", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (sessions, samples, ...) on startup
Base.metadata.create_all(bind=engine)

if settings.seed_test_user:
    _db = SessionLocal()
    try:
        ensure_test_user(_db)
    finally:
        _db.close()

# Collaborators chosen once here and injected into routes via speedmap.api.deps
app.state.map_surface = surface_for(settings.map_surface)
app.state.speed_estimator = SpeedEstimator(
    LatencyProber(EndpointRotator(settings.probe_endpoints), timeout_s=settings.probe_timeout_s)
)
app.state.simulator = WalkSimulator(rng=random.Random(settings.simulator_seed))
logger.info("Using %s map surface", app.state.map_surface.name)

app.include_router(sessions_router)
app.include_router(heatmap_router)
app.include_router(speed_router)
app.include_router(settings_router)
app.include_router(auth_router)


@app.get("/")
def root():
    return {"message": "speedmap backend is running"}


@app.get("/health")
def health():
    return {"status": "ok"}
