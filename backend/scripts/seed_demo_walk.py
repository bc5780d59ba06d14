from datetime import timedelta
import argparse
import random

from speedmap.core.time_utils import utc_now
from speedmap.db import Base, SessionLocal, engine
from speedmap.models.sample import Sample
from speedmap.models.tracking_session import TrackingSession
from speedmap.models import app_settings, user  # noqa: F401
from speedmap.services.simulator import WalkSimulator


def clear_demo_sessions(db) -> None:
    """Delete earlier simulated sessions so we can reseed cleanly."""
    for row in db.query(TrackingSession).filter(TrackingSession.source == "simulated").all():
        db.delete(row)
    db.commit()


def seed_demo_walk(db, steps: int = 600, seed: int | None = None) -> TrackingSession:
    """Insert one simulated walk (default: 10 minutes at 1 sample/s)."""
    sim = WalkSimulator(rng=random.Random(seed))
    state = sim.start()
    tick = timedelta(seconds=sim.config.update_interval_s)
    when = utc_now() - tick * steps

    session = TrackingSession(title="Demo walk", notes="Simulated around downtown SF.", source="simulated")
    db.add(session)
    db.flush()

    samples = [Sample(
        session_id=session.id,
        latitude=state.lat,
        longitude=state.lng,
        speed_mbps=sim.simulated_speed(state.lat, state.lng),
        recorded_at=when,
    )]
    for _ in range(steps - 1):
        step = sim.step(state)
        when += tick
        samples.append(Sample(
            session_id=session.id,
            latitude=step.lat,
            longitude=step.lng,
            speed_mbps=step.speed_mbps,
            recorded_at=when,
        ))

    session.sim_heading_rad = state.heading_rad
    session.sim_distance_m = state.distance_m
    db.add_all(samples)
    db.commit()

    print(f"Seeded session {session.id}: {len(samples)} samples, {state.distance_m:.0f} m")
    return session


def main():
    parser = argparse.ArgumentParser(description="Seed a simulated walk")
    parser.add_argument("--steps", type=int, default=600)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_demo_sessions(db)
        seed_demo_walk(db, steps=args.steps, seed=args.seed)
    finally:
        db.close()


if __name__ == "__main__":
    main()
