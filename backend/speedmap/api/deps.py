from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from speedmap.core.projection import MapSurface
from speedmap.db import get_db
from speedmap.models.user import User
from speedmap.services.auth import AuthError, user_for_token
from speedmap.services.simulator import WalkSimulator
from speedmap.services.speed_probe import SpeedEstimator


# Collaborators are built once in main.py and live on app.state
def get_surface(request: Request) -> MapSurface:
    return request.app.state.map_surface


def get_estimator(request: Request) -> SpeedEstimator:
    return request.app.state.speed_estimator


def get_simulator(request: Request) -> WalkSimulator:
    return request.app.state.simulator


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    token = _bearer(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    try:
        return user_for_token(db, token)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


def optional_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like current_user, but anonymous requests are fine. A bad token is still a 401."""
    if _bearer(authorization) is None:
        return None
    return current_user(authorization, db)
