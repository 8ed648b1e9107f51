"""
Admin auth endpoints: register, login, me.

Only admins have accounts. Exhibitors use the wizard and estimate endpoints
without logging in. The first admin registers openly; after that only a
signed-in admin can add another.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import create_access_token, get_current_admin, hash_password, security, verify_password
from ..database import get_db

router = APIRouter(prefix="/auth", tags=["auth"])


def _admin_to_response(admin: models.AdminUser) -> dict:
    """Never expose password_hash."""
    return {
        "id": admin.id,
        "email": admin.email,
        "full_name": admin.full_name,
        "is_active": admin.is_active,
        "created_at": admin.created_at.isoformat() if admin.created_at else None,
    }


def _issue_token(admin: models.AdminUser) -> dict:
    return {
        "access_token": create_access_token(admin.id),
        "token_type": "bearer",
        "admin_id": admin.id,
    }


@router.post("/register")
def register(
    request: schemas.RegisterRequest,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
):
    if db.query(models.AdminUser).count() > 0:
        # Raises 401 unless an active admin is making the call
        get_current_admin(credentials, db)

    email = request.email.strip().lower()
    existing = db.query(models.AdminUser).filter(models.AdminUser.email == email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Account with this email already exists",
        )

    admin = models.AdminUser(
        email=email,
        password_hash=hash_password(request.password),
        full_name=request.full_name,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return {**_issue_token(admin), "admin": _admin_to_response(admin)}


@router.post("/login")
def login(request: schemas.LoginRequest, db: Session = Depends(get_db)):
    email = request.email.strip().lower()
    admin = db.query(models.AdminUser).filter(models.AdminUser.email == email).first()

    if not admin or not verify_password(request.password, admin.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    if not admin.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account disabled",
        )

    return {**_issue_token(admin), "admin": _admin_to_response(admin)}


@router.get("/me")
def me(current_admin: models.AdminUser = Depends(get_current_admin)):
    return _admin_to_response(current_admin)
