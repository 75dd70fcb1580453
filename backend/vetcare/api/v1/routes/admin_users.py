"""Module: admin_users."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_db, parse_uuid, require_admin
from vetcare.api.v1.serializers import as_user_payload
from vetcare.core.pagination import ListQuery, apply_search, list_query, page_response, paginate
from vetcare.core.security import hash_password, tokens
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.user import User, UserRole
from vetcare.schemas.common import Message, Paginated
from vetcare.schemas.user import UserCreate, UserOut, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def email_taken(db: Session, email: str) -> bool:
    return db.execute(select(User.user_id).where(func.lower(User.email) == email.lower())).first() is not None


def _admin_count(db: Session) -> int:
    return db.execute(select(func.count(User.user_id)).where(User.role == UserRole.ADMIN)).scalar_one()


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.get(User, parse_uuid(user_id, "user_id"))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _user_out(db: Session, user: User) -> UserOut:
    clinic = db.get(Clinic, user.clinic_id) if user.clinic_id else None
    return as_user_payload(user, clinic)


# Endpoint: handles HTTP request/response mapping for this route.
@router.post("", response_model=UserOut, status_code=201, summary="Create user")
def create_user(payload: UserCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    if email_taken(db, payload.email):
        raise HTTPException(status_code=409, detail="User with this email already exists")
    if payload.clinic_id and not db.get(Clinic, payload.clinic_id):
        raise HTTPException(status_code=400, detail="Clinic not found")

    user = User(
        email=payload.email,
        password=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
        is_active=payload.is_active,
        clinic_id=payload.clinic_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User %s (%s) created by admin %s", user.user_id, user.role, admin.user_id)
    return _user_out(db, user)


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("", response_model=Paginated[UserOut], summary="List users")
def list_users(
    query: ListQuery = Depends(list_query),
    role: UserRole | None = Query(default=None),
    clinic_id: str | None = Query(default=None, alias="clinicId"),
    is_active: bool | None = Query(default=None, alias="isActive"),
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    stmt = select(User)
    stmt = apply_search(stmt, query.search, [User.email, User.first_name, User.last_name])
    if role:
        stmt = stmt.where(User.role == role)
    if clinic_id:
        stmt = stmt.where(User.clinic_id == parse_uuid(clinic_id, "clinic_id"))
    if is_active is not None:
        stmt = stmt.where(User.is_active == is_active)
    stmt = stmt.order_by(desc(User.created_at))

    users, total = paginate(db, stmt, query)
    return page_response([_user_out(db, u) for u in users], total, query)


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("/{user_id}", response_model=UserOut, summary="Get user")
def get_user(user_id: str, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    return _user_out(db, _get_user_or_404(db, user_id))


# Endpoint: handles HTTP request/response mapping for this route.
@router.patch("/{user_id}", response_model=UserOut, summary="Update user")
def update_user(
    user_id: str,
    payload: UserUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = _get_user_or_404(db, user_id)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("email") and changes["email"] != user.email and email_taken(db, changes["email"]):
        raise HTTPException(status_code=409, detail="Email is already in use by another account")

    if changes.get("clinic_id") and changes["clinic_id"] != user.clinic_id:
        if not db.get(Clinic, changes["clinic_id"]):
            raise HTTPException(status_code=400, detail="Specified clinic does not exist")

    new_role = changes.get("role")
    if user.role == UserRole.ADMIN and new_role and new_role != UserRole.ADMIN and _admin_count(db) <= 1:
        raise HTTPException(status_code=403, detail="Cannot change the role of the only admin user")

    password = changes.pop("password", None)
    if password:
        user.password = hash_password(password)
    for field, value in changes.items():
        if field in ("email", "role", "is_active") and value is None:
            continue
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    if not user.is_active or password:
        tokens.revoke_user(str(user.user_id))

    logger.info("User %s updated by admin %s: %s", user.user_id, admin.user_id, sorted(changes))
    return _user_out(db, user)


# Endpoint: handles HTTP request/response mapping for this route.
@router.delete("/{user_id}", response_model=Message, summary="Delete user")
def delete_user(user_id: str, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    uid = parse_uuid(user_id, "user_id")
    if uid == admin.user_id:
        raise HTTPException(
            status_code=403,
            detail="Administrators cannot delete their own account through this endpoint",
        )

    user = db.get(User, uid)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.role == UserRole.ADMIN and _admin_count(db) <= 1:
        raise HTTPException(status_code=403, detail="Cannot delete the only admin user")

    db.delete(user)
    db.commit()
    tokens.revoke_user(str(uid))

    logger.info("User %s deleted by admin %s", uid, admin.user_id)
    return Message(message="User deleted successfully")
