"""Module: clinic_users."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.admin_users import email_taken
from vetcare.api.v1.routes.deps import get_db, parse_uuid, require_clinic_admin, require_clinic_user
from vetcare.api.v1.serializers import as_user_payload
from vetcare.core.pagination import ListQuery, apply_search, list_query, page_response, paginate
from vetcare.core.security import hash_password, tokens
from vetcare.db.models.user import User, UserRole
from vetcare.schemas.common import Message, Paginated
from vetcare.schemas.user import ClinicUserCreate, ClinicUserUpdate, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_clinic_member(db: Session, caller: User, user_id: str, action: str) -> User:
    target = db.get(User, parse_uuid(user_id, "user_id"))
    if not target:
        raise HTTPException(status_code=404, detail="User not found")
    if target.clinic_id != caller.clinic_id:
        raise HTTPException(status_code=403, detail=f"You cannot {action} users from another clinic")
    return target


# Endpoint: staff roster of the caller's clinic.
@router.get("", response_model=Paginated[UserOut])
def list_clinic_users(
    query: ListQuery = Depends(list_query),
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    stmt = select(User).where(User.clinic_id == user.clinic_id)
    stmt = apply_search(stmt, query.search, [User.email, User.first_name, User.last_name])
    stmt = stmt.order_by(desc(User.created_at))

    users, total = paginate(db, stmt, query)
    return page_response([as_user_payload(u) for u in users], total, query)


# Endpoint: new accounts always join the caller's clinic as STAFF.
@router.post("", response_model=UserOut, status_code=201)
def create_clinic_user(
    payload: ClinicUserCreate,
    caller: User = Depends(require_clinic_admin),
    db: Session = Depends(get_db),
):
    if email_taken(db, payload.email):
        raise HTTPException(status_code=409, detail="User with this email already exists")

    user = User(
        email=payload.email,
        password=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=UserRole.STAFF,
        clinic_id=caller.clinic_id,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Clinic %s: staff user %s created by %s", caller.clinic_id, user.user_id, caller.user_id)
    return as_user_payload(user)


@router.patch("/{user_id}", response_model=UserOut)
def update_clinic_user(
    user_id: str,
    payload: ClinicUserUpdate,
    caller: User = Depends(require_clinic_admin),
    db: Session = Depends(get_db),
):
    target = _get_clinic_member(db, caller, user_id, "update")
    if target.user_id == caller.user_id:
        raise HTTPException(status_code=403, detail="You cannot use this endpoint to update your own account")

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("role") == UserRole.CLINIC_ADMIN and target.role != UserRole.STAFF:
        raise HTTPException(status_code=400, detail="Can only promote STAFF users to CLINIC_ADMIN role")

    password = changes.pop("password", None)
    if password:
        target.password = hash_password(password)
    for field, value in changes.items():
        if field in ("role", "is_active") and value is None:
            continue
        setattr(target, field, value)

    db.commit()
    db.refresh(target)
    if not target.is_active or password:
        tokens.revoke_user(str(target.user_id))
    return as_user_payload(target)


@router.delete("/{user_id}", response_model=Message)
def delete_clinic_user(
    user_id: str,
    caller: User = Depends(require_clinic_admin),
    db: Session = Depends(get_db),
):
    target = _get_clinic_member(db, caller, user_id, "delete")
    if target.user_id == caller.user_id:
        raise HTTPException(status_code=403, detail="You cannot delete your own account")

    db.delete(target)
    db.commit()
    tokens.revoke_user(str(target.user_id))

    logger.info("Clinic %s: user %s deleted by %s", caller.clinic_id, target.user_id, caller.user_id)
    return Message(message="User deleted successfully")
