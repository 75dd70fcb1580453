"""Module: owners."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_db, parse_uuid, require_clinic_user
from vetcare.api.v1.serializers import as_owner_payload, as_pet_payload
from vetcare.core.pagination import ListQuery, apply_search, list_query, page_response, paginate
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User
from vetcare.schemas.common import Message, Paginated
from vetcare.schemas.owner import OwnerCreate, OwnerOut, OwnerUpdate
from vetcare.schemas.pet import OwnerDetailOut

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_PHONE = "Phone number already registered for another owner in this clinic"


def get_clinic_owner(db: Session, user: User, owner_id: str) -> Owner:
    """Owner lookup scoped to the caller's clinic; other clinics' rows are reported as missing."""
    oid = parse_uuid(owner_id, "owner_id")
    owner = db.execute(
        select(Owner).where(Owner.owner_id == oid, Owner.clinic_id == user.clinic_id)
    ).scalar_one_or_none()
    if not owner:
        raise HTTPException(status_code=404, detail=f"Owner with ID {owner_id} not found in your clinic")
    return owner


def _ensure_phone_free(db: Session, clinic_id: uuid.UUID, phone: str, exclude: uuid.UUID | None = None) -> None:
    stmt = select(Owner.owner_id).where(Owner.clinic_id == clinic_id, Owner.phone == phone)
    if exclude is not None:
        stmt = stmt.where(Owner.owner_id != exclude)
    if db.execute(stmt).first():
        raise HTTPException(status_code=409, detail=DUPLICATE_PHONE)


def _clinic_can_send(db: Session, user: User) -> bool:
    return bool(db.execute(select(Clinic.can_send_reminders).where(Clinic.clinic_id == user.clinic_id)).scalar_one_or_none())


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("", response_model=Paginated[OwnerOut], summary="List owners")
def list_owners(
    query: ListQuery = Depends(list_query),
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    stmt = select(Owner).where(Owner.clinic_id == user.clinic_id)
    stmt = apply_search(
        stmt,
        query.search,
        [Owner.first_name, Owner.last_name, Owner.email, Owner.phone, Owner.address],
    )
    stmt = stmt.order_by(desc(Owner.created_at))

    owners, total = paginate(db, stmt, query)
    can_send = _clinic_can_send(db, user)

    pet_counts = {}
    if owners:
        pet_counts = dict(
            db.execute(
                select(Pet.owner_id, func.count(Pet.pet_id))
                .where(Pet.owner_id.in_([o.owner_id for o in owners]))
                .group_by(Pet.owner_id)
            ).all()
        )

    data = [as_owner_payload(o, can_send, int(pet_counts.get(o.owner_id, 0))) for o in owners]
    return page_response(data, total, query)


# Endpoint: handles HTTP request/response mapping for this route.
@router.post("", response_model=OwnerOut, status_code=201, summary="Create owner")
def create_owner(payload: OwnerCreate, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    _ensure_phone_free(db, user.clinic_id, payload.phone)

    owner = Owner(
        **payload.model_dump(),
        clinic_id=user.clinic_id,
        created_by_id=user.user_id,
        updated_by_id=user.user_id,
    )
    db.add(owner)
    db.commit()
    db.refresh(owner)

    logger.info("Clinic %s: owner %s created by %s", user.clinic_id, owner.owner_id, user.user_id)
    return as_owner_payload(owner, _clinic_can_send(db, user), 0)


# Endpoint: owner with pets ordered by name.
@router.get("/{owner_id}", response_model=OwnerDetailOut, summary="Get owner")
def get_owner(owner_id: str, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    owner = get_clinic_owner(db, user, owner_id)
    pets = db.execute(select(Pet).where(Pet.owner_id == owner.owner_id).order_by(Pet.name)).scalars().all()

    base = as_owner_payload(owner, _clinic_can_send(db, user), len(pets))
    return OwnerDetailOut(**base.model_dump(), pets=[as_pet_payload(p) for p in pets])


# Endpoint: partial update; only fields present in the body are written.
@router.patch("/{owner_id}", response_model=OwnerOut, summary="Update owner")
def update_owner(
    owner_id: str,
    payload: OwnerUpdate,
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    owner = get_clinic_owner(db, user, owner_id)
    changes = payload.model_dump(exclude_unset=True)

    for required in ("first_name", "last_name", "phone", "allow_automated_reminders"):
        if required in changes and changes[required] is None:
            raise HTTPException(status_code=400, detail=f"{required} cannot be null")
    if "phone" in changes:
        _ensure_phone_free(db, owner.clinic_id, changes["phone"], exclude=owner.owner_id)

    for field, value in changes.items():
        setattr(owner, field, value)
    owner.updated_by_id = user.user_id
    db.commit()
    db.refresh(owner)
    return as_owner_payload(owner, _clinic_can_send(db, user))


# Endpoint: removes the owner together with pets and visits.
@router.delete("/{owner_id}", response_model=Message, summary="Delete owner")
def delete_owner(owner_id: str, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    owner = get_clinic_owner(db, user, owner_id)
    db.delete(owner)
    db.commit()

    logger.info("Clinic %s: owner %s deleted by %s", user.clinic_id, owner.owner_id, user.user_id)
    return Message(message="Owner deleted successfully")
