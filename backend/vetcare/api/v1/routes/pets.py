"""Module: pets."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_db, parse_uuid, require_clinic_user
from vetcare.api.v1.routes.owners import get_clinic_owner
from vetcare.api.v1.serializers import as_pet_payload, as_visit_payload
from vetcare.core.pagination import ListQuery, apply_search, list_query, page_response, paginate
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User
from vetcare.db.models.visit import Visit
from vetcare.schemas.common import Message, Paginated
from vetcare.schemas.pet import PetCreate, PetOut, PetUpdate
from vetcare.schemas.visit import PetDetailOut

logger = logging.getLogger(__name__)

# Mounted at /pets (clinic-wide) and /owners (nested under an owner).
router = APIRouter()
owner_pets_router = APIRouter()


def get_clinic_pet(db: Session, user: User, pet_id: str) -> tuple[Pet, Owner]:
    pid = parse_uuid(pet_id, "pet_id")
    row = db.execute(
        select(Pet, Owner)
        .join(Owner, Owner.owner_id == Pet.owner_id)
        .where(Pet.pet_id == pid, Owner.clinic_id == user.clinic_id)
    ).first()
    if not row:
        raise HTTPException(status_code=404, detail=f"Pet with ID {pet_id} not found in your clinic")
    return row[0], row[1]


def _get_owner_pet(db: Session, user: User, owner_id: str, pet_id: str) -> Pet:
    owner = get_clinic_owner(db, user, owner_id)
    pet = db.execute(
        select(Pet).where(Pet.pet_id == parse_uuid(pet_id, "pet_id"), Pet.owner_id == owner.owner_id)
    ).scalar_one_or_none()
    if not pet:
        raise HTTPException(status_code=404, detail=f"Pet with ID {pet_id} not found for this owner")
    return pet


# -------------------------
# Clinic-wide
# -------------------------

@router.get("", response_model=Paginated[PetOut], summary="List clinic pets (with owner info)")
def list_clinic_pets(
    query: ListQuery = Depends(list_query),
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    stmt = (
        select(Pet)
        .join(Owner, Owner.owner_id == Pet.owner_id)
        .where(Owner.clinic_id == user.clinic_id)
    )
    stmt = apply_search(
        stmt,
        query.search,
        [Pet.name, Pet.species, Pet.breed, Owner.first_name, Owner.last_name],
    )
    stmt = stmt.order_by(desc(Pet.created_at))

    pets, total = paginate(db, stmt, query)
    owners = {}
    if pets:
        owner_ids = {p.owner_id for p in pets}
        owners = {o.owner_id: o for o in db.execute(select(Owner).where(Owner.owner_id.in_(owner_ids))).scalars()}

    return page_response([as_pet_payload(p, owners.get(p.owner_id)) for p in pets], total, query)


# Direct lookup by id, with owner and visit history.
@router.get("/{pet_id}", response_model=PetDetailOut, summary="Get pet detail")
def get_pet(pet_id: str, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    pet, owner = get_clinic_pet(db, user, pet_id)
    visits = db.execute(
        select(Visit).where(Visit.pet_id == pet.pet_id).order_by(desc(Visit.visit_date))
    ).scalars().all()

    base = as_pet_payload(pet, owner)
    return PetDetailOut(**base.model_dump(exclude={"owner"}), owner=base.owner, visits=[as_visit_payload(v) for v in visits])


# -------------------------
# Nested under an owner
# -------------------------

@owner_pets_router.get("/{owner_id}/pets", response_model=Paginated[PetOut], summary="List pets for owner")
def list_owner_pets(
    owner_id: str,
    query: ListQuery = Depends(list_query),
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    owner = get_clinic_owner(db, user, owner_id)
    stmt = select(Pet).where(Pet.owner_id == owner.owner_id)
    stmt = apply_search(stmt, query.search, [Pet.name, Pet.species, Pet.breed])
    stmt = stmt.order_by(desc(Pet.created_at))

    pets, total = paginate(db, stmt, query)
    return page_response([as_pet_payload(p) for p in pets], total, query)


@owner_pets_router.post("/{owner_id}/pets", response_model=PetOut, status_code=201, summary="Create pet for owner")
def create_pet(
    owner_id: str,
    payload: PetCreate,
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    owner = get_clinic_owner(db, user, owner_id)
    pet = Pet(
        **payload.model_dump(),
        owner_id=owner.owner_id,
        created_by_id=user.user_id,
        updated_by_id=user.user_id,
    )
    db.add(pet)
    db.commit()
    db.refresh(pet)

    logger.info("Pet %s created for owner %s by %s", pet.pet_id, owner.owner_id, user.user_id)
    return as_pet_payload(pet)


@owner_pets_router.get("/{owner_id}/pets/{pet_id}", response_model=PetOut, summary="Get owner pet")
def get_owner_pet(owner_id: str, pet_id: str, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    return as_pet_payload(_get_owner_pet(db, user, owner_id, pet_id))


@owner_pets_router.patch("/{owner_id}/pets/{pet_id}", response_model=PetOut, summary="Update pet details")
def update_pet(
    owner_id: str,
    pet_id: str,
    payload: PetUpdate,
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    pet = _get_owner_pet(db, user, owner_id, pet_id)
    changes = payload.model_dump(exclude_unset=True)
    for required in ("name", "species"):
        if required in changes and changes[required] is None:
            raise HTTPException(status_code=400, detail=f"{required} cannot be null")

    for field, value in changes.items():
        setattr(pet, field, value)
    pet.updated_by_id = user.user_id
    db.commit()
    db.refresh(pet)
    return as_pet_payload(pet)


@owner_pets_router.delete("/{owner_id}/pets/{pet_id}", response_model=Message, summary="Delete pet")
def delete_pet(owner_id: str, pet_id: str, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    pet = _get_owner_pet(db, user, owner_id, pet_id)
    db.delete(pet)
    db.commit()
    return Message(message="Pet deleted successfully")
