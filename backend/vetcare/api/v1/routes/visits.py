"""Module: visits."""

import logging
from datetime import date, datetime, time

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import Select, desc, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_db, parse_uuid, require_clinic_or_admin, require_clinic_user
from vetcare.api.v1.routes.pets import get_clinic_pet
from vetcare.api.v1.serializers import as_visit_payload
from vetcare.core.dates import clinic_day_range, start_of_utc_day
from vetcare.core.pagination import ListQuery, apply_search, list_query, page_response, paginate
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User
from vetcare.db.models.visit import Visit
from vetcare.schemas.common import Message, Paginated
from vetcare.schemas.visit import REMINDER_DATE_REQUIRED, VisitCreate, VisitOut, VisitType, VisitUpdate

logger = logging.getLogger(__name__)

# Mounted at /visits (clinic-wide views) and /pets (nested under a pet).
router = APIRouter()
pet_visits_router = APIRouter()

UPCOMING_DAYS = 30
UPCOMING_LIMIT = 10


def clinic_timezone(db: Session, user: User) -> str:
    if user.clinic_id is None:
        return "UTC"
    tz = db.execute(select(Clinic.timezone).where(Clinic.clinic_id == user.clinic_id)).scalar_one_or_none()
    return tz or "UTC"


def scoped_visits(user: User) -> Select:
    stmt = (
        select(Visit)
        .join(Pet, Pet.pet_id == Visit.pet_id)
        .join(Owner, Owner.owner_id == Pet.owner_id)
    )
    if user.clinic_id is not None:
        stmt = stmt.where(Owner.clinic_id == user.clinic_id)
    return stmt


def due_today_filter(stmt: Select, timezone: str, now: datetime | None = None) -> Select:
    start, end = clinic_day_range(timezone, now)
    return stmt.where(
        Visit.next_reminder_date >= start,
        Visit.next_reminder_date <= end,
        Visit.is_reminder_enabled.is_(True),
    )


def upcoming_filter(stmt: Select, timezone: str, now: datetime | None = None) -> Select:
    start, end = clinic_day_range(timezone, now, days_ahead=UPCOMING_DAYS)
    return stmt.where(Visit.next_reminder_date >= start, Visit.next_reminder_date <= end)


def _with_pets(db: Session, visits: list[Visit]) -> list[VisitOut]:
    if not visits:
        return []
    rows = db.execute(
        select(Pet, Owner)
        .join(Owner, Owner.owner_id == Pet.owner_id)
        .where(Pet.pet_id.in_({v.pet_id for v in visits}))
    ).all()
    pets = {pet.pet_id: (pet, owner) for pet, owner in rows}
    return [as_visit_payload(v, *pets.get(v.pet_id, (None, None))) for v in visits]


def _get_pet_visit(db: Session, user: User, pet_id: str, visit_id: str) -> Visit:
    pet, _ = get_clinic_pet(db, user, pet_id)
    visit = db.execute(
        select(Visit).where(Visit.visit_id == parse_uuid(visit_id, "visit_id"), Visit.pet_id == pet.pet_id)
    ).scalar_one_or_none()
    if not visit:
        raise HTTPException(status_code=404, detail=f"Visit with ID {visit_id} not found for this pet")
    return visit


# -------------------------
# Clinic-wide
# -------------------------

@router.get("", response_model=Paginated[VisitOut], summary="List clinic visits")
def list_visits(
    query: ListQuery = Depends(list_query),
    visit_type: VisitType | None = Query(default=None, alias="visitType"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    user: User = Depends(require_clinic_or_admin),
    db: Session = Depends(get_db),
):
    stmt = scoped_visits(user)
    if start_date:
        stmt = stmt.where(Visit.visit_date >= datetime.combine(start_date, time.min))
    if end_date:
        stmt = stmt.where(Visit.visit_date <= datetime.combine(end_date, time.max))
    if visit_type:
        stmt = stmt.where(Visit.visit_type == visit_type)
    stmt = apply_search(
        stmt,
        query.search,
        [Pet.name, Owner.first_name, Owner.last_name, Visit.notes, Visit.visit_type],
    )
    stmt = stmt.order_by(desc(Visit.visit_date))

    visits, total = paginate(db, stmt, query)
    return page_response(_with_pets(db, visits), total, query)


@router.get("/upcoming", response_model=list[VisitOut], summary="Reminders in the next 30 days")
def list_upcoming(user: User = Depends(require_clinic_or_admin), db: Session = Depends(get_db)):
    stmt = upcoming_filter(scoped_visits(user), clinic_timezone(db, user))
    stmt = stmt.order_by(Visit.next_reminder_date).limit(UPCOMING_LIMIT)
    return _with_pets(db, list(db.execute(stmt).scalars().all()))


@router.get("/due-today", response_model=Paginated[VisitOut], summary="Reminders due today (clinic time)")
def list_due_today(
    query: ListQuery = Depends(list_query),
    user: User = Depends(require_clinic_or_admin),
    db: Session = Depends(get_db),
):
    stmt = due_today_filter(scoped_visits(user), clinic_timezone(db, user))
    stmt = stmt.order_by(Visit.next_reminder_date)

    visits, total = paginate(db, stmt, query)
    return page_response(_with_pets(db, visits), total, query)


# -------------------------
# Nested under a pet
# -------------------------

@pet_visits_router.get("/{pet_id}/visits", response_model=Paginated[VisitOut], summary="List visits for pet")
def list_pet_visits(
    pet_id: str,
    query: ListQuery = Depends(list_query),
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    pet, _ = get_clinic_pet(db, user, pet_id)
    stmt = select(Visit).where(Visit.pet_id == pet.pet_id)
    stmt = apply_search(stmt, query.search, [Visit.notes, Visit.visit_type])
    stmt = stmt.order_by(desc(Visit.visit_date))

    visits, total = paginate(db, stmt, query)
    return page_response([as_visit_payload(v) for v in visits], total, query)


@pet_visits_router.post("/{pet_id}/visits", response_model=VisitOut, status_code=201, summary="Record visit")
def create_visit(
    pet_id: str,
    payload: VisitCreate,
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    pet, _ = get_clinic_pet(db, user, pet_id)
    data = payload.model_dump()
    data["next_reminder_date"] = start_of_utc_day(data["next_reminder_date"])

    visit = Visit(**data, pet_id=pet.pet_id, created_by_id=user.user_id, updated_by_id=user.user_id)
    db.add(visit)
    db.commit()
    db.refresh(visit)

    logger.info("Visit %s (%s) recorded for pet %s by %s", visit.visit_id, visit.visit_type, pet.pet_id, user.user_id)
    return as_visit_payload(visit)


@pet_visits_router.get("/{pet_id}/visits/{visit_id}", response_model=VisitOut, summary="Get visit")
def get_visit(pet_id: str, visit_id: str, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    return as_visit_payload(_get_pet_visit(db, user, pet_id, visit_id))


@pet_visits_router.patch("/{pet_id}/visits/{visit_id}", response_model=VisitOut, summary="Update visit")
def update_visit(
    pet_id: str,
    visit_id: str,
    payload: VisitUpdate,
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    visit = _get_pet_visit(db, user, pet_id, visit_id)
    changes = payload.model_dump(exclude_unset=True)

    for required in ("visit_date", "visit_type", "is_reminder_enabled", "reminder_sent"):
        if required in changes and changes[required] is None:
            raise HTTPException(status_code=400, detail=f"{required} cannot be null")

    if "next_reminder_date" in changes:
        changes["next_reminder_date"] = start_of_utc_day(changes["next_reminder_date"])
        # A rescheduled reminder is due again.
        if changes["next_reminder_date"] != visit.next_reminder_date and "reminder_sent" not in changes:
            changes["reminder_sent"] = False

    enabled = changes.get("is_reminder_enabled", visit.is_reminder_enabled)
    reminder_date = changes.get("next_reminder_date", visit.next_reminder_date)
    if enabled and reminder_date is None:
        raise HTTPException(status_code=400, detail=REMINDER_DATE_REQUIRED)

    for field, value in changes.items():
        setattr(visit, field, value)
    visit.updated_by_id = user.user_id
    db.commit()
    db.refresh(visit)
    return as_visit_payload(visit)


@pet_visits_router.delete("/{pet_id}/visits/{visit_id}", response_model=Message, summary="Delete visit")
def delete_visit(pet_id: str, visit_id: str, user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    visit = _get_pet_visit(db, user, pet_id, visit_id)
    db.delete(visit)
    db.commit()
    return Message(message="Visit deleted successfully")
