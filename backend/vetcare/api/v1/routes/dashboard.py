"""Module: dashboard."""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_db, require_clinic_or_admin
from vetcare.api.v1.routes.visits import clinic_timezone, due_today_filter, scoped_visits, upcoming_filter
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User
from vetcare.db.models.visit import Visit
from vetcare.schemas.visit import DashboardStats, VisitType

router = APIRouter()


def _count(db: Session, stmt) -> int:
    return int(db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one() or 0)


# Endpoint: headline counts; platform-wide for admins without a clinic.
@router.get("/stats", response_model=DashboardStats)
def get_stats(user: User = Depends(require_clinic_or_admin), db: Session = Depends(get_db)):
    if user.clinic_id is None:
        return DashboardStats(
            owner_count=_count(db, select(Owner.owner_id)),
            pet_count=_count(db, select(Pet.pet_id)),
            is_admin_view=True,
        )

    owners = select(Owner.owner_id).where(Owner.clinic_id == user.clinic_id)
    pets = (
        select(Pet.pet_id)
        .join(Owner, Owner.owner_id == Pet.owner_id)
        .where(Owner.clinic_id == user.clinic_id)
    )
    timezone = clinic_timezone(db, user)
    vaccinations = upcoming_filter(scoped_visits(user), timezone).where(Visit.visit_type == VisitType.VACCINATION)
    due_today = due_today_filter(scoped_visits(user), timezone)

    return DashboardStats(
        owner_count=_count(db, owners),
        pet_count=_count(db, pets),
        upcoming_vaccination_count=_count(db, vaccinations),
        due_today_count=_count(db, due_today),
        is_admin_view=False,
    )
