"""Module: serializers.

ORM row -> wire model mapping shared across routers.
"""

from decimal import Decimal

from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User
from vetcare.db.models.visit import Visit
from vetcare.schemas.clinic import ClinicOut, ClinicSummary, ReminderUsageOut
from vetcare.schemas.owner import OwnerOut
from vetcare.schemas.pet import PetOut
from vetcare.schemas.user import UserOut
from vetcare.schemas.visit import VisitOut
from vetcare.services.reminder_quota import owner_reminders_effective, usage_summary


def _as_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def as_clinic_summary(clinic: Clinic) -> ClinicSummary:
    return ClinicSummary(
        id=clinic.clinic_id,
        name=clinic.name,
        timezone=clinic.timezone,
        can_send_reminders=clinic.can_send_reminders,
    )


def as_clinic_payload(clinic: Clinic, counts: dict[str, int] | None = None) -> ClinicOut:
    counts = counts or {}
    return ClinicOut(
        id=clinic.clinic_id,
        name=clinic.name,
        address=clinic.address,
        phone=clinic.phone,
        timezone=clinic.timezone,
        is_active=clinic.is_active,
        can_send_reminders=clinic.can_send_reminders,
        reminder_monthly_limit=clinic.reminder_monthly_limit,
        reminder_sent_this_cycle=clinic.reminder_sent_this_cycle or 0,
        current_cycle_start_date=clinic.current_cycle_start_date,
        subscription_start_date=clinic.subscription_start_date,
        subscription_end_date=clinic.subscription_end_date,
        reminder_usage=ReminderUsageOut(**usage_summary(clinic).as_dict()),
        owner_count=counts.get("owner_count"),
        pet_count=counts.get("pet_count"),
        user_count=counts.get("user_count"),
        created_at=clinic.created_at,
        updated_at=clinic.updated_at,
    )


def as_user_payload(user: User, clinic: Clinic | None = None) -> UserOut:
    return UserOut(
        id=user.user_id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        is_active=user.is_active,
        clinic_id=user.clinic_id,
        clinic=as_clinic_summary(clinic) if clinic else None,
        created_at=user.created_at,
    )


def as_owner_payload(
    owner: Owner,
    clinic_can_send: bool | None = None,
    pet_count: int | None = None,
) -> OwnerOut:
    effective = None
    if clinic_can_send is not None:
        effective = owner_reminders_effective(clinic_can_send, owner.allow_automated_reminders)
    return OwnerOut(
        id=owner.owner_id,
        clinic_id=owner.clinic_id,
        first_name=owner.first_name,
        last_name=owner.last_name,
        phone=owner.phone,
        email=owner.email,
        address=owner.address,
        allow_automated_reminders=owner.allow_automated_reminders,
        reminders_effective=effective,
        pet_count=pet_count,
        created_by_id=owner.created_by_id,
        updated_by_id=owner.updated_by_id,
        created_at=owner.created_at,
        updated_at=owner.updated_at,
    )


def as_pet_payload(pet: Pet, owner: Owner | None = None) -> PetOut:
    return PetOut(
        id=pet.pet_id,
        owner_id=pet.owner_id,
        name=pet.name,
        species=pet.species,
        breed=pet.breed,
        gender=pet.gender,
        birth_date=pet.birth_date,
        color=pet.color,
        notes=pet.notes,
        owner=as_owner_payload(owner) if owner else None,
        created_at=pet.created_at,
        updated_at=pet.updated_at,
    )


def as_visit_payload(visit: Visit, pet: Pet | None = None, owner: Owner | None = None) -> VisitOut:
    return VisitOut(
        id=visit.visit_id,
        pet_id=visit.pet_id,
        visit_date=visit.visit_date,
        visit_type=visit.visit_type,
        notes=visit.notes,
        price=_as_float(visit.price),
        temperature=_as_float(visit.temperature),
        weight=_as_float(visit.weight),
        weight_unit=visit.weight_unit,
        heart_rate=visit.heart_rate,
        respiratory_rate=visit.respiratory_rate,
        is_reminder_enabled=visit.is_reminder_enabled,
        next_reminder_date=visit.next_reminder_date,
        reminder_sent=visit.reminder_sent,
        pet=as_pet_payload(pet, owner) if pet else None,
        created_by_id=visit.created_by_id,
        updated_by_id=visit.updated_by_id,
        created_at=visit.created_at,
        updated_at=visit.updated_at,
    )
