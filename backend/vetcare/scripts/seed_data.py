"""Module: seed_data."""

import csv
import random
import string
from datetime import date, timedelta
from pathlib import Path

from faker import Faker
from sqlalchemy import delete

from vetcare.core.dates import add_months, utcnow
from vetcare.core.security import hash_password
from vetcare.db.init_db import init_db
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User, UserRole
from vetcare.db.models.visit import VISIT_TYPES, Visit
from vetcare.db.session import SessionLocal

fake = Faker()

SPECIES_BREEDS = {
    "Dog": ["Labrador", "German Shepherd", "Poodle", "Mixed"],
    "Cat": ["Persian", "Siamese", "British Shorthair", "Mixed"],
    "Bird": ["Budgerigar", "Cockatiel"],
    "Rabbit": ["Lop", "Rex"],
}

# Shared helpers used by multiple seed builders.
def generate_password(length: int = 12) -> str:
    chars = string.ascii_letters + string.digits
    return "".join(random.choice(chars) for _ in range(length))


def generate_iq_mobile() -> str:
    # Local Iraqi mobile format: 07 + 9 digits
    return "07" + "".join(random.choice(string.digits) for _ in range(9))


def export_credentials(rows: list[tuple[User, str]]) -> Path:
    out_path = Path(__file__).resolve().parent / "seeded_user_credentials.csv"
    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["user_id", "email", "password", "role", "clinic_id"])
        for user, password in rows:
            writer.writerow([str(user.user_id), user.email, password, user.role, user.clinic_id or ""])
    return out_path


def reset_db(session) -> None:
    # Children first so FK dependencies clear cleanly on every backend.
    for model in (Visit, Pet, Owner, User, Clinic):
        session.execute(delete(model))
    session.commit()


def _new_user(session, role: UserRole, clinic: Clinic | None, credentials: list) -> User:
    password = generate_password()
    first, last = fake.first_name(), fake.last_name()
    user = User(
        email=fake.unique.email().lower(),
        password=hash_password(password),
        first_name=first,
        last_name=last,
        role=role,
        clinic_id=clinic.clinic_id if clinic else None,
    )
    session.add(user)
    credentials.append((user, password))
    return user


def seed_clinics(session, n: int = 3) -> list[Clinic]:
    today = date.today()
    clinics = []
    for i in range(n):
        start = add_months(today, -random.randint(0, 6))
        clinics.append(Clinic(
            name=f"{fake.last_name()} Veterinary Clinic {i + 1}",
            address=fake.address().replace("\n", ", "),
            phone=generate_iq_mobile(),
            timezone="Asia/Baghdad",
            is_active=True,
            can_send_reminders=i != n - 1,
            reminder_monthly_limit=random.choice([-1, 100, 250]),
            reminder_sent_this_cycle=0,
            subscription_start_date=start,
            current_cycle_start_date=start,
            subscription_end_date=add_months(today, 12),
        ))
    session.add_all(clinics)
    session.commit()
    return clinics


def seed_staff(session, clinics: list[Clinic], credentials: list) -> list[User]:
    users = [_new_user(session, UserRole.ADMIN, None, credentials)]
    for clinic in clinics:
        users.append(_new_user(session, UserRole.CLINIC_ADMIN, clinic, credentials))
        for _ in range(random.randint(1, 3)):
            users.append(_new_user(session, UserRole.STAFF, clinic, credentials))
    session.commit()
    return users


def seed_owners_pets_visits(session, clinic: Clinic, author: User, owners_n: int = 25) -> tuple[int, int, int]:
    now = utcnow()
    owners, pets, visits = [], [], []
    used_phones: set[str] = set()
    for _ in range(owners_n):
        phone = generate_iq_mobile()
        while phone in used_phones:
            phone = generate_iq_mobile()
        used_phones.add(phone)
        owners.append(Owner(
            clinic_id=clinic.clinic_id,
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            phone=phone,
            email=fake.email() if random.random() < 0.7 else None,
            address=fake.address().replace("\n", ", ") if random.random() < 0.5 else None,
            allow_automated_reminders=random.random() < 0.85,
            created_by_id=author.user_id,
            updated_by_id=author.user_id,
        ))
    session.add_all(owners)
    session.flush()

    for owner in owners:
        for _ in range(random.randint(1, 3)):
            species = random.choice(list(SPECIES_BREEDS))
            pets.append(Pet(
                owner_id=owner.owner_id,
                name=fake.first_name(),
                species=species,
                breed=random.choice(SPECIES_BREEDS[species]),
                gender=random.choice(["male", "female"]),
                birth_date=fake.date_between(start_date="-12y", end_date="-2m"),
                color=fake.color_name(),
                created_by_id=author.user_id,
                updated_by_id=author.user_id,
            ))
    session.add_all(pets)
    session.flush()

    for pet in pets:
        for _ in range(random.randint(0, 4)):
            visit_date = now - timedelta(days=random.randint(0, 365))
            enabled = random.random() < 0.6
            reminder = now + timedelta(days=random.randint(-5, 45)) if enabled or random.random() < 0.2 else None
            visits.append(Visit(
                pet_id=pet.pet_id,
                visit_date=visit_date,
                visit_type=random.choice(VISIT_TYPES),
                notes=fake.sentence() if random.random() < 0.5 else None,
                price=round(random.uniform(10, 400), 2),
                temperature=round(random.uniform(37.5, 39.5), 1),
                weight=round(random.uniform(0.3, 45), 2),
                weight_unit="kg",
                heart_rate=random.randint(60, 180),
                respiratory_rate=random.randint(10, 40),
                is_reminder_enabled=enabled and reminder is not None,
                next_reminder_date=reminder.replace(hour=0, minute=0, second=0, microsecond=0) if reminder else None,
                reminder_sent=False,
                created_by_id=author.user_id,
                updated_by_id=author.user_id,
            ))
    session.add_all(visits)
    session.commit()
    return len(owners), len(pets), len(visits)


if __name__ == "__main__":
    # Full reseed pipeline: python -m vetcare.scripts.seed_data
    init_db()
    session = SessionLocal()
    try:
        print("Resetting tables...")
        reset_db(session)

        print("Seeding clinics (3)...")
        clinics = seed_clinics(session)

        print("Seeding admin and clinic staff...")
        credentials: list[tuple[User, str]] = []
        users = seed_staff(session, clinics, credentials)

        totals = [0, 0, 0]
        for clinic in clinics:
            author = next(u for u in users if u.clinic_id == clinic.clinic_id)
            counts = seed_owners_pets_visits(session, clinic, author)
            totals = [a + b for a, b in zip(totals, counts)]

        creds_path = export_credentials(credentials)
        print(f"Done. clinics={len(clinics)}, users={len(users)}, owners={totals[0]}, pets={totals[1]}, visits={totals[2]}")
        print(f"Credentials export: {creds_path}")
    finally:
        session.close()
