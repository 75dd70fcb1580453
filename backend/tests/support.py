"""Shared fixtures: an in-memory database wired into the FastAPI app."""

import unittest
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vetcare.api.v1.routes.deps import get_db
from vetcare.core.dates import utcnow
from vetcare.core.security import hash_password, tokens
from vetcare.db import models  # noqa: F401
from vetcare.db.base import Base
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User, UserRole
from vetcare.db.models.visit import Visit
from vetcare.db.session import build_engine
from vetcare.main import app

PASSWORD = "password123"
# PBKDF2 is slow; hash once for every seeded user.
PASSWORD_HASH = hash_password(PASSWORD)
API = "/api/v1"


def memory_engine():
    return build_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


class DatabaseTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = memory_engine()
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.today = utcnow().date()
        self._seq = 0

    def tearDown(self) -> None:
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def add(self, *objects):
        with self.Session() as db:
            db.add_all(objects)
            db.commit()
            for obj in objects:
                db.refresh(obj)
        return objects[0] if len(objects) == 1 else objects

    def fetch(self, model, ident):
        with self.Session() as db:
            return db.get(model, ident)

    def make_clinic(self, **overrides) -> Clinic:
        fields = {
            "name": f"Clinic {self._next()}",
            "phone": "07700000000",
            "timezone": "UTC",
            "is_active": True,
            "can_send_reminders": True,
            "reminder_monthly_limit": -1,
            "reminder_sent_this_cycle": 0,
            "subscription_start_date": self.today - timedelta(days=10),
            "subscription_end_date": self.today + timedelta(days=365),
            "current_cycle_start_date": self.today - timedelta(days=10),
        }
        fields.update(overrides)
        return self.add(Clinic(**fields))

    def make_user(self, clinic: Clinic | None = None, role: UserRole = UserRole.STAFF, **overrides) -> User:
        fields = {
            "email": f"user{self._next()}@example.com",
            "password": PASSWORD_HASH,
            "first_name": "Test",
            "last_name": "User",
            "role": role,
            "is_active": True,
            "clinic_id": clinic.clinic_id if clinic else None,
        }
        fields.update(overrides)
        return self.add(User(**fields))

    def make_owner(self, clinic: Clinic, **overrides) -> Owner:
        fields = {
            "clinic_id": clinic.clinic_id,
            "first_name": "Sara",
            "last_name": "Ali",
            "phone": f"0770{self._next():07d}",
            "allow_automated_reminders": True,
        }
        fields.update(overrides)
        return self.add(Owner(**fields))

    def make_pet(self, owner: Owner, **overrides) -> Pet:
        fields = {"owner_id": owner.owner_id, "name": "Milo", "species": "Dog"}
        fields.update(overrides)
        return self.add(Pet(**fields))

    def make_visit(self, pet: Pet, **overrides) -> Visit:
        fields = {
            "pet_id": pet.pet_id,
            "visit_date": utcnow() - timedelta(days=30),
            "visit_type": "checkup",
            "is_reminder_enabled": False,
            "reminder_sent": False,
        }
        fields.update(overrides)
        return self.add(Visit(**fields))

    def _next(self) -> int:
        self._seq += 1
        return self._seq


class ApiTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def auth(self, user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.issue(str(user.user_id))}"}

    def get(self, path: str, user: User | None = None, **kwargs):
        return self.client.get(API + path, headers=self.auth(user) if user else None, **kwargs)

    def post(self, path: str, user: User | None = None, **kwargs):
        return self.client.post(API + path, headers=self.auth(user) if user else None, **kwargs)

    def patch(self, path: str, user: User | None = None, **kwargs):
        return self.client.patch(API + path, headers=self.auth(user) if user else None, **kwargs)

    def delete(self, path: str, user: User | None = None, **kwargs):
        return self.client.delete(API + path, headers=self.auth(user) if user else None, **kwargs)
