import unittest
from unittest import mock

from tests.support import DatabaseTestCase
from vetcare import main as entrypoint
from vetcare.core.security import verify_password
from vetcare.db.models.user import UserRole
from vetcare.scripts.create_admin import create_admin


class CreateAdminTestCase(DatabaseTestCase):
    def test_creates_clinicless_admin(self) -> None:
        with self.Session() as db:
            user = create_admin(db, " Root@VetCare.iq ", "bootstrap-pass", "Ali")
        self.assertEqual(user.email, "root@vetcare.iq")
        self.assertEqual(user.role, UserRole.ADMIN)
        self.assertIsNone(user.clinic_id)
        self.assertTrue(verify_password("bootstrap-pass", user.password))

    def test_rejects_duplicates_and_short_passwords(self) -> None:
        self.make_user(None, email="root@vetcare.iq")
        with self.Session() as db:
            with self.assertRaises(ValueError):
                create_admin(db, "ROOT@vetcare.iq", "bootstrap-pass")
            with self.assertRaises(ValueError):
                create_admin(db, "second@vetcare.iq", "short")


class ServeTestCase(unittest.TestCase):
    def test_main_runs_uvicorn_with_configured_bind(self) -> None:
        with mock.patch.object(entrypoint.uvicorn, "run") as run:
            entrypoint.main()
        run.assert_called_once_with(
            "vetcare.main:app",
            host=entrypoint.settings.api_host,
            port=entrypoint.settings.api_port,
        )
