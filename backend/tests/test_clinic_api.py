from tests.support import ApiTestCase
from vetcare.db.models.user import User, UserRole


class ClinicProfileTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.clinic = self.make_clinic(name="Rafidain Vet", reminder_monthly_limit=100, reminder_sent_this_cycle=80)
        self.staff = self.make_user(self.clinic)

    def test_profile_includes_reminder_usage(self) -> None:
        r = self.get("/clinic-profile", self.staff)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(r.json()["name"], "Rafidain Vet")
        self.assertEqual(r.json()["reminderUsage"]["severity"], "warning")

    def test_update_contact_details_only(self) -> None:
        r = self.patch(
            "/clinic-profile",
            self.staff,
            json={"address": "Mansour, Baghdad", "reminderMonthlyLimit": -1},
        )
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(r.json()["address"], "Mansour, Baghdad")
        self.assertEqual(r.json()["reminderMonthlyLimit"], 100)

    def test_name_must_stay_unique(self) -> None:
        self.make_clinic(name="Other Clinic")
        r = self.patch("/clinic-profile", self.staff, json={"name": "other clinic"})
        self.assertEqual(r.status_code, 409)

    def test_name_cannot_be_cleared(self) -> None:
        r = self.patch("/clinic-profile", self.staff, json={"name": None})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["detail"], "name cannot be null")
        self.assertEqual(self.patch("/clinic-profile", self.staff, json={"name": "  "}).status_code, 422)
        self.assertEqual(self.get("/clinic-profile", self.staff).json()["name"], "Rafidain Vet")

    def test_admin_without_clinic_has_no_profile(self) -> None:
        admin = self.make_user(None, role=UserRole.ADMIN)
        r = self.get("/clinic-profile", admin)
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["detail"], "User is not assigned to a clinic")


class ClinicUsersTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.clinic = self.make_clinic()
        self.clinic_admin = self.make_user(self.clinic, role=UserRole.CLINIC_ADMIN)
        self.staff = self.make_user(self.clinic, role=UserRole.STAFF)
        self.other_clinic_user = self.make_user(self.make_clinic())

    def test_roster_is_scoped_to_clinic(self) -> None:
        r = self.get("/dashboard/clinic-users", self.staff)
        self.assertEqual(r.status_code, 200, r.text)
        ids = {u["id"] for u in r.json()["data"]}
        self.assertEqual(ids, {str(self.clinic_admin.user_id), str(self.staff.user_id)})

    def test_staff_cannot_create_users(self) -> None:
        r = self.post("/dashboard/clinic-users", self.staff, json={"email": "x@y.iq", "password": "long-enough"})
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["detail"], "Clinic admin access required")

    def test_new_users_join_as_staff(self) -> None:
        r = self.post(
            "/dashboard/clinic-users",
            self.clinic_admin,
            json={"email": "nurse@clinic.iq", "password": "long-enough", "firstName": "Huda"},
        )
        self.assertEqual(r.status_code, 201, r.text)
        self.assertEqual(r.json()["role"], "STAFF")
        self.assertEqual(r.json()["clinicId"], str(self.clinic.clinic_id))

    def test_promote_staff(self) -> None:
        r = self.patch(f"/dashboard/clinic-users/{self.staff.user_id}", self.clinic_admin, json={"role": "CLINIC_ADMIN"})
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(r.json()["role"], "CLINIC_ADMIN")

    def test_only_staff_can_be_promoted(self) -> None:
        peer = self.make_user(self.clinic, role=UserRole.CLINIC_ADMIN)
        r = self.patch(f"/dashboard/clinic-users/{peer.user_id}", self.clinic_admin, json={"role": "CLINIC_ADMIN"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["detail"], "Can only promote STAFF users to CLINIC_ADMIN role")

    def test_cannot_grant_platform_admin(self) -> None:
        r = self.patch(f"/dashboard/clinic-users/{self.staff.user_id}", self.clinic_admin, json={"role": "ADMIN"})
        self.assertEqual(r.status_code, 422)

    def test_no_self_service_through_roster(self) -> None:
        path = f"/dashboard/clinic-users/{self.clinic_admin.user_id}"
        self.assertEqual(self.patch(path, self.clinic_admin, json={"firstName": "Me"}).status_code, 403)
        r = self.delete(path, self.clinic_admin)
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["detail"], "You cannot delete your own account")

    def test_other_clinic_users_are_off_limits(self) -> None:
        path = f"/dashboard/clinic-users/{self.other_clinic_user.user_id}"
        r = self.patch(path, self.clinic_admin, json={"isActive": False})
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["detail"], "You cannot update users from another clinic")
        self.assertEqual(self.delete(path, self.clinic_admin).status_code, 403)

    def test_delete_staff(self) -> None:
        r = self.delete(f"/dashboard/clinic-users/{self.staff.user_id}", self.clinic_admin)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertIsNone(self.fetch(User, self.staff.user_id))
