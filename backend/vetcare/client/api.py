"""Module: api.

Typed HTTP client for the VetCare API. List responses are cached per
(resource, serialized filters); every mutation drops the cached lists it
can affect. Payloads are validated with the server's own schemas before
anything goes over the wire.
"""

import logging
from typing import Any, Mapping

import httpx
from pydantic import BaseModel

from vetcare.client.errors import ApiRequestError, raise_for_response
from vetcare.client.listing import Page, normalize_page, serialize_filters
from vetcare.schemas.clinic import ClinicCreate, ClinicProfileUpdate, ClinicSettingsUpdate
from vetcare.schemas.owner import OwnerCreate, OwnerUpdate
from vetcare.schemas.pet import PetCreate, PetUpdate
from vetcare.schemas.user import ChangePasswordRequest, ClinicUserCreate, LoginRequest, ProfileUpdate
from vetcare.schemas.visit import VisitCreate, VisitUpdate

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
DEFAULT_TIMEOUT = 10.0


def dirty_fields(original: Mapping[str, Any], current: Mapping[str, Any]) -> dict[str, Any]:
    """Fields of ``current`` whose value differs from ``original``."""
    return {key: value for key, value in current.items() if key not in original or original[key] != value}


def _wire(schema: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    # Raises pydantic.ValidationError locally; nothing is sent.
    return schema.model_validate(dict(data)).model_dump(mode="json", by_alias=True, exclude_unset=True)


def _cache_key(resource: str, params: Mapping[str, Any]) -> tuple[str, tuple]:
    return resource, tuple(sorted(params.items()))


class VetcareClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token = token
        self._cache: dict[tuple[str, tuple], Page] = {}
        self._http = httpx.Client(base_url=base_url.rstrip("/") + API_PREFIX, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "VetcareClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------
    # Transport
    # -------------------------

    def _request(self, method: str, path: str, params: Mapping[str, Any] | None = None, json: Any = None) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            response = self._http.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiRequestError(None, None) from exc
        raise_for_response(response)
        return response.json() if response.content else None

    def get_page(self, resource: str, filters: Mapping[str, Any] | None = None) -> Page:
        params = serialize_filters(filters or {})
        key = _cache_key(resource, params)
        if key not in self._cache:
            self._cache[key] = normalize_page(self._request("GET", f"/{resource}", params=params))
        return self._cache[key]

    def refetch(self, resource: str, filters: Mapping[str, Any] | None = None) -> Page:
        params = serialize_filters(filters or {})
        self._cache.pop(_cache_key(resource, params), None)
        return self.get_page(resource, filters)

    def invalidate(self, *resources: str) -> None:
        """Drop cached lists for each resource and anything nested under it."""
        stale = [
            key for key in self._cache
            if any(key[0] == r or key[0].startswith(f"{r}/") for r in resources)
        ]
        for key in stale:
            del self._cache[key]

    def is_cached(self, resource: str, filters: Mapping[str, Any] | None = None) -> bool:
        return _cache_key(resource, serialize_filters(filters or {})) in self._cache

    # -------------------------
    # Auth and profile
    # -------------------------

    def login(self, email: str, password: str) -> dict[str, Any]:
        body = self._request("POST", "/auth/login", json=_wire(LoginRequest, {"email": email, "password": password}))
        self.token = body["accessToken"]
        self._cache.clear()
        return body["user"]

    def logout(self) -> None:
        if self.token:
            self._request("POST", "/auth/logout")
        self.token = None
        self._cache.clear()

    def me(self) -> dict[str, Any]:
        return self._request("GET", "/auth/me")

    def change_password(self, current_password: str, new_password: str, confirm_password: str) -> dict[str, Any]:
        payload = _wire(
            ChangePasswordRequest,
            {
                "current_password": current_password,
                "new_password": new_password,
                "confirm_password": confirm_password,
            },
        )
        return self._request("PATCH", "/auth/change-password", json=payload)

    def update_profile(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", "/users/profile", json=_wire(ProfileUpdate, changes))

    # -------------------------
    # Clinic
    # -------------------------

    def clinic_profile(self) -> dict[str, Any]:
        return self._request("GET", "/clinic-profile")

    def update_clinic_profile(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", "/clinic-profile", json=_wire(ClinicProfileUpdate, changes))

    def dashboard_stats(self) -> dict[str, Any]:
        return self._request("GET", "/dashboard/stats")

    def list_clinic_users(self, **filters: Any) -> Page:
        return self.get_page("dashboard/clinic-users", filters)

    def create_clinic_user(self, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", "/dashboard/clinic-users", json=_wire(ClinicUserCreate, data))
        self.invalidate("dashboard/clinic-users")
        return created

    def delete_clinic_user(self, user_id: str) -> None:
        self._request("DELETE", f"/dashboard/clinic-users/{user_id}")
        self.invalidate("dashboard/clinic-users")

    def list_clinics(self, **filters: Any) -> Page:
        return self.get_page("admin/clinics", filters)

    def create_clinic(self, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", "/admin/clinics", json=_wire(ClinicCreate, data))
        self.invalidate("admin/clinics")
        return created

    def update_clinic_settings(self, clinic_id: str, changes: Mapping[str, Any]) -> dict[str, Any]:
        updated = self._request("PATCH", f"/admin/clinics/{clinic_id}", json=_wire(ClinicSettingsUpdate, changes))
        self.invalidate("admin/clinics")
        return updated

    # -------------------------
    # Owners
    # -------------------------

    def list_owners(self, **filters: Any) -> Page:
        return self.get_page("owners", filters)

    def get_owner(self, owner_id: str) -> dict[str, Any]:
        return self._request("GET", f"/owners/{owner_id}")

    def create_owner(self, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", "/owners", json=_wire(OwnerCreate, data))
        self.invalidate("owners")
        return created

    def update_owner(
        self,
        owner_id: str,
        current: Mapping[str, Any],
        original: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        changes = dirty_fields(original, current) if original is not None else dict(current)
        updated = self._request("PATCH", f"/owners/{owner_id}", json=_wire(OwnerUpdate, changes))
        self.invalidate("owners", "pets")
        return updated

    def delete_owner(self, owner_id: str) -> None:
        self._request("DELETE", f"/owners/{owner_id}")
        self.invalidate("owners", "pets", "visits")

    # -------------------------
    # Pets
    # -------------------------

    def list_pets(self, **filters: Any) -> Page:
        return self.get_page("pets", filters)

    def list_owner_pets(self, owner_id: str, **filters: Any) -> Page:
        return self.get_page(f"owners/{owner_id}/pets", filters)

    def get_pet(self, pet_id: str) -> dict[str, Any]:
        return self._request("GET", f"/pets/{pet_id}")

    def create_pet(self, owner_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", f"/owners/{owner_id}/pets", json=_wire(PetCreate, data))
        self.invalidate("pets", f"owners/{owner_id}/pets", "owners")
        return created

    def update_pet(
        self,
        owner_id: str,
        pet_id: str,
        current: Mapping[str, Any],
        original: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        changes = dirty_fields(original, current) if original is not None else dict(current)
        updated = self._request("PATCH", f"/owners/{owner_id}/pets/{pet_id}", json=_wire(PetUpdate, changes))
        self.invalidate("pets", f"owners/{owner_id}/pets")
        return updated

    def delete_pet(self, owner_id: str, pet_id: str) -> None:
        self._request("DELETE", f"/owners/{owner_id}/pets/{pet_id}")
        self.invalidate("pets", f"owners/{owner_id}/pets", "owners", "visits")

    # -------------------------
    # Visits
    # -------------------------

    def list_visits(self, **filters: Any) -> Page:
        return self.get_page("visits", filters)

    def list_pet_visits(self, pet_id: str, **filters: Any) -> Page:
        return self.get_page(f"pets/{pet_id}/visits", filters)

    def due_today(self, **filters: Any) -> Page:
        return self.get_page("visits/due-today", filters)

    def upcoming(self) -> list[dict[str, Any]]:
        return self._request("GET", "/visits/upcoming")

    def create_visit(self, pet_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", f"/pets/{pet_id}/visits", json=_wire(VisitCreate, data))
        self.invalidate("visits", f"pets/{pet_id}/visits")
        return created

    def update_visit(
        self,
        pet_id: str,
        visit_id: str,
        current: Mapping[str, Any],
        original: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        if original is not None:
            changes = dirty_fields(original, current)
            # The reminder rule applies to the record as it will be saved.
            VisitUpdate.model_validate({**original, **changes})
        else:
            changes = dict(current)
        updated = self._request("PATCH", f"/pets/{pet_id}/visits/{visit_id}", json=_wire(VisitUpdate, changes))
        self.invalidate("visits", f"pets/{pet_id}/visits")
        return updated

    def delete_visit(self, pet_id: str, visit_id: str) -> None:
        self._request("DELETE", f"/pets/{pet_id}/visits/{visit_id}")
        self.invalidate("visits", f"pets/{pet_id}/visits")
