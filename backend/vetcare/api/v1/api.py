"""Module: api."""

from fastapi import APIRouter

# Core operational routes (health/auth/integrations).
from vetcare.api.v1.routes.health import router as health_router
from vetcare.api.v1.routes.auth import router as auth_router
from vetcare.api.v1.routes.users import router as users_router
from vetcare.api.v1.routes.integrations import router as integrations_router

# Platform administration.
from vetcare.api.v1.routes.admin_clinics import router as admin_clinics_router
from vetcare.api.v1.routes.admin_users import router as admin_users_router

# Clinic-scoped domain routes used by the frontend screens.
from vetcare.api.v1.routes.clinic_profile import router as clinic_profile_router
from vetcare.api.v1.routes.clinic_users import router as clinic_users_router
from vetcare.api.v1.routes.owners import router as owners_router
from vetcare.api.v1.routes.pets import owner_pets_router, router as pets_router
from vetcare.api.v1.routes.visits import pet_visits_router, router as visits_router
from vetcare.api.v1.routes.dashboard import router as dashboard_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(integrations_router, prefix="/integrations", tags=["integrations"])

api_router.include_router(admin_clinics_router, prefix="/admin/clinics", tags=["admin"])
api_router.include_router(admin_users_router, prefix="/admin/users", tags=["admin"])

# Register business/domain endpoints consumed by the application UI.
api_router.include_router(clinic_profile_router, prefix="/clinic-profile", tags=["clinic"])
api_router.include_router(clinic_users_router, prefix="/dashboard/clinic-users", tags=["clinic"])
api_router.include_router(owners_router, prefix="/owners", tags=["owners"])
api_router.include_router(owner_pets_router, prefix="/owners", tags=["pets"])
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(pet_visits_router, prefix="/pets", tags=["visits"])
api_router.include_router(visits_router, prefix="/visits", tags=["visits"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
