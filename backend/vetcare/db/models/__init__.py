from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User, UserRole
from vetcare.db.models.visit import VISIT_TYPES, Visit

__all__ = ["Clinic", "Owner", "Pet", "User", "UserRole", "VISIT_TYPES", "Visit"]
