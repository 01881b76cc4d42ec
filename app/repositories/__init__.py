"""
Repository Layer Package.

Provides data-access abstractions over Supabase (tables and storage).
All store operations flow through repositories; services never access
db.supabase directly, except the auth service for Supabase Auth calls.

Usage:
    from app.repositories.registration_repository import RegistrationRepository
    from app.repositories.role_repository import RoleRepository
"""

from app.repositories.base_repository import BaseRepository
from app.repositories.photo_repository import PhotoRepository
from app.repositories.registration_repository import RegistrationRepository
from app.repositories.role_repository import RoleRepository

__all__ = [
    "BaseRepository",
    "PhotoRepository",
    "RegistrationRepository",
    "RoleRepository",
]
