# -*- coding: utf-8 -*-
"""
backend/app/modules/profiles/__init__.py

Perfil de usuario y saldo de créditos.
"""

from .enums import ProfileRole
from .models import Profile
from .repositories import ProfileRepository
from .services import ProfileNotFoundError, ProfileService

__all__ = [
    "ProfileRole",
    "Profile",
    "ProfileRepository",
    "ProfileNotFoundError",
    "ProfileService",
]
