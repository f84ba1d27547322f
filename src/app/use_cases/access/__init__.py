"""
Access Use Cases

Identity resolution and the farm access guard.
"""

from .authorize_use_case import AuthorizeUseCase
from .dtos import AccessContext
from .identity import ResolveIdentityUseCase, resolve_identity

__all__ = [
    "AuthorizeUseCase",
    "ResolveIdentityUseCase",
    "AccessContext",
    "resolve_identity",
]
