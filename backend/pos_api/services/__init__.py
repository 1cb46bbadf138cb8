"""
Application services.

- base_service: generic resource pipeline (ResourceService)
- permissions: role table and PermissionContext
- domain: per-resource services, token service and seed
"""

from .base_service import Reference, ResourceService, project
from .permissions import Action, PermissionContext, Resource

__all__ = [
    "Reference",
    "ResourceService",
    "project",
    "Action",
    "PermissionContext",
    "Resource",
]
