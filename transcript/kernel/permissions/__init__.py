"""
Permission Core - role and ownership access control.
"""

from transcript.kernel.permissions.permission_service import (
    CAPABILITY_MATRIX,
    Capability,
    PermissionService,
)

__all__ = [
    "CAPABILITY_MATRIX",
    "Capability",
    "PermissionService",
]
