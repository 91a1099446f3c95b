"""
Role Registry - membership of the three role sets.
"""

from transcript.engines.roles.role_registry import RoleRegistry

__all__ = ["RoleRegistry"]
