"""
Roles held in the role registry.
"""

from enum import Enum


class Role(str, Enum):
    """Roles in the system."""
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
