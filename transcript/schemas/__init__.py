"""
Pydantic schemas for command validation.
"""

from transcript.schemas.commands import (
    AccessGrades,
    AddAccess,
    AddAdmin,
    AddClass,
    AddScore,
    AddStudent,
    AddTeacher,
    ChangeTeacher,
    Command,
    CommandBase,
    EnrollStudent,
    RemoveAccess,
    RemoveAdmin,
    RemoveClass,
    RemoveStudent,
    RemoveTeacher,
    UnenrollStudent,
    parse_command,
)

__all__ = [
    "Command",
    "CommandBase",
    "parse_command",
    # Role registry
    "AddAdmin",
    "AddTeacher",
    "AddStudent",
    "RemoveAdmin",
    "RemoveTeacher",
    "RemoveStudent",
    # Class roster
    "AddClass",
    "RemoveClass",
    "ChangeTeacher",
    "EnrollStudent",
    "UnenrollStudent",
    # Grades and access
    "AddScore",
    "AddAccess",
    "RemoveAccess",
    "AccessGrades",
]
