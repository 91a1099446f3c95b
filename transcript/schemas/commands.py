"""
Command schemas.

One model per public command. The `command` field names the dispatcher
method that handles it and discriminates the union.
"""

import uuid
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class CommandBase(BaseModel):
    """Fields shared by every command."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    def arguments(self) -> Dict[str, Any]:
        """Keyword arguments for the handling dispatcher method."""
        return {name: getattr(self, name) for name in type(self).model_fields if name != "command"}


# Role registry

class AddAdmin(CommandBase):
    command: Literal["add_admin"] = "add_admin"
    account_id: uuid.UUID


class AddTeacher(CommandBase):
    command: Literal["add_teacher"] = "add_teacher"
    account_id: uuid.UUID


class AddStudent(CommandBase):
    command: Literal["add_student"] = "add_student"
    account_id: uuid.UUID


class RemoveAdmin(CommandBase):
    command: Literal["remove_admin"] = "remove_admin"
    account_id: uuid.UUID


class RemoveTeacher(CommandBase):
    command: Literal["remove_teacher"] = "remove_teacher"
    account_id: uuid.UUID


class RemoveStudent(CommandBase):
    command: Literal["remove_student"] = "remove_student"
    account_id: uuid.UUID


# Class roster

class AddClass(CommandBase):
    command: Literal["add_class"] = "add_class"
    class_name: str = Field(..., min_length=1)
    teacher: uuid.UUID
    students: List[uuid.UUID] = Field(default_factory=list)


class RemoveClass(CommandBase):
    command: Literal["remove_class"] = "remove_class"
    class_name: str = Field(..., min_length=1)


class ChangeTeacher(CommandBase):
    command: Literal["change_teacher"] = "change_teacher"
    class_name: str = Field(..., min_length=1)
    teacher: uuid.UUID


class EnrollStudent(CommandBase):
    command: Literal["enroll_student"] = "enroll_student"
    class_name: str = Field(..., min_length=1)
    student: uuid.UUID


class UnenrollStudent(CommandBase):
    command: Literal["unenroll_student"] = "unenroll_student"
    class_name: str = Field(..., min_length=1)
    student: uuid.UUID


# Grades and access

class AddScore(CommandBase):
    command: Literal["add_score"] = "add_score"
    class_name: str = Field(..., min_length=1)
    student: uuid.UUID
    value: int = Field(..., ge=0)


class AddAccess(CommandBase):
    command: Literal["add_access"] = "add_access"
    student: uuid.UUID
    grantee: uuid.UUID


class RemoveAccess(CommandBase):
    command: Literal["remove_access"] = "remove_access"
    student: uuid.UUID
    grantee: uuid.UUID


class AccessGrades(CommandBase):
    command: Literal["access_grades"] = "access_grades"
    class_name: str
    student: uuid.UUID


Command = Annotated[
    Union[
        AddAdmin,
        AddTeacher,
        AddStudent,
        RemoveAdmin,
        RemoveTeacher,
        RemoveStudent,
        AddClass,
        RemoveClass,
        ChangeTeacher,
        EnrollStudent,
        UnenrollStudent,
        AddScore,
        AddAccess,
        RemoveAccess,
        AccessGrades,
    ],
    Field(discriminator="command"),
]

_command_adapter: TypeAdapter = TypeAdapter(Command)


def parse_command(payload: Dict[str, Any]) -> CommandBase:
    """
    Build a command model from a plain mapping.

    Raises:
        pydantic.ValidationError: unknown command name or malformed fields
    """
    return _command_adapter.validate_python(payload)
