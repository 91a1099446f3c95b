"""
Class Roster Store - class name -> assigned teacher and enrolled students.
"""

from typing import Iterable, List

from transcript.engines.roles.role_registry import RoleRegistry
from transcript.kernel.errors import InvalidInput
from transcript.kernel.models.base import AccountId, OrderedIdSet
from transcript.kernel.models.classroom import ClassRecord
from transcript.kernel.models.state import TranscriptState
from transcript.logging_config import get_logger

logger = get_logger(__name__)


class ClassRoster:
    """
    Maintains class records and the active class list.

    Referential checks against the role registry happen here:
    - a class teacher must be a registered teacher when assigned
    - every enrolled id must be a registered student
    - a class name is active at most once
    """

    def __init__(self, state: TranscriptState, registry: RoleRegistry):
        self.state = state
        self.registry = registry

    def exists(self, name: str) -> bool:
        return name in self.state.class_records

    def get(self, name: str) -> ClassRecord:
        """
        Look up an active class.

        Raises:
            InvalidInput: if no class has this name
        """
        record = self.state.class_records.get(name)
        if record is None:
            raise InvalidInput(f"Unknown class {name!r}")
        return record

    def create(self, name: str, teacher_id: AccountId, student_ids: Iterable[AccountId]) -> ClassRecord:
        """
        Register a new class.

        Duplicate ids in student_ids are collapsed.

        Raises:
            InvalidInput: if the teacher or any student is unregistered,
                the name is empty, or the name is already active
        """
        student_ids = list(student_ids)
        if not name:
            raise InvalidInput("Class name must not be empty")
        if not self.registry.is_teacher(teacher_id):
            raise InvalidInput(f"{teacher_id} is not a teacher")
        unknown = [sid for sid in student_ids if not self.registry.is_student(sid)]
        if unknown:
            raise InvalidInput(f"Not registered as students: {', '.join(map(str, unknown))}")
        if self.exists(name):
            raise InvalidInput(f"Class {name!r} already exists")

        record = ClassRecord(name=name, teacher=teacher_id, students=OrderedIdSet(student_ids))
        self.state.class_records[name] = record
        self.state.class_list.append(name)
        logger.debug("Class created", extra={"class_name": name, "roster_size": len(record.students)})
        return record

    def delete(self, name: str) -> ClassRecord:
        """
        Remove a class and its name from the active list.

        Returns the removed record so callers can cascade over its roster.

        Raises:
            InvalidInput: if no class has this name
        """
        record = self.get(name)
        del self.state.class_records[name]
        self.state.class_list.remove(name)
        return record

    def enroll(self, name: str, student_id: AccountId) -> None:
        """
        Add a registered student to a class roster.

        Raises:
            InvalidInput: unknown class, unregistered student, or already enrolled
        """
        record = self.get(name)
        if not self.registry.is_student(student_id):
            raise InvalidInput(f"{student_id} is not a student")
        if not record.students.add(student_id):
            raise InvalidInput(f"{student_id} is already enrolled in {name!r}")

    def unenroll(self, name: str, student_id: AccountId) -> None:
        """
        Remove a registered student from a class roster.

        Raises:
            InvalidInput: unknown class, unregistered student, or not enrolled
        """
        record = self.get(name)
        if not self.registry.is_student(student_id) or not record.is_enrolled(student_id):
            raise InvalidInput(f"{student_id} is not enrolled in {name!r}")
        record.students.discard(student_id)

    def change_teacher(self, name: str, teacher_id: AccountId) -> None:
        """
        Reassign a class to another registered teacher, keeping its roster.

        Raises:
            InvalidInput: unregistered teacher or unknown class
        """
        if not self.registry.is_teacher(teacher_id):
            raise InvalidInput(f"{teacher_id} is not a teacher")
        record = self.get(name)
        record.teacher = teacher_id

    def classes_of(self, student_id: AccountId) -> List[str]:
        return self.state.classes_of(student_id)
