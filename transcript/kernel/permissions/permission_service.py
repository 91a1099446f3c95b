"""
Permission service for role- and ownership-based access control.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from transcript.kernel.errors import AccessNotAllowed
from transcript.kernel.models.base import AccountId
from transcript.kernel.models.roles import Role
from transcript.kernel.models.state import TranscriptState


class Capability(str, Enum):
    """Relationships between a caller and a command's subject that grant access."""
    ADMIN = "admin"                      # member of the admin set
    TEACHER = "teacher"                  # member of the teacher set
    CLASS_TEACHER = "class_teacher"      # the teacher recorded on the class
    SUBJECT_STUDENT = "subject_student"  # the student the command is about
    GRANTEE = "grantee"                  # on the student's access grant list


_ADMIN_ONLY = frozenset({Capability.ADMIN})

# Command -> capabilities; holding any one of them is sufficient
CAPABILITY_MATRIX: Dict[str, FrozenSet[Capability]] = {
    # Role registry
    "add_admin": _ADMIN_ONLY,
    "add_teacher": _ADMIN_ONLY,
    "add_student": _ADMIN_ONLY,
    "remove_admin": _ADMIN_ONLY,
    "remove_teacher": _ADMIN_ONLY,
    "remove_student": _ADMIN_ONLY,
    # Class roster
    "add_class": _ADMIN_ONLY,
    "remove_class": _ADMIN_ONLY,
    "enroll_student": _ADMIN_ONLY,
    "unenroll_student": _ADMIN_ONLY,
    "change_teacher": _ADMIN_ONLY,
    # Grade ledger
    "add_score": frozenset({Capability.CLASS_TEACHER}),
    # Access grants
    "add_access": frozenset({Capability.TEACHER, Capability.ADMIN, Capability.SUBJECT_STUDENT}),
    "remove_access": frozenset({Capability.TEACHER, Capability.ADMIN}),
    "access_grades": frozenset({Capability.TEACHER, Capability.ADMIN, Capability.GRANTEE}),
}


class PermissionService:
    """
    Service for checking command capabilities against the current state.

    Capability sources:
    - Role membership (admin, teacher)
    - Ownership of the subject (class teacher, the student themself)
    - Explicit access grants (grantee list of a student)
    """

    def __init__(self, state: TranscriptState):
        self.state = state

    def has_role(self, caller: AccountId, role: Role) -> bool:
        members = {
            Role.ADMIN: self.state.admin_set,
            Role.TEACHER: self.state.teacher_set,
            Role.STUDENT: self.state.student_set,
        }[role]
        return caller in members

    def has_capability(
        self,
        caller: AccountId,
        capability: Capability,
        *,
        class_name: Optional[str] = None,
        student_id: Optional[AccountId] = None,
    ) -> bool:
        """
        Check a single capability.

        Ownership capabilities need the subject they refer to; without it
        they are never held.
        """
        if capability == Capability.ADMIN:
            return self.has_role(caller, Role.ADMIN)
        if capability == Capability.TEACHER:
            return self.has_role(caller, Role.TEACHER)
        if capability == Capability.CLASS_TEACHER:
            record = self.state.class_records.get(class_name) if class_name is not None else None
            return record is not None and record.teacher == caller
        if capability == Capability.SUBJECT_STUDENT:
            return student_id is not None and caller == student_id
        if capability == Capability.GRANTEE:
            grants = self.state.access_grants.get(student_id) if student_id is not None else None
            return grants is not None and caller in grants
        return False

    def check(
        self,
        command: str,
        caller: AccountId,
        *,
        class_name: Optional[str] = None,
        student_id: Optional[AccountId] = None,
    ) -> bool:
        """Check if the caller holds any capability the command accepts."""
        required = CAPABILITY_MATRIX.get(command, frozenset())
        return any(
            self.has_capability(caller, cap, class_name=class_name, student_id=student_id)
            for cap in required
        )

    def require(
        self,
        command: str,
        caller: AccountId,
        *,
        class_name: Optional[str] = None,
        student_id: Optional[AccountId] = None,
    ) -> None:
        """
        Raise AccessNotAllowed unless the caller may run the command.

        Raises:
            AccessNotAllowed: if no accepted capability is held
        """
        if not self.check(command, caller, class_name=class_name, student_id=student_id):
            accepted = ", ".join(sorted(cap.value for cap in CAPABILITY_MATRIX.get(command, ())))
            raise AccessNotAllowed(f"{command} requires one of: {accepted or 'nothing grantable'}")
