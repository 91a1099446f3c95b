"""
Command dispatcher: the public command surface of the transcript engine.

Each command resolves the caller (passed explicitly), checks capability,
then mutates one or more stores. Any failure raises before a mutation is
visible: every command runs inside transaction(), so a failing step also
undoes the steps before it.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from pydantic import ValidationError

from transcript.config import Settings, get_settings
from transcript.engines.access.access_directory import AccessGrantDirectory
from transcript.engines.grades.grade_ledger import GradeLedger
from transcript.engines.roles.role_registry import RoleRegistry
from transcript.engines.roster.class_roster import ClassRoster
from transcript.kernel.errors import AccessNotAllowed, InvalidInput, TranscriptError
from transcript.kernel.models.base import AccountId
from transcript.kernel.models.roles import Role
from transcript.kernel.models.state import TranscriptState, transaction
from transcript.kernel.permissions.permission_service import PermissionService
from transcript.logging_config import command_scope, configure_from_settings, get_logger
from transcript.schemas.commands import CommandBase, parse_command

logger = get_logger(__name__)


class CommandDispatcher:
    """
    Runs commands against one TranscriptState.

    Usage:
        dispatcher = CommandDispatcher.create(admin_id)
        dispatcher.add_teacher(admin_id, teacher_id)
        dispatcher.add_student(admin_id, student_id)
        dispatcher.add_class(admin_id, "CS50", teacher_id, [student_id])
        dispatcher.add_score(teacher_id, "CS50", student_id, 2)
        dispatcher.access_grades(student_id, "CS50", student_id)  # [2]
    """

    def __init__(self, state: TranscriptState, settings: Optional[Settings] = None):
        self.state = state
        self.settings = settings or get_settings()
        self.permissions = PermissionService(state)
        self.registry = RoleRegistry(state)
        self.roster = ClassRoster(state, self.registry)
        self.ledger = GradeLedger(state, max_score=self.settings.max_score)
        self.access = AccessGrantDirectory(state)

    @classmethod
    def create(
        cls,
        creator: AccountId,
        settings: Optional[Settings] = None,
        *,
        setup_logging: bool = False,
    ) -> "CommandDispatcher":
        """
        Fresh engine whose only administrator is the creator.

        With setup_logging=True the root logger is configured from the
        log_level, environment and debug settings first.
        """
        dispatcher = cls(TranscriptState.new(creator), settings=settings)
        if setup_logging:
            configure_from_settings(dispatcher.settings)
        logger.info(
            "Starting %s v%s",
            dispatcher.settings.project_name,
            dispatcher.settings.version,
            extra={"creator": str(creator)},
        )
        return dispatcher

    @contextmanager
    def _command(self, name: str, caller: AccountId, *, mutating: bool = True, **fields: Any) -> Iterator[None]:
        """Correlation id, all-or-nothing execution and outcome logging for one command."""
        log_extra = {"command": name, "caller": str(caller)}
        log_extra.update({key: str(value) for key, value in fields.items()})
        with command_scope(name):
            try:
                if mutating:
                    with transaction(self.state):
                        yield
                else:
                    yield
            except TranscriptError as exc:
                logger.warning(
                    "Command rejected",
                    extra={**log_extra, "error": exc.code, "detail": exc.detail},
                )
                raise
            logger.info("Command applied", extra=log_extra)

    # Role registry

    def add_admin(self, caller: AccountId, account_id: AccountId) -> None:
        with self._command("add_admin", caller, account_id=account_id):
            self.permissions.require("add_admin", caller)
            self.registry.add(Role.ADMIN, account_id)

    def add_teacher(self, caller: AccountId, account_id: AccountId) -> None:
        with self._command("add_teacher", caller, account_id=account_id):
            self.permissions.require("add_teacher", caller)
            self.registry.add(Role.TEACHER, account_id)

    def add_student(self, caller: AccountId, account_id: AccountId) -> None:
        """Register a student and seed their access list with themself."""
        with self._command("add_student", caller, account_id=account_id):
            self.permissions.require("add_student", caller)
            self.registry.add(Role.STUDENT, account_id)
            self.access.seed(account_id)

    def remove_admin(self, caller: AccountId, account_id: AccountId) -> None:
        """
        Remove an administrator.

        Refused unless the caller is an admin and removal keeps at least
        `min_admins` administrators. Removing a non-admin id is a no-op.
        """
        with self._command("remove_admin", caller, account_id=account_id):
            self.permissions.require("remove_admin", caller)
            if self.registry.count(Role.ADMIN) <= max(self.settings.min_admins, 1):
                raise AccessNotAllowed("Cannot remove the last administrator")
            self.registry.discard(Role.ADMIN, account_id)

    def remove_teacher(self, caller: AccountId, account_id: AccountId) -> None:
        """
        Remove a teacher.

        Classes keep referencing the removed id; see
        TranscriptState.orphaned_classes() and change_teacher().
        """
        with self._command("remove_teacher", caller, account_id=account_id):
            self.permissions.require("remove_teacher", caller)
            self.registry.remove(Role.TEACHER, account_id)
            orphaned = [
                name for name in self.state.class_list
                if self.state.class_records[name].teacher == account_id
            ]
            if orphaned:
                logger.warning(
                    "Removed teacher still assigned to classes",
                    extra={"account_id": str(account_id), "classes": orphaned},
                )

    def remove_student(self, caller: AccountId, account_id: AccountId) -> None:
        """
        Remove a student and everything derived from them.

        For each enrolled class the grade record is deleted and the student
        is unenrolled; then the access list and the student entry go. A
        failing step rolls back the whole command.
        """
        with self._command("remove_student", caller, account_id=account_id):
            self.permissions.require("remove_student", caller)
            if not self.registry.is_student(account_id):
                raise InvalidInput(f"{account_id} is not a student")
            for class_name in self.roster.classes_of(account_id):
                self.ledger.drop(account_id, class_name)
                self._unenroll(class_name, account_id)
            self.access.drop(account_id)
            self.registry.remove(Role.STUDENT, account_id)

    # Class roster

    def add_class(
        self,
        caller: AccountId,
        class_name: str,
        teacher: AccountId,
        students: Iterable[AccountId] = (),
    ) -> None:
        with self._command("add_class", caller, class_name=class_name, teacher=teacher):
            self.permissions.require("add_class", caller)
            self.roster.create(class_name, teacher, students)

    def remove_class(self, caller: AccountId, class_name: str) -> None:
        """Delete a class and every grade record attached to it."""
        with self._command("remove_class", caller, class_name=class_name):
            self.permissions.require("remove_class", caller)
            record = self.roster.delete(class_name)
            self.ledger.drop_class(class_name, record.students)

    def enroll_student(self, caller: AccountId, class_name: str, student: AccountId) -> None:
        with self._command("enroll_student", caller, class_name=class_name, student=student):
            self.permissions.require("enroll_student", caller)
            self.roster.enroll(class_name, student)
            self.ledger.open(student, class_name)

    def unenroll_student(self, caller: AccountId, class_name: str, student: AccountId) -> None:
        with self._command("unenroll_student", caller, class_name=class_name, student=student):
            self.permissions.require("unenroll_student", caller)
            self._unenroll(class_name, student)

    def _unenroll(self, class_name: str, student: AccountId) -> None:
        self.roster.unenroll(class_name, student)
        self.ledger.drop(student, class_name)

    def change_teacher(self, caller: AccountId, class_name: str, teacher: AccountId) -> None:
        with self._command("change_teacher", caller, class_name=class_name, teacher=teacher):
            self.permissions.require("change_teacher", caller)
            self.roster.change_teacher(class_name, teacher)

    # Grade ledger

    def add_score(self, caller: AccountId, class_name: str, student: AccountId, value: int) -> None:
        """
        Append a score. Only the class's recorded teacher may do this.

        Raises:
            InvalidInput: unknown class or out-of-range value
            AccessNotAllowed: caller is not the class teacher or the
                student is not enrolled
        """
        with self._command("add_score", caller, class_name=class_name, student=student, value=value):
            record = self.roster.get(class_name)
            self.permissions.require("add_score", caller, class_name=class_name)
            if not record.is_enrolled(student):
                raise AccessNotAllowed(f"{student} is not enrolled in {class_name!r}")
            self.ledger.append(student, class_name, value)

    # Access grants

    def add_access(self, caller: AccountId, student: AccountId, grantee: AccountId) -> None:
        """Allow grantee to read the student's grades (teacher, admin or the student)."""
        with self._command("add_access", caller, student=student, grantee=grantee):
            self.permissions.require("add_access", caller, student_id=student)
            self.access.grant(student, grantee)

    def remove_access(self, caller: AccountId, student: AccountId, grantee: AccountId) -> None:
        """Withdraw a grant (teacher or admin only). Absent grantees are ignored."""
        with self._command("remove_access", caller, student=student, grantee=grantee):
            self.permissions.require("remove_access", caller, student_id=student)
            self.access.revoke(student, grantee)

    def access_grades(self, caller: AccountId, class_name: str, student: AccountId) -> List[int]:
        """Read the student's scores for a class; empty when nothing is recorded."""
        with self._command("access_grades", caller, mutating=False, class_name=class_name, student=student):
            self.permissions.require("access_grades", caller, student_id=student)
            return self.ledger.read(student, class_name)

    # Generic entry point

    def dispatch(self, caller: AccountId, command: Union[CommandBase, Dict[str, Any]]) -> Any:
        """
        Run a command given as a schema model or a plain mapping.

        Raises:
            InvalidInput: if the mapping does not validate as a command
        """
        if not isinstance(command, CommandBase):
            try:
                command = parse_command(command)
            except ValidationError as exc:
                logger.warning("Malformed command", extra={"caller": str(caller), "errors": exc.error_count()})
                raise InvalidInput(f"Malformed command: {exc.error_count()} validation error(s)") from exc
        handler = getattr(self, command.command)
        return handler(caller, **command.arguments())
