"""
Role Registry - administrator, teacher and student sets.
"""

from typing import Tuple

from transcript.kernel.errors import InvalidInput
from transcript.kernel.models.base import AccountId, OrderedIdSet
from transcript.kernel.models.roles import Role
from transcript.kernel.models.state import TranscriptState
from transcript.logging_config import get_logger

logger = get_logger(__name__)


class RoleRegistry:
    """
    Membership tests and add/remove operations for the three role sets.

    Capability checks are the dispatcher's job; this class only enforces
    uniqueness and presence.
    """

    def __init__(self, state: TranscriptState):
        self.state = state

    def _members(self, role: Role) -> OrderedIdSet:
        if role == Role.ADMIN:
            return self.state.admin_set
        if role == Role.TEACHER:
            return self.state.teacher_set
        return self.state.student_set

    def has_role(self, account_id: AccountId, role: Role) -> bool:
        return account_id in self._members(role)

    def is_admin(self, account_id: AccountId) -> bool:
        return self.has_role(account_id, Role.ADMIN)

    def is_teacher(self, account_id: AccountId) -> bool:
        return self.has_role(account_id, Role.TEACHER)

    def is_student(self, account_id: AccountId) -> bool:
        return self.has_role(account_id, Role.STUDENT)

    def members(self, role: Role) -> Tuple[AccountId, ...]:
        return tuple(self._members(role))

    def count(self, role: Role) -> int:
        return len(self._members(role))

    def add(self, role: Role, account_id: AccountId) -> None:
        """
        Append an id to a role set.

        Raises:
            InvalidInput: if the id already holds the role
        """
        if not self._members(role).add(account_id):
            raise InvalidInput(f"{account_id} is already a {role.value}")
        logger.debug("Role granted", extra={"role": role.value, "account_id": str(account_id)})

    def remove(self, role: Role, account_id: AccountId) -> None:
        """
        Remove an id from a role set.

        Raises:
            InvalidInput: if the id does not hold the role
        """
        if not self._members(role).discard(account_id):
            raise InvalidInput(f"{account_id} is not a {role.value}")
        logger.debug("Role revoked", extra={"role": role.value, "account_id": str(account_id)})

    def discard(self, role: Role, account_id: AccountId) -> bool:
        """Remove an id if present. Returns True if it was removed."""
        return self._members(role).discard(account_id)
