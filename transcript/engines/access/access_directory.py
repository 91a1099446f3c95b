"""
Access Grant Directory - student -> ids allowed to read that student's grades.
"""

from typing import List

from transcript.kernel.errors import InvalidInput
from transcript.kernel.models.base import AccountId, OrderedIdSet
from transcript.kernel.models.state import TranscriptState


class AccessGrantDirectory:
    """Ordered grantee lists, seeded with the student's own id."""

    def __init__(self, state: TranscriptState):
        self.state = state

    def seed(self, student_id: AccountId) -> None:
        """Create the entry for a new student containing only the student."""
        self.state.access_grants[student_id] = OrderedIdSet([student_id])

    def grant(self, student_id: AccountId, grantee_id: AccountId) -> None:
        """
        Append a grantee.

        Raises:
            InvalidInput: if the student has no entry or the grantee is already listed
        """
        grants = self.state.access_grants.get(student_id)
        if grants is None:
            raise InvalidInput(f"No access list for {student_id}")
        if not grants.add(grantee_id):
            raise InvalidInput(f"{grantee_id} already has access to {student_id}")

    def revoke(self, student_id: AccountId, grantee_id: AccountId) -> bool:
        """Remove a grantee if listed. Returns True if something was removed."""
        grants = self.state.access_grants.get(student_id)
        if grants is None:
            return False
        return grants.discard(grantee_id)

    def is_granted(self, student_id: AccountId, viewer_id: AccountId) -> bool:
        grants = self.state.access_grants.get(student_id)
        return grants is not None and viewer_id in grants

    def grantees(self, student_id: AccountId) -> List[AccountId]:
        grants = self.state.access_grants.get(student_id)
        return grants.as_list() if grants is not None else []

    def drop(self, student_id: AccountId) -> bool:
        """Delete the student's entry. Returns True if it existed."""
        return self.state.access_grants.pop(student_id, None) is not None
