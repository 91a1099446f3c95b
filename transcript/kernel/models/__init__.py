"""
Kernel Data Models

In-memory record types and the state object shared by every store.
"""

from transcript.kernel.models.base import AccountId, OrderedIdSet, generate_account_id
from transcript.kernel.models.roles import Role
from transcript.kernel.models.classroom import ClassRecord
from transcript.kernel.models.state import GradeKey, TranscriptState, transaction

__all__ = [
    # Base
    "AccountId",
    "OrderedIdSet",
    "generate_account_id",
    # Roles
    "Role",
    # Classes
    "ClassRecord",
    # State
    "GradeKey",
    "TranscriptState",
    "transaction",
]
