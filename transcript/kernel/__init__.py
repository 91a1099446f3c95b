"""
Kernel Layer

Record types, the state object, error kinds and permission checks shared by
every engine.

Invariants:
- Every command checks capability before mutating a store
- Every command is all-or-nothing (see models.state.transaction)
- The admin set never drops below one member
"""

from transcript.kernel.errors import AccessNotAllowed, InvalidInput, TranscriptError
from transcript.kernel.models import (
    AccountId,
    ClassRecord,
    OrderedIdSet,
    Role,
    TranscriptState,
    transaction,
)

__all__ = [
    # Errors
    "TranscriptError",
    "AccessNotAllowed",
    "InvalidInput",
    # Models
    "AccountId",
    "ClassRecord",
    "OrderedIdSet",
    "Role",
    "TranscriptState",
    "transaction",
]
