"""
Transcript Ledger

Access-control and relational-integrity engine for academic records:
role registry, class rosters, grade ledger and grade access grants.

Caller identity and durable storage are supplied by the host; every
command takes the caller explicitly and operates on a TranscriptState.
"""

from transcript.kernel.errors import AccessNotAllowed, InvalidInput, TranscriptError
from transcript.kernel.models.state import TranscriptState
from transcript.orchestration.dispatcher import CommandDispatcher

__version__ = "0.1.0"

__all__ = [
    "CommandDispatcher",
    "TranscriptState",
    "TranscriptError",
    "AccessNotAllowed",
    "InvalidInput",
]
