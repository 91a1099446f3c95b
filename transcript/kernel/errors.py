"""
Error kinds raised by transcript commands.

There are exactly two: a capability failure and a constraint failure.
Both are terminal for the invocation that raised them.
"""


class TranscriptError(Exception):
    """Base class for command failures."""

    code = "transcript_error"

    def __init__(self, detail: str = ""):
        self.detail = detail or self.__class__.__name__
        super().__init__(self.detail)


class AccessNotAllowed(TranscriptError):
    """Caller lacks the role or ownership the command requires."""

    code = "access_not_allowed"


class InvalidInput(TranscriptError):
    """Request violates a referential or uniqueness constraint."""

    code = "invalid_input"
