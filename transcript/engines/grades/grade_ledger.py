"""
Grade Ledger - (student, class) -> append-ordered scores.
"""

from typing import Iterable, List

from transcript.kernel.errors import InvalidInput
from transcript.kernel.models.base import AccountId
from transcript.kernel.models.state import TranscriptState


class GradeLedger:
    """
    Append-only score sequences per enrollment.

    Scores are never reordered, deduplicated, edited or individually
    deleted. Whole records disappear only when the enrollment does.
    """

    def __init__(self, state: TranscriptState, max_score: int = 255):
        self.state = state
        self.max_score = max_score

    def open(self, student_id: AccountId, class_name: str) -> None:
        """Start an empty record for a new enrollment."""
        self.state.grade_records[(student_id, class_name)] = []

    def validate(self, value: int) -> int:
        """
        Raises:
            InvalidInput: if value is not an int in [0, max_score]
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(f"Score must be an integer, got {type(value).__name__}")
        if not 0 <= value <= self.max_score:
            raise InvalidInput(f"Score {value} outside 0..{self.max_score}")
        return value

    def append(self, student_id: AccountId, class_name: str, value: int) -> List[int]:
        """Append a score, creating the record if absent. Returns the new sequence."""
        self.validate(value)
        scores = list(self.state.grade_records.get((student_id, class_name), []))
        scores.append(value)
        self.state.grade_records[(student_id, class_name)] = scores
        return list(scores)

    def read(self, student_id: AccountId, class_name: str) -> List[int]:
        """Scores for the enrollment; empty if there is no record."""
        return list(self.state.grade_records.get((student_id, class_name), []))

    def drop(self, student_id: AccountId, class_name: str) -> bool:
        """Delete one record. Returns True if a record existed."""
        return self.state.grade_records.pop((student_id, class_name), None) is not None

    def drop_class(self, class_name: str, student_ids: Iterable[AccountId]) -> int:
        """Delete the records of every listed student for a class. Returns the count removed."""
        return sum(1 for sid in student_ids if self.drop(sid, class_name))
