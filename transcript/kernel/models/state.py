"""
Explicit state object holding the four stores.

Every command handler receives this object by reference; nothing is kept in
module-level storage. Mutation happens only through the engines, driven by
the command dispatcher.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from transcript.kernel.models.base import AccountId, OrderedIdSet
from transcript.kernel.models.classroom import ClassRecord

GradeKey = Tuple[AccountId, str]


@dataclass
class TranscriptState:
    """
    Role registry, class roster store, grade ledger and access grant directory.

    Attributes:
        admin_set / teacher_set / student_set: role registry
        class_list: active class names in creation order
        class_records: class name -> ClassRecord
        grade_records: (student, class name) -> scores, append-ordered
        access_grants: student -> ids allowed to read that student's grades
    """

    admin_set: OrderedIdSet = field(default_factory=OrderedIdSet)
    teacher_set: OrderedIdSet = field(default_factory=OrderedIdSet)
    student_set: OrderedIdSet = field(default_factory=OrderedIdSet)
    class_list: List[str] = field(default_factory=list)
    class_records: Dict[str, ClassRecord] = field(default_factory=dict)
    grade_records: Dict[GradeKey, List[int]] = field(default_factory=dict)
    access_grants: Dict[AccountId, OrderedIdSet] = field(default_factory=dict)

    @classmethod
    def new(cls, creator: AccountId) -> "TranscriptState":
        """Fresh state with the creator as the only administrator."""
        return cls(admin_set=OrderedIdSet([creator]))

    # Read-only views

    @property
    def admins(self) -> Tuple[AccountId, ...]:
        return tuple(self.admin_set)

    @property
    def teachers(self) -> Tuple[AccountId, ...]:
        return tuple(self.teacher_set)

    @property
    def students(self) -> Tuple[AccountId, ...]:
        return tuple(self.student_set)

    @property
    def class_names(self) -> Tuple[str, ...]:
        return tuple(self.class_list)

    def class_record(self, name: str) -> Optional[ClassRecord]:
        """Copy of the class record, or None if the class does not exist."""
        record = self.class_records.get(name)
        if record is None:
            return None
        return _copy_record(record)

    def scores(self, student_id: AccountId, name: str) -> Optional[List[int]]:
        """Copy of the grade record, or None if no record exists."""
        scores = self.grade_records.get((student_id, name))
        return list(scores) if scores is not None else None

    def grantees(self, student_id: AccountId) -> Optional[List[AccountId]]:
        """Ids allowed to read the student's grades, or None if no entry exists."""
        grants = self.access_grants.get(student_id)
        return grants.as_list() if grants is not None else None

    def classes_of(self, student_id: AccountId) -> List[str]:
        """Active classes the student is enrolled in, in class creation order."""
        return [
            name for name in self.class_list
            if self.class_records[name].is_enrolled(student_id)
        ]

    def orphaned_classes(self) -> List[str]:
        """Active classes whose recorded teacher is no longer a registered teacher."""
        return [
            name for name in self.class_list
            if self.class_records[name].teacher not in self.teacher_set
        ]

    # Snapshots

    def snapshot(self) -> "TranscriptState":
        """Independent copy of every store."""
        return TranscriptState(
            admin_set=self.admin_set.copy(),
            teacher_set=self.teacher_set.copy(),
            student_set=self.student_set.copy(),
            class_list=list(self.class_list),
            class_records={
                name: _copy_record(record) for name, record in self.class_records.items()
            },
            grade_records={key: list(scores) for key, scores in self.grade_records.items()},
            access_grants={sid: grants.copy() for sid, grants in self.access_grants.items()},
        )

    def restore(self, snapshot: "TranscriptState") -> None:
        """Replace every store with the contents of a snapshot."""
        self.admin_set = snapshot.admin_set
        self.teacher_set = snapshot.teacher_set
        self.student_set = snapshot.student_set
        self.class_list = snapshot.class_list
        self.class_records = snapshot.class_records
        self.grade_records = snapshot.grade_records
        self.access_grants = snapshot.access_grants


def _copy_record(record: ClassRecord) -> ClassRecord:
    return record.model_copy(update={"students": record.students.copy()})


@contextmanager
def transaction(state: TranscriptState) -> Iterator[TranscriptState]:
    """
    Run a block of mutations all-or-nothing.

    The state is snapshotted on entry and restored if any exception escapes.
    """
    snapshot = state.snapshot()
    try:
        yield state
    except Exception:
        state.restore(snapshot)
        raise
