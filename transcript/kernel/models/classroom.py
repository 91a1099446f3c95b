"""
Class roster record.
"""

from pydantic import BaseModel, ConfigDict, Field

from transcript.kernel.models.base import AccountId, OrderedIdSet


class ClassRecord(BaseModel):
    """
    A class: its assigned teacher and the students enrolled in it.

    Account ids are opaque; any hashable value is accepted for `teacher`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    teacher: AccountId
    students: OrderedIdSet = Field(default_factory=OrderedIdSet)

    def is_enrolled(self, student_id: AccountId) -> bool:
        return student_id in self.students

    def __repr__(self) -> str:
        return f"<ClassRecord {self.name} teacher={self.teacher} students={len(self.students)}>"
