"""Unit tests for kernel models: OrderedIdSet, TranscriptState and transaction()."""

import uuid

import pytest

from transcript.kernel.errors import InvalidInput
from transcript.kernel.models import ClassRecord, OrderedIdSet, TranscriptState, transaction


class TestOrderedIdSet:
    """Tests for the ordered duplicate-free id collection."""

    def test_preserves_insertion_order(self):
        """Enumeration follows insertion order."""
        ids = [uuid.uuid4() for _ in range(5)]
        collection = OrderedIdSet(ids)
        assert list(collection) == ids
        assert collection == ids

    def test_add_rejects_duplicates(self):
        """Adding an existing id returns False and keeps one copy."""
        a = uuid.uuid4()
        collection = OrderedIdSet([a])
        assert collection.add(a) is False
        assert len(collection) == 1

    def test_constructor_collapses_duplicates(self):
        """Duplicate ids passed at construction appear once, first position wins."""
        a, b = uuid.uuid4(), uuid.uuid4()
        assert OrderedIdSet([a, b, a]) == [a, b]

    def test_discard(self):
        """Discard removes present ids and reports absent ones."""
        a, b = uuid.uuid4(), uuid.uuid4()
        collection = OrderedIdSet([a, b])
        assert collection.discard(a) is True
        assert collection.discard(a) is False
        assert collection == [b]

    def test_copy_is_independent(self):
        """Mutating a copy leaves the original untouched."""
        a, b = uuid.uuid4(), uuid.uuid4()
        original = OrderedIdSet([a])
        clone = original.copy()
        clone.add(b)
        assert original == [a]
        assert clone == [a, b]

    def test_iteration_tolerates_mutation(self):
        """Removing while iterating does not raise."""
        ids = [uuid.uuid4() for _ in range(3)]
        collection = OrderedIdSet(ids)
        for account_id in collection:
            collection.discard(account_id)
        assert len(collection) == 0


class TestTranscriptState:
    """Tests for the state object and its read-only views."""

    def test_new_seeds_creator_as_admin(self):
        """The creator is the only administrator of a fresh state."""
        creator = uuid.uuid4()
        state = TranscriptState.new(creator)
        assert state.admins == (creator,)
        assert state.teachers == ()
        assert state.students == ()
        assert state.class_names == ()

    def test_views_are_copies(self):
        """Mutating a view does not touch the stores."""
        creator, student = uuid.uuid4(), uuid.uuid4()
        state = TranscriptState.new(creator)
        state.class_records["CS50"] = ClassRecord(name="CS50", teacher=creator, students=OrderedIdSet([student]))
        state.class_list.append("CS50")
        state.grade_records[(student, "CS50")] = [1]

        record = state.class_record("CS50")
        record.students.add(uuid.uuid4())
        scores = state.scores(student, "CS50")
        scores.append(9)

        assert state.class_records["CS50"].students == [student]
        assert state.grade_records[(student, "CS50")] == [1]

    def test_missing_records_are_none(self):
        """Views distinguish a missing record from an empty one."""
        state = TranscriptState.new(uuid.uuid4())
        assert state.class_record("nope") is None
        assert state.scores(uuid.uuid4(), "nope") is None
        assert state.grantees(uuid.uuid4()) is None

    def test_orphaned_classes(self):
        """Classes whose teacher left the teacher set are reported."""
        admin, teacher = uuid.uuid4(), uuid.uuid4()
        state = TranscriptState.new(admin)
        state.teacher_set.add(teacher)
        state.class_records["CS50"] = ClassRecord(name="CS50", teacher=teacher)
        state.class_list.append("CS50")
        assert state.orphaned_classes() == []
        state.teacher_set.discard(teacher)
        assert state.orphaned_classes() == ["CS50"]


class TestTransaction:
    """Tests for all-or-nothing execution."""

    def test_commit_keeps_changes(self):
        """Changes survive when the block completes."""
        state = TranscriptState.new(uuid.uuid4())
        teacher = uuid.uuid4()
        with transaction(state):
            state.teacher_set.add(teacher)
        assert state.teachers == (teacher,)

    def test_exception_restores_every_store(self):
        """An escaping exception undoes all mutations in the block."""
        admin, student = uuid.uuid4(), uuid.uuid4()
        state = TranscriptState.new(admin)
        state.student_set.add(student)
        state.access_grants[student] = OrderedIdSet([student])
        state.class_records["CS50"] = ClassRecord(name="CS50", teacher=admin, students=OrderedIdSet([student]))
        state.class_list.append("CS50")
        state.grade_records[(student, "CS50")] = [2, 3]
        before = state.snapshot()

        with pytest.raises(InvalidInput):
            with transaction(state):
                state.grade_records.pop((student, "CS50"))
                state.class_records["CS50"].students.discard(student)
                state.access_grants[student].add(admin)
                state.admin_set.add(uuid.uuid4())
                raise InvalidInput("boom")

        assert state.admins == before.admins
        assert state.class_records["CS50"].students == [student]
        assert state.grade_records == {(student, "CS50"): [2, 3]}
        assert state.grantees(student) == [student]
