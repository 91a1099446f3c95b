"""Unit tests for the grade ledger and add_score."""

import pytest

from transcript.engines.grades.grade_ledger import GradeLedger
from transcript.kernel.errors import AccessNotAllowed, InvalidInput


class TestGradeLedger:
    """Tests for GradeLedger in isolation."""

    def test_append_creates_record(self, state, bob):
        """The first score creates the record."""
        ledger = GradeLedger(state)
        assert ledger.append(bob, "CS50", 2) == [2]
        assert state.grade_records[(bob, "CS50")] == [2]

    def test_append_keeps_order_and_duplicates(self, state, bob):
        """Scores are neither reordered nor deduplicated."""
        ledger = GradeLedger(state)
        for value in (3, 1, 3):
            ledger.append(bob, "CS50", value)
        assert ledger.read(bob, "CS50") == [3, 1, 3]

    def test_read_missing_is_empty(self, state, bob):
        """Reading a missing record yields an empty sequence."""
        assert GradeLedger(state).read(bob, "CS50") == []

    def test_validate_bounds(self, state):
        """Scores must be ints within 0..max_score."""
        ledger = GradeLedger(state, max_score=10)
        assert ledger.validate(0) == 0
        assert ledger.validate(10) == 10
        for bad in (-1, 11, 2.5, "3", True):
            with pytest.raises(InvalidInput):
                ledger.validate(bad)

    def test_drop_class(self, state, bob, eve):
        """Only the listed students' records for the class are removed."""
        ledger = GradeLedger(state)
        ledger.append(bob, "CS50", 1)
        ledger.append(eve, "CS50", 2)
        ledger.append(bob, "CS51", 3)
        assert ledger.drop_class("CS50", [bob, eve]) == 2
        assert state.grade_records == {(bob, "CS51"): [3]}


class TestAddScore:
    """Tests for the add_score command."""

    def test_add_score(self, dispatcher, alice, bob, eve, charlie):
        """Only the class teacher records scores, in order."""
        dispatcher.add_teacher(alice, alice)
        dispatcher.add_teacher(alice, eve)
        dispatcher.add_student(alice, bob)
        dispatcher.add_class(alice, "CS50", alice, [bob])
        dispatcher.add_class(alice, "CS51", eve, [bob])
        dispatcher.add_score(alice, "CS50", bob, 2)
        assert dispatcher.state.scores(bob, "CS50") == [2]
        assert dispatcher.access_grades(alice, "CS50", bob) == [2]

        dispatcher.add_admin(alice, charlie)
        dispatcher.remove_admin(alice, alice)
        # class teacher rights do not depend on the admin role
        dispatcher.add_score(alice, "CS50", bob, 3)
        assert dispatcher.access_grades(alice, "CS50", bob) == [2, 3]
        with pytest.raises(AccessNotAllowed):
            dispatcher.add_score(alice, "CS51", bob, 3)

    def test_unknown_class(self, school, alice, bob):
        """Scoring in an unknown class is invalid."""
        with pytest.raises(InvalidInput):
            school.add_score(alice, "CS99", bob, 1)

    def test_not_enrolled(self, school, alice, frank):
        """Scoring a student who is not on the roster is refused."""
        with pytest.raises(AccessNotAllowed):
            school.add_score(alice, "CS50", frank, 1)

    def test_admin_is_not_class_teacher(self, school, alice, charlie, bob):
        """Admins without the class cannot record scores."""
        school.add_admin(alice, charlie)
        with pytest.raises(AccessNotAllowed):
            school.add_score(charlie, "CS50", bob, 1)

    def test_value_checked_after_capability(self, school, alice, eve, bob):
        """Out-of-range values are invalid for the teacher, refused for others."""
        with pytest.raises(InvalidInput):
            school.add_score(alice, "CS50", bob, 256)
        with pytest.raises(AccessNotAllowed):
            school.add_score(eve, "CS50", bob, 256)
        assert school.state.scores(bob, "CS50") is None

    def test_max_score_from_settings(self, alice, bob, settings):
        """The upper bound follows the configured max_score."""
        from transcript.orchestration.dispatcher import CommandDispatcher

        dispatcher = CommandDispatcher.create(alice, settings=settings.model_copy(update={"max_score": 5}))
        dispatcher.add_teacher(alice, alice)
        dispatcher.add_student(alice, bob)
        dispatcher.add_class(alice, "CS50", alice, [bob])
        dispatcher.add_score(alice, "CS50", bob, 5)
        with pytest.raises(InvalidInput):
            dispatcher.add_score(alice, "CS50", bob, 6)
