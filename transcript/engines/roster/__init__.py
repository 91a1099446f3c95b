"""
Class Roster Store.
"""

from transcript.engines.roster.class_roster import ClassRoster

__all__ = ["ClassRoster"]
