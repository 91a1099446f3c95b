from transcript.engines.grades.grade_ledger import GradeLedger

__all__ = ["GradeLedger"]
