"""
Store engines.

- roles: administrator, teacher and student sets
- roster: class records and the active class list
- grades: append-only score sequences per enrollment
- access: per-student grade viewer lists
"""
