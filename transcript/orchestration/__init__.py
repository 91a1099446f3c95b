"""
Orchestration - the command dispatcher.
"""

from transcript.orchestration.dispatcher import CommandDispatcher

__all__ = ["CommandDispatcher"]
