"""
Access Grant Directory.
"""

from transcript.engines.access.access_directory import AccessGrantDirectory

__all__ = ["AccessGrantDirectory"]
