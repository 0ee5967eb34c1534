"""Manager modules for Bastuklubb.

Managers orchestrate workflows over batches of members and coordinate
between the data builders and the pure engines.
"""

from .roster_manager import RosterManager

__all__ = [
    "RosterManager",
]
