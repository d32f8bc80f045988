"""Local persistence for SLTP."""

from sltp.db.store import JournalStore

__all__ = ["JournalStore"]
