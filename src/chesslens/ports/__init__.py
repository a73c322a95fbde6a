"""Port interfaces for chesslens adapters."""

from chesslens.ports.archive_source import ArchiveSource

__all__ = ["ArchiveSource"]
