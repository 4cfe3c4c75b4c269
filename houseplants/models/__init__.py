"""Models package — imports all models for metadata discovery."""

from houseplants.models.base import Base, create_session_factory
from houseplants.models.document import Document

__all__ = ["Base", "create_session_factory", "Document"]
