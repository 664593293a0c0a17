"""Boundary to the remote publishing platform.

notedraft never talks to the network itself. A platform integration
implements :class:`PlatformClient`; token handling, retries and timeouts
are its own business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from notedraft.publish.models import ArticleDraft


class PlatformClient(ABC):
    """Uploads assets and creates drafts on a publishing platform."""

    @abstractmethod
    def upload_cover_image(self, path: Path) -> str:
        """Upload a thumbnail image and return its platform media id."""

    @abstractmethod
    def upload_content_image(self, path: Path) -> str:
        """Upload an image used inside the article body and return its URL."""

    @abstractmethod
    def create_draft(self, draft: ArticleDraft) -> str:
        """Create a draft article and return its media id."""
