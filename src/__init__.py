"""notedraft: dated markdown notes to platform-ready HTML drafts."""

__version__ = "0.1.0"
