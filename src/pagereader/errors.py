"""pagereader exception hierarchy.

Keep this module small and dependency-free: it is imported broadly across the
project and by tests. The renderers themselves never raise these; only the
outer shell (config, CLI, export, watch mode) does.
"""


class PageReaderError(Exception):
    """Base exception for all pagereader errors."""


class PageReaderConfigError(PageReaderError):
    """Raised for invalid user configuration."""


class PageReaderInputError(PageReaderError):
    """Raised when input text cannot be read or output cannot be written."""
