"""
errors.py – Exception hierarchy for rdbsite.

Every failure raised by the pipeline derives from SiteError so the command
line entry point can report it and pick an exit code in one place.
"""


class SiteError(Exception):
    """Base class for all rdbsite exceptions."""


class DatabaseError(SiteError):
    """Raised when the database directory cannot be listed."""


class TemplateLoadError(SiteError):
    """Raised when a required template is missing or fails to compile."""


class RenderError(SiteError):
    """Raised when a template fails while rendering a page."""


class OutputError(SiteError):
    """Raised when an output directory or file cannot be created."""

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot write {path}: {cause}")


class BuildError(SiteError):
    """
    Raised after the join barrier when one or more page workers failed.

    Attributes
    ----------
    errors : The exceptions raised by the failed workers, keyed by system.
    """

    def __init__(self, errors: dict[str, Exception]) -> None:
        self.errors = errors
        details = "; ".join(f"{system}: {exc}" for system, exc in sorted(errors.items()))
        super().__init__(f"{len(errors)} system(s) failed to build: {details}")
