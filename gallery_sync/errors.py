"""Exceptions raised by the sync driver."""

__all__ = ["SyncError"]


class SyncError(Exception):
    """A fatal sync condition carrying the process exit status."""

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code
