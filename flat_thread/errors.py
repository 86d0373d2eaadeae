"""Exceptions raised at the edges of the package.

The reply computations themselves never raise for dangling references or bad
timestamps; these errors cover loading snapshots from disk.
"""


class FlatThreadError(Exception):
    """Base flat-thread error."""

    def __init__(self, message: str, code: str = "flat_thread_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class SnapshotError(FlatThreadError):
    """A comment snapshot could not be read."""

    def __init__(self, message: str = "Comment snapshot could not be loaded"):
        super().__init__(message, "snapshot_error")
