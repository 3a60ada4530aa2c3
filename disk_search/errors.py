class DiskSearchError(Exception):
    """Base class for errors raised by disk_search."""


class IndexStoreError(DiskSearchError):
    """The persisted index could not be written or read back."""
