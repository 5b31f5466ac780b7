# src/storage/errors.py

"""Exceptions raised when persisted run state cannot be written."""


class StorageError(Exception):
    """Base class for fatal persistence failures."""


class SnapshotWriteError(StorageError):
    """The listings snapshot could not be committed."""


class ReportWriteError(StorageError):
    """The change report could not be written."""
