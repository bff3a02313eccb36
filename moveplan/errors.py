from __future__ import annotations


class MovePlanError(Exception):
    pass


class StorageError(MovePlanError):
    """The key-value store refused a read or write."""


class CapabilityUnavailable(MovePlanError):
    """A device capability (camera) is missing or permission was denied."""
