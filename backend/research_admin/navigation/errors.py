"""Errors raised by the navigation permission subsystem.

None of these ever reach the end user: the session recovers from store
errors locally and keeps serving the in-memory table.
"""


class PermissionStoreError(Exception):
    """Base class for permission store failures."""


class StoreUnreachable(PermissionStoreError):
    """The backing store could not be read or written (network, HTTP, file I/O)."""


class MalformedStoreResponse(PermissionStoreError):
    """The store answered, but not with a well-formed permission collection."""


class DuplicatePermissionError(ValueError):
    """More than one record for the same (job title, navigation item) pair."""

    def __init__(self, job_title: str, navigation_item: str):
        self.job_title = job_title
        self.navigation_item = navigation_item
        super().__init__(
            f"Duplicate permission for job title {job_title!r} "
            f"and navigation item {navigation_item!r}"
        )
