# finance_tracker/services/data_source.py

from enum import Enum
from typing import Any, Dict, Generic, TypeVar

from finance_tracker.models.pagination import PageRequest, PageResult

T = TypeVar("T")


class MutationKind(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    STATUS_TOGGLE = "status_toggle"


class RemoteDataSource(Generic[T]):
    """Interface for a paged, sortable, searchable source of rows."""

    async def query(self, request: PageRequest) -> PageResult[T]:
        """
        Fetch one page of rows.

        Args:
            request: Offset, count, optional sort and optional search text.

        Returns:
            The rows at [offset, offset + count) of the ordering implied by
            `request.sort`, filtered by `request.search_text`, plus the
            number of rows matching the filter overall.

        Raises:
            TransportError: The source could not be reached.
            BackendError: The source rejected the request (e.g. unknown sort field).
        """
        raise NotImplementedError("Subclasses must implement this method")

    async def mutate(self, kind: MutationKind, payload: Dict[str, Any]) -> Any:
        """
        Create, update, delete or flip the status of one row.

        Args:
            kind: Which mutation to apply.
            payload: Column values; UPDATE, DELETE and STATUS_TOGGLE need `id`.

        Returns:
            The stored row for CREATE, UPDATE and STATUS_TOGGLE; True for DELETE.

        Raises:
            TransportError: The source could not be reached.
            BackendError: The source rejected the mutation.
        """
        raise NotImplementedError("Subclasses must implement this method")
