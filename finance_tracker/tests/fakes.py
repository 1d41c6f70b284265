"""Data sources for exercising the table controller without a database."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

from ..db.connection import SQLiteConnection
from ..models.pagination import PageRequest, PageResult, SortDirection
from ..services.data_source import RemoteDataSource


def make_rows(count: int) -> List[Dict[str, Any]]:
    return [
        {
            "id": i,
            "amount": float((i * 37) % 101),
            "description": "rent" if i % 4 == 0 else f"item {i}",
        }
        for i in range(1, count + 1)
    ]


class ListSource(RemoteDataSource):
    """Answers every request immediately from an in-memory list."""

    def __init__(self, rows: List[Dict[str, Any]]):
        self.rows = list(rows)
        self.requests: List[PageRequest] = []
        self.error: Optional[BaseException] = None

    async def query(self, request: PageRequest) -> PageResult:
        self.requests.append(request)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error

        rows = self.rows
        if request.search_text:
            needle = request.search_text.lower()
            rows = [r for r in rows if needle in r["description"].lower()]
        if request.sort is not None:
            rows = sorted(
                rows,
                key=lambda r: (r[request.sort.field], r["id"]),
                reverse=request.sort.direction is SortDirection.DESC,
            )
        return PageResult(rows=rows[request.offset:request.offset + request.count], total_matching=len(rows))


class ScriptedSource(RemoteDataSource):
    """Holds every request open until the test resolves or fails it."""

    def __init__(self):
        self.calls: List[Tuple[PageRequest, asyncio.Future]] = []

    @property
    def requests(self) -> List[PageRequest]:
        return [request for request, _ in self.calls]

    async def query(self, request: PageRequest) -> PageResult:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((request, future))
        return await future

    def resolve(self, index: int, total: int) -> List[Dict[str, Any]]:
        """Answer call `index` with rows labelled by its page; returns the rows."""
        request, future = self.calls[index]
        page = request.offset // request.count + 1
        rows = [{"id": request.offset + i + 1, "page": page} for i in range(request.count)]
        rows = rows[: max(0, min(request.count, total - request.offset))]
        future.set_result(PageResult(rows=rows, total_matching=total))
        return rows

    def fail(self, index: int, error: BaseException) -> None:
        self.calls[index][1].set_exception(error)


async def settle(rounds: int = 3) -> None:
    """Let scheduled controller tasks run up to their first await."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def memory_db():
    """Fresh in-memory database with the full schema."""
    return SQLiteConnection({"sqlite": {"db_path": ":memory:"}})
