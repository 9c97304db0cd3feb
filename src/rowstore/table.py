"""In-memory paged storage for the users table."""

from __future__ import annotations

from typing import Any, Iterator

from rowstore.errors import TableFullError
from rowstore.log import get_logger
from rowstore.row import ROW_SIZE, Row, deserialize_row, serialize_row

PAGE_SIZE = 4096
TABLE_MAX_PAGES = 100
ROWS_PER_PAGE = PAGE_SIZE // ROW_SIZE
TABLE_MAX_ROWS = ROWS_PER_PAGE * TABLE_MAX_PAGES

logger = get_logger(__name__)


class Table:
    """Append-only store of fixed-width rows.

    Rows are packed into fixed-size pages that are allocated on first use.
    A row never spans two pages, so the tail of each page is left unused and
    the capacity is ``ROWS_PER_PAGE * max_pages`` rows.
    """

    def __init__(self, max_pages: int = TABLE_MAX_PAGES) -> None:
        if max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {max_pages}")
        self.max_pages = max_pages
        self._pages: list[bytearray | None] = [None] * max_pages
        self._count = 0

    @property
    def count(self) -> int:
        """Return the number of rows in the table."""
        return self._count

    @property
    def max_rows(self) -> int:
        """Return the number of rows the table can hold."""
        return ROWS_PER_PAGE * self.max_pages

    @property
    def num_pages(self) -> int:
        """Return the number of pages allocated so far."""
        return sum(1 for page in self._pages if page is not None)

    @property
    def is_full(self) -> bool:
        return self._count >= self.max_rows

    def _row_slot(self, index: int) -> tuple[bytearray, int]:
        """Get the page holding a row index and the row's byte offset in it."""
        page_num = index // ROWS_PER_PAGE
        page = self._pages[page_num]
        if page is None:
            page = bytearray(PAGE_SIZE)
            self._pages[page_num] = page
        return page, (index % ROWS_PER_PAGE) * ROW_SIZE

    def append(self, row: Row) -> int:
        """Append a row and return its index.

        Raises:
            TableFullError: If the table already holds ``max_rows`` rows.
        """
        if self.is_full:
            logger.debug("table_full", count=self._count, max_rows=self.max_rows)
            raise TableFullError()

        index = self._count
        page, offset = self._row_slot(index)
        page[offset:offset + ROW_SIZE] = serialize_row(row)
        self._count += 1

        logger.debug("row_appended", index=index, id=row.id)
        return index

    def get(self, index: int) -> Row:
        """Get a row by index."""
        if index < 0 or index >= self._count:
            raise IndexError(f"Index {index} out of range [0, {self._count})")

        page, offset = self._row_slot(index)
        return deserialize_row(page[offset:offset + ROW_SIZE])

    def scan_all(self) -> Iterator[Row]:
        """Yield every stored row in insertion order.

        Each call starts a fresh scan. Rows appended while a scan is running
        are not visited by that scan.
        """
        end = self._count
        for index in range(end):
            yield self.get(index)

    def __iter__(self) -> Iterator[Row]:
        return self.scan_all()

    def close(self) -> None:
        """Release the table's pages."""
        self._pages = [None] * self.max_pages
        self._count = 0

    def __enter__(self) -> Table:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
