"""
Page map

Sparse map from page index to page bytes, filled as data frames arrive in
any order. A page is written at most once: later arrivals of the same index
are counted as duplicates and dropped.
"""

from typing import Dict, Iterator, Optional, Tuple


class PageMap:
    """First-write-wins mapping of page index to page bytes."""

    def __init__(self):
        self._pages: Dict[int, bytes] = {}
        self.duplicates = 0

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page_index: int) -> bool:
        return page_index in self._pages

    def __getitem__(self, page_index: int) -> bytes:
        return self._pages[page_index]

    def insert(self, page_index: int, page: bytes) -> bool:
        """
        Insert a page if its index is absent.

        Returns:
            True if inserted, False if the index was already present
        """
        if page_index in self._pages:
            self.duplicates += 1
            return False
        self._pages[page_index] = page
        return True

    def contiguous(self) -> Iterator[Tuple[int, bytes]]:
        """Pages 0, 1, 2, ... up to (excluding) the first missing index."""
        page_index = 0
        while page_index in self._pages:
            yield page_index, self._pages[page_index]
            page_index += 1

    def first_missing(self) -> int:
        page_index = 0
        while page_index in self._pages:
            page_index += 1
        return page_index

    def assemble(self) -> bytes:
        """Concatenate contiguous pages from index 0."""
        return b''.join(page for _, page in self.contiguous())

    def highest_index(self) -> Optional[int]:
        return max(self._pages) if self._pages else None
