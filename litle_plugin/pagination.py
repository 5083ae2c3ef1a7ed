from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Optional


def next_offset_for(offset: int, limit: int, total_nb_records: Optional[int]) -> Optional[int]:
    if total_nb_records is not None and offset + limit >= total_nb_records:
        return None
    return offset + limit


class LazyResultSet:
    """
    Pull-based sequence over a store. Every iteration starts over from
    ``offset`` and fetches pages through ``fetch(offset, size)``; nothing
    from a previous pass is cached.
    """

    def __init__(self, offset: int, limit: int, fetch: Callable[[int, int], List[Any]], batch_size: int = 100):
        self.offset = offset
        self.limit = limit
        self.fetch = fetch
        self.batch_size = max(1, min(batch_size, limit)) if limit > 0 else 0

    def __iter__(self) -> Iterator[Any]:
        remaining = self.limit
        offset = self.offset
        while remaining > 0:
            size = min(self.batch_size, remaining)
            page = self.fetch(offset, size)
            yield from page
            if len(page) < size:
                break
            offset += size
            remaining -= size


@dataclass
class Pagination:
    current_offset: int
    total_nb_records: int
    max_nb_records: int
    next_offset: Optional[int]
    iterator: Iterable[Any]
