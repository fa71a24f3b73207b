"""Split a system's game list into fixed-size listing pages."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from rdb import Game


@dataclass(frozen=True)
class PagePlan:
    page: int
    games: Sequence[Game]
    last_page: int

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page == self.last_page


def page_count(total: int, per_page: int) -> int:
    # An empty list still gets one (empty) page so the system has an index
    return max(1, math.ceil(total / per_page))


def plan(games: Sequence[Game], per_page: int) -> list[PagePlan]:
    """Partition games into contiguous pages, preserving order.

    Every page holds exactly per_page games except possibly the last one.
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")
    num_pages = page_count(len(games), per_page)
    last_page = num_pages - 1
    return [
        PagePlan(p, games[p * per_page : min(p * per_page + per_page, len(games))], last_page)
        for p in range(num_pages)
    ]
