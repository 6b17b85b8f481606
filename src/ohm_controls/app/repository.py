"""In-memory entity store with paged listing."""

import math
from itertools import count
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class SortOrder(BaseModel):
    field: str
    direction: str = "ASC"  # ASC / DESC


class Sort(BaseModel):
    orders: list[SortOrder] = []

    @classmethod
    def parse(cls, values: list[str] | tuple[str, ...]) -> "Sort":
        """Parse `field,direction` strings; direction defaults to ASC."""
        orders = []
        for value in values:
            field, _, direction = value.partition(",")
            orders.append(SortOrder(field=field.strip(), direction=(direction.strip() or "ASC").upper()))
        return cls(orders=orders)


class PageRequest(BaseModel):
    page: int = 0
    size: int = 20
    sort: Sort = Sort()


class Page(BaseModel):
    content: list
    number: int
    size: int
    total_elements: int
    total_pages: int
    sort: Sort = Sort()


class InMemoryRepository(Generic[T]):
    """Stores entities by id; new entities (id None) get the next id."""

    def __init__(self):
        self._items: dict[int, T] = {}
        self._ids = count(1)

    def save(self, entity: T) -> T:
        if entity.id is None:
            entity = entity.model_copy(update={"id": next(self._ids)})
        self._items[entity.id] = entity
        return entity

    def find_by_id(self, entity_id: int) -> T | None:
        return self._items.get(entity_id)

    def find_all(self) -> list[T]:
        return list(self._items.values())

    def delete_by_id(self, entity_id: int) -> None:
        self._items.pop(entity_id, None)

    def count_by(self, key: str, value) -> int:
        return sum(1 for item in self._items.values() if getattr(item, key) == value)

    def find_page(self, request: PageRequest, key: str | None = None, value=None) -> Page:
        items = self.find_all()
        if key is not None:
            items = [item for item in items if getattr(item, key) == value]
        # Stable sorts applied last key first give multi-key ordering.
        for order in reversed(request.sort.orders):
            if items and not hasattr(items[0], order.field):
                raise ValueError(f"Unknown sort property: {order.field}")
            items.sort(
                key=lambda item: (getattr(item, order.field) is None, getattr(item, order.field)),
                reverse=order.direction == "DESC",
            )
        start = request.page * request.size
        return Page(
            content=items[start:start + request.size],
            number=request.page,
            size=request.size,
            total_elements=len(items),
            total_pages=math.ceil(len(items) / request.size),
            sort=request.sort,
        )
