"""First/previous/next/last links for one page of a collection."""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, model_validator

from .models import Control, ControlSetBuilder

PAGINATION_PARAM_NAMES = {"page", "size", "sort"}


class PageState(BaseModel):
    """Pagination metadata describing one page of a collection result."""

    model_config = ConfigDict(frozen=True)

    index: int = 0  # 0-based
    size: int
    total_pages: int
    total_elements: int = 0
    sort: tuple[tuple[str, str], ...] = ()

    @model_validator(mode="after")
    def _check_bounds(self) -> "PageState":
        if self.size < 1 or self.total_pages < 0 or self.index < 0:
            raise ValueError("size must be positive, index and total_pages non-negative")
        if self.index >= max(self.total_pages, 1):
            raise ValueError(f"page index {self.index} out of range for {self.total_pages} pages")
        return self

    @classmethod
    def from_page(cls, page) -> "PageState":
        return cls(
            index=page.number,
            size=page.size,
            total_pages=page.total_pages,
            total_elements=page.total_elements,
            sort=tuple((o.field, o.direction) for o in page.sort.orders),
        )


def add_pagination(builder: ControlSetBuilder, base: Control, state: PageState) -> None:
    """Insert `base` and the navigation controls that apply to `state`."""
    builder.insert(base)
    if state.total_pages <= 1:
        return

    summary = base.summary
    total = state.total_pages
    links = [(0, f"{summary} [First page (1/{total})]")]
    if state.index > 0:
        links.append((state.index - 1, f"{summary} [Previous page ({state.index}/{total})]"))
    if state.index < total - 1:
        links.append((state.index + 1, f"{summary} [Next page ({state.index + 2}/{total})]"))
    links.append((total - 1, f"{summary} [Last page ({total}/{total})]"))

    parameters = tuple(p for p in base.operation.parameters if p.name not in PAGINATION_PARAM_NAMES)
    # Links targeting the same page share a path; the later one replaces the earlier.
    for page_number, page_summary in links:
        operation = base.operation.model_copy(update={"parameters": parameters, "summary": page_summary})
        builder.insert(Control(path=page_path(base.path, state, page_number), method=base.method, operation=operation))


def page_path(path: str, state: PageState, page_number: int) -> str:
    """Rewrite the query string of `path` for the given page."""
    parts = urlsplit(path)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k not in PAGINATION_PARAM_NAMES]
    query.append(("size", state.size))
    query.extend(("sort", f"{field},{direction}") for field, direction in state.sort)
    query.append(("page", page_number))
    return urlunsplit(parts._replace(query=urlencode(query, safe=",")))
