import pytest
from pydantic import ValidationError

from ohm_controls.app.repository import Page, Sort
from ohm_controls.controls import ControlSetBuilder, PageState, add_pagination, resolve
from ohm_controls.controls.pagination import page_path


def _paginate(document, state, bindings=None):
    base = resolve(document, "/api/orders", "GET", bindings)
    builder = ControlSetBuilder()
    add_pagination(builder, base, state)
    controls = builder.materialize()
    pages = {c.path: c for c in controls.controls() if c.path != base.path}
    return base, controls, pages


class TestPageState:
    def test_index_out_of_range(self):
        with pytest.raises(ValidationError):
            PageState(index=5, size=10, total_pages=5)

    def test_empty_collection_allows_first_page(self):
        assert PageState(index=0, size=10, total_pages=0).total_pages == 0

    def test_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            PageState(size=0, total_pages=1)

    def test_from_page(self):
        page = Page(content=[], number=1, size=5, total_elements=12, total_pages=3,
                    sort=Sort.parse(["cost,desc", "product"]))
        state = PageState.from_page(page)
        assert state.index == 1
        assert state.total_elements == 12
        assert state.sort == (("cost", "DESC"), ("product", "ASC"))


class TestAddPagination:
    def test_single_page_has_no_navigation(self, document):
        for size in (1, 10, 50):
            base, controls, pages = _paginate(document, PageState(index=0, size=size, total_pages=1))
            assert pages == {}
            assert controls.get(base.path) == base

    def test_no_pages_has_no_navigation(self, document):
        _, _, pages = _paginate(document, PageState(index=0, size=10, total_pages=0))
        assert pages == {}

    def test_first_page_of_five(self, document):
        _, _, pages = _paginate(document, PageState(index=0, size=10, total_pages=5))
        assert sorted(pages) == [
            "/api/orders?size=10&page=0",
            "/api/orders?size=10&page=1",
            "/api/orders?size=10&page=4",
        ]
        assert pages["/api/orders?size=10&page=0"].summary == "List orders [First page (1/5)]"
        assert pages["/api/orders?size=10&page=1"].summary == "List orders [Next page (2/5)]"
        assert pages["/api/orders?size=10&page=4"].summary == "List orders [Last page (5/5)]"

    def test_last_page_of_five(self, document):
        _, _, pages = _paginate(document, PageState(index=4, size=10, total_pages=5))
        assert sorted(pages) == [
            "/api/orders?size=10&page=0",
            "/api/orders?size=10&page=3",
            "/api/orders?size=10&page=4",
        ]
        # numerator is the current 0-based index
        assert pages["/api/orders?size=10&page=3"].summary == "List orders [Previous page (4/5)]"

    def test_middle_page_has_all_four(self, document):
        _, _, pages = _paginate(document, PageState(index=2, size=10, total_pages=5))
        assert len(pages) == 4
        summaries = sorted(c.summary for c in pages.values())
        assert "List orders [Previous page (2/5)]" in summaries
        assert "List orders [Next page (4/5)]" in summaries

    def test_second_page_previous_replaces_first(self, document):
        _, _, pages = _paginate(document, PageState(index=1, size=10, total_pages=5))
        assert sorted(pages) == [
            "/api/orders?size=10&page=0",
            "/api/orders?size=10&page=2",
            "/api/orders?size=10&page=4",
        ]
        assert pages["/api/orders?size=10&page=0"].summary == "List orders [Previous page (1/5)]"
        assert pages["/api/orders?size=10&page=2"].summary == "List orders [Next page (3/5)]"

    def test_next_to_last_page_last_replaces_next(self, document):
        _, _, pages = _paginate(document, PageState(index=3, size=10, total_pages=5))
        assert sorted(pages) == [
            "/api/orders?size=10&page=0",
            "/api/orders?size=10&page=2",
            "/api/orders?size=10&page=4",
        ]
        assert pages["/api/orders?size=10&page=2"].summary == "List orders [Previous page (3/5)]"
        assert pages["/api/orders?size=10&page=4"].summary == "List orders [Last page (5/5)]"

    def test_size_and_sort_in_every_link(self, document):
        state = PageState(index=2, size=10, total_pages=5, sort=(("cost", "DESC"),))
        _, _, pages = _paginate(document, state)
        assert len(pages) == 4
        for path in pages:
            assert "size=10&sort=cost,DESC" in path
        assert "/api/orders?size=10&sort=cost,DESC&page=3" in pages

    def test_one_sort_entry_per_key(self, document):
        state = PageState(index=0, size=5, total_pages=2, sort=(("cost", "DESC"), ("product", "ASC")))
        _, _, pages = _paginate(document, state)
        assert "/api/orders?size=5&sort=cost,DESC&sort=product,ASC&page=1" in pages

    def test_pagination_params_not_free(self, document):
        _, _, pages = _paginate(document, PageState(index=0, size=10, total_pages=2))
        for control in pages.values():
            assert control.free_parameters == ["customer"]

    def test_bound_query_kept_ahead_of_pagination(self, document):
        _, _, pages = _paginate(document, PageState(index=0, size=10, total_pages=2), {"customer": 7})
        assert "/api/orders?customer=7&size=10&page=1" in pages

    def test_links_use_base_method(self, document):
        base, controls, pages = _paginate(document, PageState(index=0, size=10, total_pages=3))
        assert all(c.method == base.method for c in pages.values())


class TestPagePath:
    def test_replaces_existing_pagination_query(self):
        state = PageState(index=0, size=20, total_pages=2)
        assert page_path("/api/orders?page=3&size=5&q=x", state, 1) == "/api/orders?q=x&size=20&page=1"
