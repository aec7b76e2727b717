"""Global search box."""

from __future__ import annotations

import pytest

from ems_client.navigation.routes import Route
from ems_client.search.service import SearchService
from ems_client.search.views import GlobalSearchView


@pytest.fixture
def people(backend):
    backend.employees = [
        {"id": 1, "fullName": "Alice Smith", "workEmail": "alice@example.com"},
        {"id": 2, "fullName": "Alan Parker", "workEmail": "alan@example.com"},
        {"id": 3, "fullName": "Bob Jones", "workEmail": "bob@example.com"},
    ]


async def test_short_query_sends_nothing(api, backend, sign_in, people):
    sign_in()
    view = GlobalSearchView(SearchService(api))
    before = len(backend.requests)

    results = await view.search(" a ")

    assert results.total == 0
    assert not view.is_open
    assert len(backend.requests) == before


async def test_results_grouped_by_tab(api, sign_in, people):
    sign_in()
    view = GlobalSearchView(SearchService(api))

    await view.search("al")

    assert view.is_open
    assert view.count("all") == 2
    assert view.count("employees") == 2
    assert view.count("documents") == 0

    view.set_tab("documents")
    assert view.visible["employees"] == []
    view.set_tab("employees")
    assert [e.full_name for e in view.visible["employees"]] == ["Alice Smith", "Alan Parker"]

    with pytest.raises(ValueError):
        view.set_tab("payroll")


async def test_failed_search_is_an_empty_result(api, backend, sign_in, people):
    sign_in()
    backend.fail_once("GET", "/api/search", 500, {"message": "index unavailable"})
    view = GlobalSearchView(SearchService(api))

    results = await view.search("alice")

    assert results.total == 0
    assert not view.has_results
    assert view.error is None


async def test_opening_a_result_closes_the_box(api, sign_in, people):
    sign_in()
    view = GlobalSearchView(SearchService(api))
    await view.search("bob")

    route, params = view.open_result("employees", 3)

    assert route is Route.employees
    assert params == {"employeeId": 3}
    assert not view.is_open
    assert view.query == ""
    assert view.results.total == 0


def test_document_result_opens_detail_screen():
    view = GlobalSearchView(service=None)
    route, params = view.open_result("documents", 12)
    assert route.path(**params) == "/documents/12"
