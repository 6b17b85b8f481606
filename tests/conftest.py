from pathlib import Path

import pytest

from ohm_controls.spec.loader import clear_cache, parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def document():
    return parse_openapi(FIXTURES / "orders.yaml")


@pytest.fixture(autouse=True)
def _fresh_document_cache():
    clear_cache()
    yield
    clear_cache()
