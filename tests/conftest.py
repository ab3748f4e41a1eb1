import pytest

from tests.fakes import FakeFEC


@pytest.fixture
def fec() -> FakeFEC:
    return FakeFEC()
