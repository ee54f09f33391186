import pytest

from app.tests.fakes import FakeGateway


@pytest.fixture
def gateway():
    return FakeGateway()
