import pytest

from core.config import StaticSettings


@pytest.fixture
def settings():
    return StaticSettings()
