import pytest

from factories import make_config, random_arrivals


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def workload():
    return random_arrivals
