"""Configures pytest further."""
import random

import pytest


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower key generation tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extremely slow large key tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: slower key generation tests")
    config.addinivalue_line("markers", "extreme: large key sizes, needs --run-extreme")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture
def rng() -> random.Random:
    """Seeded, reproducible random source."""
    return random.Random(20251019)
