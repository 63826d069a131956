"""Integration tests need a migrated PostgreSQL; opt in with QQ_INTEGRATION=1."""

import os

import pytest

postgres_disabled = os.environ.get("QQ_INTEGRATION") != "1"


def pytest_collection_modifyitems(config, items):
    if not postgres_disabled:
        return
    skip = pytest.mark.skip(reason="set QQ_INTEGRATION=1 to run against PostgreSQL")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)
