"""Shared pytest configuration and Hypothesis profiles.

Live-provider tests carry the ``network`` marker and only run when
LAGOINHA_NETWORK_TESTS=1.
"""

from __future__ import annotations

import os

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.getenv("LAGOINHA_NETWORK_TESTS") == "1":
        return
    skip_network = pytest.mark.skip(reason="set LAGOINHA_NETWORK_TESTS=1 to query live providers")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)
