"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import pytest

from tests.helpers import ATL_DEPTH_HTML, ManualClock


@pytest.fixture
def atl_html() -> str:
    return ATL_DEPTH_HTML


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()
