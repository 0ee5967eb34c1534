"""Shared fixtures for Bastuklubb tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from bastuklubb.utils import dt_utils


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Iterator[None]:
    """Restore the default timezone after tests that change it."""
    original = dt_utils.get_default_timezone()
    yield
    dt_utils.set_default_timezone(original)
