"""Profile fixtures for the analysis tests."""

import pytest

from asymptote.profiles import profile_for


@pytest.fixture
def python_profile():
    return profile_for("python")


@pytest.fixture
def java_profile():
    return profile_for("java")


@pytest.fixture
def c_profile():
    return profile_for("c")
