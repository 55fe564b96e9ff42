"""Shared fixtures for the NavAble test suite."""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from navable.config import reset_config
from navable.container import reset_container
from navable.gazetteer import load_gazetteer

CAMPUS_TEXT = """\
Name Latitude Longitude
Suzzallo Library 47.65581 -122.30803
Husky Union Building 47.65546 -122.30500
Mary Gates Hall 47.65497 -122.30786
Odegaard Undergraduate Library 47.65654 -122.31047
Kane Hall 47.65667 -122.30924
Red Square 47.65612 -122.30938
"""


@pytest.fixture(autouse=True)
def _fresh_singletons():
    """Every test starts with a fresh config and container."""
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def campus_text():
    return CAMPUS_TEXT


@pytest.fixture
def gazetteer():
    return load_gazetteer([CAMPUS_TEXT])
