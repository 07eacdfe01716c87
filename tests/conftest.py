"""
Pytest configuration and shared fixtures
"""

import csv

import pytest

from db import init_db, get_session
from main import create_app


@pytest.fixture
def session():
    """Fresh in-memory catalog per test."""
    init_db("sqlite://")
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def app():
    app = create_app("sqlite://")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def write_csv(tmp_path):
    """Write a list of row dicts to a CSV file and return its path."""
    def _write(rows, name="products.csv", fieldnames=None):
        path = tmp_path / name
        fieldnames = fieldnames or list(rows[0].keys())
        with open(path, "w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)
        return path
    return _write
