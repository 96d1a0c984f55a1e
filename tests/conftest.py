"""
Shared fixtures for the spa directory tests.
"""

import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(PROJECT_ROOT, "backend"))

from app.models import Spa  # noqa: E402

SAMPLE_CSV_PATH = os.path.join(PROJECT_ROOT, "backend", "data", "bsg_spas.csv")

CSV_HEADER = (
    "nid,title,email,phone,address,website,location,budget,rating,"
    "opening_hour,closing_hour,treatments"
)


def build_spa(spa_id, **fields):
    return Spa(id=spa_id, **fields)


@pytest.fixture
def three_spas():
    """Ubud/Seminyak/Ubud dataset used by the listing scenarios."""
    return [
        build_spa(1, title="Lotus", location="Ubud", budget=2, rating=4.5,
                  treatments=("Massage",)),
        build_spa(2, title="Ocean", location="Seminyak",
                  treatments=("Facial", "Massage")),
        build_spa(3, title="Bamboo", location="Ubud", budget=1, rating=3.0),
    ]


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV rows (under the standard header) and return the path."""
    def _write(*rows, header=CSV_HEADER, name="spas.csv"):
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return path
    return _write
