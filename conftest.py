from datetime import datetime
from pathlib import Path

import pytest

from workshopcal.core.dataset import load_dataset
from workshopcal.core.models import Dataset, LookupEntity, Lookups, Offering, Workshop

DATA_PATH = Path(__file__).parent / "data" / "workshops.json"


@pytest.fixture
def dataset() -> Dataset:
    return load_dataset(DATA_PATH)


@pytest.fixture
def intro_workshop() -> Workshop:
    return Workshop(
        id="ws-python-intro",
        title="Intro to Python",
        summary="Learn Python basics",
        description="",
        format_id="fmt-online",
    )


@pytest.fixture
def intro_offering() -> Offering:
    return Offering(
        id="off-1",
        workshop_id="ws-python-intro",
        start=datetime(2025, 3, 10, 10, 0, 0),
        end=datetime(2025, 3, 10, 11, 0, 0),
        location="",
        registration_url="https://example.edu/reg",
    )


@pytest.fixture
def lookups() -> Lookups:
    return Lookups({
        "formats": [LookupEntity("fmt-online", "Online")],
        "instructors": [
            LookupEntity("inst-jdoe", "Jordan Doe"),
            LookupEntity("inst-asmith", "Alex Smith"),
        ],
        "areas": [LookupEntity("area-data-science", "Data Science")],
    })
