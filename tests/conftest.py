"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest
import respx

# Add src/ to path so tests can import milkcoop
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from milkcoop.core.config import settings  # noqa: E402


@pytest.fixture
def mock_milk_service():
    """Mock cooperative data service responses."""
    with respx.mock(base_url=settings.milk_api_url) as mock:
        yield mock


@pytest.fixture
def sample_cows_response():
    """Sample GET /cows response."""
    return [
        {
            "cowId": "CW01",
            "name": "Daisy",
            "ownerId": "M01",
            "breed": "Friesian",
            "entryDate": "2024-03-01",
            "isActive": True,
            "status": {
                "healthStatus": "HEALTHY",
                "actionStatus": "ACTIVE",
            },
        },
        {
            "cowId": "CW02",
            "name": "Bella",
            "ownerId": "M01",
            "breed": "Jersey",
            "entryDate": "2024-05-12",
            "isActive": True,
            "status": {
                "healthStatus": "VACCINATED",
                "actionStatus": "VACCINATED",
                "vaccinationLast": "2025-06-09",
            },
        },
        {
            "cowId": "CW03",
            "name": "Rosie",
            "ownerId": "M02",
            "breed": "Ayrshire",
            "entryDate": "2023-11-20",
            "isActive": False,
            "archiveReason": "SOLD",
            "archiveDate": "2025-01-15",
            "status": {
                "healthStatus": "HEALTHY",
                "actionStatus": "SOLD",
            },
        },
    ]


@pytest.fixture
def sample_members_response():
    """Sample GET /members response."""
    return [
        {"memberId": "M01", "name": "Wanjiku", "isActive": True},
        {"memberId": "M02", "name": "Otieno", "isActive": True},
        {"memberId": "M03", "name": "Achieng", "isActive": False, "archiveDate": "2025-02-01"},
    ]


@pytest.fixture
def sample_milk_in_response():
    """Sample GET /milk-in response."""
    return [
        {
            "entryId": "IN1",
            "cowId": "CW01",
            "ownerId": "M01",
            "liters": 10.0,
            "date": "2025-06-10",
            "milkingType": "MORNING",
        },
        {
            "entryId": "IN2",
            "cowId": "CW01",
            "ownerId": "M01",
            "liters": 5.0,
            "date": "2025-06-09",
            "milkingType": "EVENING",
        },
    ]


@pytest.fixture
def sample_milk_out_response():
    """Sample GET /milk-out response."""
    return [
        {
            "saleId": "S1",
            "customerName": "Kamau Hotel",
            "date": "2025-06-10",
            "quantitySold": 3.0,
            "pricePerLiter": 80.0,
            "paymentMode": "MPESA",
        }
    ]


@pytest.fixture
def sample_milk_spoilt_response():
    """Sample GET /milk-spoilt response."""
    return [
        {
            "spoiltId": "SP1",
            "date": "2025-06-08",
            "amountSpoilt": 1.0,
            "lossAmount": 100.0,
            "cause": "SOUR",
        }
    ]
