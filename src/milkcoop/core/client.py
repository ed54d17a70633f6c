"""Cooperative data service client - read-only record fetching."""

import asyncio
import logging
from typing import NamedTuple

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from milkcoop.core.config import settings
from milkcoop.data.models import (
    Cow,
    Member,
    MilkInEntry,
    MilkOutEntry,
    MilkSpoiltEntry,
    parse_records,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Retry Configuration
# =============================================================================

MAX_RETRIES = 3
MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 10


# =============================================================================
# Exceptions
# =============================================================================


class RetryableError(Exception):
    """Transient error that should be retried (timeouts, connection errors, 5xx)."""

    pass


class MilkServiceError(Exception):
    """Non-retryable error from the cooperative data service."""

    pass


# =============================================================================
# Endpoints
# =============================================================================

COWS_PATH = "/cows"
MEMBERS_PATH = "/members"
MILK_IN_PATH = "/milk-in"
MILK_OUT_PATH = "/milk-out"
MILK_SPOILT_PATH = "/milk-spoilt"


class CooperativeData(NamedTuple):
    """Everything the aggregators need, fetched in one go."""

    cows: list[Cow]
    members: list[Member]
    milk_in: list[MilkInEntry]
    milk_out: list[MilkOutEntry]
    milk_spoilt: list[MilkSpoiltEntry]


# =============================================================================
# Client Functions
# =============================================================================


def _headers() -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if settings.milk_api_key:
        headers["X-API-Key"] = settings.milk_api_key
    return headers


async def get_json(path: str, params: dict | None = None) -> list | dict:
    """Fetch a JSON document from the data service.

    This is the low-level function that makes a single request without retry.
    For most use cases, prefer `get_json_with_retry()` which handles transient errors.

    Args:
        path: Endpoint path (e.g., "/milk-in")
        params: Optional query parameters

    Returns:
        Parsed JSON response

    Raises:
        httpx.HTTPStatusError: If the HTTP request fails
    """
    async with httpx.AsyncClient(base_url=settings.milk_api_url) as client:
        response = await client.get(
            path,
            params=params,
            headers=_headers(),
            timeout=settings.request_timeout,
        )
        response.raise_for_status()
        return response.json()


@retry(
    retry=retry_if_exception_type(RetryableError),
    stop=stop_after_attempt(MAX_RETRIES),
    wait=wait_exponential_jitter(initial=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS, jitter=2),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _get_json_retrying(path: str, params: dict | None = None) -> list | dict:
    try:
        return await get_json(path, params)
    except httpx.TimeoutException as e:
        raise RetryableError(f"Request timed out: {e}") from e
    except httpx.ConnectError as e:
        raise RetryableError(f"Connection failed: {e}") from e
    except httpx.HTTPStatusError as e:
        body = e.response.text
        if e.response.status_code >= 500:
            # Server error - retry with backoff
            raise RetryableError(f"HTTP {e.response.status_code}: {body}") from e
        # Client error (4xx) - don't retry
        raise MilkServiceError(f"HTTP {e.response.status_code}: {body}") from e


async def get_json_with_retry(path: str, params: dict | None = None) -> list | dict:
    """Fetch JSON with automatic retry on transient errors.

    Retries on:
    - Timeouts
    - Connection errors
    - HTTP 5xx errors

    After MAX_RETRIES failures, raises MilkServiceError.

    Raises:
        MilkServiceError: If all retries fail or a non-retryable error occurs
    """
    try:
        return await _get_json_retrying(path, params)
    except RetryableError as e:
        raise MilkServiceError(f"{path}: giving up after {MAX_RETRIES} attempts ({e})") from e


async def _get_list(path: str) -> list[dict]:
    result = await get_json_with_retry(path)
    if not isinstance(result, list):
        raise MilkServiceError(f"{path}: expected a JSON list, got {type(result).__name__}")
    return result


async def get_cows() -> list[Cow]:
    """Fetch all cows (active and archived)."""
    return parse_records(Cow, await _get_list(COWS_PATH))


async def get_members() -> list[Member]:
    """Fetch all members (active and archived)."""
    return parse_records(Member, await _get_list(MEMBERS_PATH))


async def get_milk_in_entries() -> list[MilkInEntry]:
    return parse_records(MilkInEntry, await _get_list(MILK_IN_PATH))


async def get_milk_out_entries() -> list[MilkOutEntry]:
    return parse_records(MilkOutEntry, await _get_list(MILK_OUT_PATH))


async def get_milk_spoilt_entries() -> list[MilkSpoiltEntry]:
    return parse_records(MilkSpoiltEntry, await _get_list(MILK_SPOILT_PATH))


async def fetch_all() -> CooperativeData:
    """Fetch every record collection concurrently."""
    cows, members, milk_in, milk_out, milk_spoilt = await asyncio.gather(
        get_cows(),
        get_members(),
        get_milk_in_entries(),
        get_milk_out_entries(),
        get_milk_spoilt_entries(),
    )
    return CooperativeData(cows, members, milk_in, milk_out, milk_spoilt)
