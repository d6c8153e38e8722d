# app/source.py
import json
import logging
from pathlib import Path
from typing import Any, List

import requests
from pydantic import TypeAdapter, ValidationError

from .config import Settings
from .schemas import Transaction

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(List[Transaction])

class SourceUnavailableError(Exception):
    """The transaction dataset could not be retrieved in full."""

def parse_transaction_data(payload: Any) -> List[Transaction]:
    """
    Validates a decoded JSON payload into transaction records.

    Args:
        payload: The decoded JSON document, expected to be an array of records

    Raises:
        SourceUnavailableError: If the payload is not a list of valid records
    """
    if not isinstance(payload, list):
        raise SourceUnavailableError(
            f"Expected a JSON array of transactions, got {type(payload).__name__}"
        )
    try:
        return _records_adapter.validate_python(payload)
    except ValidationError as e:
        raise SourceUnavailableError(f"Transaction data is malformed: {e}")

def fetch_transaction_data(url: str, timeout: float = 10.0) -> List[Transaction]:
    """
    Downloads the full transaction dataset in one request.

    There is no retry and no caching; the caller decides what a failure means.

    Args:
        url: Location of the JSON array
        timeout: Seconds to wait for the remote source

    Returns:
        list: Every record of the dataset

    Raises:
        SourceUnavailableError: On network errors, bad status codes or a bad payload
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        # JSON decode errors from requests are RequestException subclasses too
        logger.warning("Fetching transactions from %s failed: %s", url, e)
        raise SourceUnavailableError(f"Could not fetch transactions from {url}: {e}")

    records = parse_transaction_data(payload)
    logger.info("Fetched %d transactions from %s", len(records), url)
    return records

def load_transaction_file(path: str) -> List[Transaction]:
    """Reads the dataset from a local JSON file with the same shape as the remote one."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Reading transactions from %s failed: %s", path, e)
        raise SourceUnavailableError(f"Could not read transactions from {path}: {e}")

    records = parse_transaction_data(payload)
    logger.info("Loaded %d transactions from %s", len(records), path)
    return records

def load_transactions(settings: Settings) -> List[Transaction]:
    if settings.SOURCE_FILE:
        return load_transaction_file(settings.SOURCE_FILE)
    return fetch_transaction_data(settings.SOURCE_URL, timeout=settings.SOURCE_TIMEOUT)
