"""
Target address list loading.

One 0x address per line; anything else is ignored. Addresses are
lower-cased for case-insensitive matching.
"""

import logging
from pathlib import Path
from typing import List, Optional

import httpx

from shared.resilience import Retry, RetryConfig, RetryError

logger = logging.getLogger(__name__)


def parse_targets(text: str) -> List[str]:
    lines = (line.strip() for line in text.splitlines())
    return [line.lower() for line in lines if line and line.startswith("0x")]


def read_targets(path: str) -> List[str]:
    """
    Read targets from disk.

    A missing or unreadable file is logged and yields an empty list.
    """
    try:
        text = Path(path).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read targets file {path}: {e}")
        return []
    targets = parse_targets(text)
    logger.info(f"Loaded {len(targets)} target addresses from {path}")
    return targets


async def fetch_targets(
    url: str,
    timeout: float = 10.0,
    retry_config: Optional[RetryConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[str]:
    """
    Download the target list.

    Network errors and non-2xx responses are retried; once retries are
    exhausted the failure is logged and an empty list returned.
    """
    config = retry_config or RetryConfig(
        max_attempts=2, initial_delay=0.5, retry_on=(httpx.HTTPError,)
    )
    retry = Retry(config, name="targets")

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:

        async def _get() -> str:
            response = await client.get(url)
            response.raise_for_status()
            return response.text

        try:
            text = await retry.execute_async(_get)
        except (RetryError, httpx.HTTPError) as e:
            logger.error(f"Error loading targets from {url}: {e}")
            return []

    targets = parse_targets(text)
    logger.info(f"Loaded {len(targets)} target addresses from {url}")
    return targets
