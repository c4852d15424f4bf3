"""Tracking a submitted bundle until it lands and is finalized."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from jitorpc.client import JitoError

logger = logging.getLogger(__name__)

TRANSACTION_URL_PREFIX = "https://solscan.io/tx/"

LANDING_MAX_RETRIES = 30
FINALIZED_MAX_RETRIES = 10
RETRY_DELAY_SECONDS = 2.0


class BundleError(JitoError):
    """Raised when a bundle fails or its status cannot be confirmed."""


class _StatusSource(Protocol):
    async def get_in_flight_bundle_statuses(self, bundle_uuids: list[str]) -> Any: ...

    async def get_bundle_statuses(self, bundle_uuids: list[str]) -> Any: ...


@dataclass
class BundleStatus:
    """The parts of a bundle status entry that matter for confirmation."""

    confirmation_status: str | None = None
    err: Any = None
    transactions: list[str] | None = field(default=None)


def _first_status(response: Any) -> Any:
    if not isinstance(response, dict):
        return None
    result = response.get("result")
    if not isinstance(result, dict):
        return None
    statuses = result.get("value")
    if not isinstance(statuses, list) or not statuses:
        return None
    return statuses[0]


def parse_bundle_status(response: Any) -> BundleStatus:
    """Extract the first bundle status from a ``getBundleStatuses`` response."""
    entry = _first_status(response)
    if entry is None:
        raise BundleError("Failed to parse bundle status")
    if not isinstance(entry, dict):
        return BundleStatus()
    confirmation = entry.get("confirmation_status")
    transactions = entry.get("transactions")
    return BundleStatus(
        confirmation_status=confirmation if isinstance(confirmation, str) else None,
        err=entry.get("err"),
        transactions=(
            [tx for tx in transactions if isinstance(tx, str)]
            if isinstance(transactions, list)
            else None
        ),
    )


def check_transaction_error(status: BundleStatus) -> None:
    """Raise :class:`BundleError` if the status reports a transaction error."""
    err = status.err
    if err is None:
        return
    outcome = err.get("Ok") if isinstance(err, dict) else None
    if outcome is None:
        logger.info("Transaction executed without errors.")
        return
    logger.error("Transaction encountered an error: %r", err)
    raise BundleError("Transaction encountered an error")


def transaction_url(status: BundleStatus) -> str | None:
    """Return an explorer URL for the bundle's first transaction, if any."""
    if status.transactions is None:
        logger.warning("No transactions found in the bundle status.")
        return None
    if not status.transactions:
        logger.warning("Unable to extract transaction ID.")
        return None
    return f"{TRANSACTION_URL_PREFIX}{status.transactions[0]}"


async def wait_for_finalized(
    client: _StatusSource,
    bundle_uuid: str,
    max_retries: int = FINALIZED_MAX_RETRIES,
    retry_delay: float = RETRY_DELAY_SECONDS,
) -> BundleStatus:
    """Poll a landed bundle until it is finalized and return its status."""
    for attempt in range(1, max_retries + 1):
        logger.debug(
            "Checking final bundle status (attempt %d/%d)", attempt, max_retries
        )
        response = await client.get_bundle_statuses([bundle_uuid])
        status = parse_bundle_status(response)

        if status.confirmation_status == "confirmed":
            logger.info("Bundle confirmed on-chain. Waiting for finalization...")
            check_transaction_error(status)
        elif status.confirmation_status == "finalized":
            logger.info("Bundle finalized on-chain successfully!")
            check_transaction_error(status)
            url = transaction_url(status)
            if url is not None:
                logger.info("Transaction URL: %s", url)
            return status
        elif status.confirmation_status is not None:
            logger.warning(
                "Unexpected final bundle status: %s. Continuing to poll...",
                status.confirmation_status,
            )
        else:
            logger.warning("Unable to parse final bundle status. Continuing to poll...")

        if attempt < max_retries:
            await asyncio.sleep(retry_delay)

    raise BundleError(f"Failed to get finalized status after {max_retries} attempts")


async def wait_for_landing(
    client: _StatusSource,
    bundle_uuid: str,
    max_retries: int = LANDING_MAX_RETRIES,
    retry_delay: float = RETRY_DELAY_SECONDS,
) -> BundleStatus:
    """Poll an in-flight bundle until it lands, then wait for finalization."""
    for attempt in range(1, max_retries + 1):
        logger.debug("Checking bundle status (attempt %d/%d)", attempt, max_retries)
        response = await client.get_in_flight_bundle_statuses([bundle_uuid])

        if isinstance(response, dict) and "result" in response:
            result = response["result"]
            statuses = result.get("value") if isinstance(result, dict) else None
            if isinstance(result, dict) and "value" not in result or not isinstance(
                result, dict
            ):
                logger.warning("Value field not found in result. Waiting...")
            elif not isinstance(statuses, list):
                logger.warning("Unexpected value format. Waiting...")
            elif not statuses:
                logger.warning("Bundle status not found. Waiting...")
            elif not isinstance(statuses[0], dict) or "status" not in statuses[0]:
                logger.warning("Status field not found in bundle status. Waiting...")
            else:
                state = statuses[0]["status"]
                if state == "Landed":
                    logger.info("Bundle landed on-chain. Checking final status...")
                    return await wait_for_finalized(
                        client, bundle_uuid, retry_delay=retry_delay
                    )
                if state == "Failed":
                    logger.error("Bundle failed. Stopping polling process.")
                    raise BundleError("Bundle status returned Failed")
                if state == "Pending":
                    logger.debug("Bundle is pending. Waiting...")
                elif state == "Invalid":
                    logger.warning(
                        "Bundle currently marked as invalid. Continuing to poll..."
                    )
                elif isinstance(state, str):
                    logger.warning("Unexpected bundle status: %s. Waiting...", state)
                else:
                    logger.warning("Unable to parse bundle status. Waiting...")
        elif isinstance(response, dict) and "error" in response:
            logger.error("Error checking bundle status: %r", response["error"])
        else:
            logger.warning("Unexpected response format. Waiting...")

        if attempt < max_retries:
            await asyncio.sleep(retry_delay)

    raise BundleError(f"Failed to confirm bundle status after {max_retries} attempts")