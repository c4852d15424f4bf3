"""Asynchronous JSON-RPC client for a block engine's bundle and transaction API."""

from __future__ import annotations

import json
import logging
import random
from typing import Any

import httpx

logger = logging.getLogger(__name__)

MAX_BUNDLE_TRANSACTIONS = 5


class JitoError(Exception):
    """Raised when a request fails or a response cannot be interpreted."""


def prettify(value: Any) -> str:
    """Render a JSON value as indented text with sorted object keys."""
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


def _with_uuid(path: str, uuid: str | None) -> str:
    return f"{path}?uuid={uuid}" if uuid is not None else path


class JitoClient:
    """Client for the block engine JSON-RPC endpoints."""

    def __init__(
        self,
        base_url: str,
        uuid: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self.uuid = uuid
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    async def __aenter__(self) -> JitoClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this object created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, endpoint: str, method: str, params: Any) -> httpx.Response:
        url = f"{self.base_url}{endpoint}"
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params if params is not None else [],
        }
        logger.debug("Sending request to: %s", url)
        logger.debug("Request body: %s", prettify(payload))
        try:
            response = await self._client.post(
                url, json=payload, headers={"Content-Type": "application/json"}
            )
        except httpx.HTTPError as exc:
            raise JitoError(f"Request error: {exc}") from exc
        logger.debug("Response status: %s", response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError as exc:
            raise JitoError(f"Request error: invalid JSON response: {exc}") from exc
        logger.debug("Response body: %s", prettify(body))
        return body

    async def _request(self, endpoint: str, method: str, params: Any = None) -> Any:
        return self._decode(await self._post(endpoint, method, params))

    async def get_tip_accounts(self) -> Any:
        """Fetch the list of tip accounts."""
        return await self._request(
            _with_uuid("/bundles", self.uuid), "getTipAccounts"
        )

    async def get_random_tip_account(self) -> str:
        """Return one tip account picked at random."""
        response = await self.get_tip_accounts()
        accounts = response.get("result") if isinstance(response, dict) else None
        if not isinstance(accounts, list):
            raise JitoError("Failed to parse tip accounts as array")
        if not accounts:
            raise JitoError("No tip accounts available")
        account = random.choice(accounts)
        if not isinstance(account, str):
            raise JitoError("Failed to parse tip account as string")
        return account

    async def get_bundle_statuses(self, bundle_uuids: list[str]) -> Any:
        """Query the statuses of landed bundles."""
        return await self._request(
            _with_uuid("/getBundleStatuses", self.uuid),
            "getBundleStatuses",
            [list(bundle_uuids)],
        )

    async def send_bundle(self, params: Any = None, uuid: str | None = None) -> Any:
        """Submit a bundle of base64-encoded transactions.

        ``params`` is either a ready ``[transactions, options]`` pair or a list
        of one to five transactions, which is sent with base64 encoding.
        """
        if not isinstance(params, list):
            raise JitoError("Invalid bundle format: expected an array of transactions")
        if len(params) == 2:
            request_params = params
        else:
            if not params:
                raise JitoError("Bundle must contain at least one transaction")
            if len(params) > MAX_BUNDLE_TRANSACTIONS:
                raise JitoError(
                    f"Bundle can contain at most {MAX_BUNDLE_TRANSACTIONS} transactions"
                )
            request_params = [params, {"encoding": "base64"}]
        return await self._request(
            _with_uuid("/bundles", uuid), "sendBundle", request_params
        )

    async def send_txn(
        self,
        params: Any = None,
        bundle_only: bool = False,
        uuid: str | None = None,
    ) -> tuple[Any, str | None]:
        """Send a single transaction; return the body and the ``x-bundle-id`` header."""
        query = []
        if bundle_only:
            query.append("bundleOnly=true")
        if uuid is not None:
            query.append(f"uuid={uuid}")
        endpoint = "/transactions"
        if query:
            endpoint = f"{endpoint}?{'&'.join(query)}"

        if isinstance(params, dict):
            tx = params.get("tx")
            skip_preflight = params.get("skipPreflight")
            request_params: list[Any] = [
                tx if isinstance(tx, str) else "",
                {
                    "encoding": "base64",
                    "skipPreflight": skip_preflight
                    if isinstance(skip_preflight, bool)
                    else False,
                },
            ]
        else:
            request_params = []

        response = await self._post(endpoint, "sendTransaction", request_params)
        bundle_id = response.headers.get("x-bundle-id")
        return self._decode(response), bundle_id

    async def get_in_flight_bundle_statuses(self, bundle_uuids: list[str]) -> Any:
        """Query the statuses of bundles that are still in flight."""
        return await self._request(
            _with_uuid("/getInflightBundleStatuses", self.uuid),
            "getInflightBundleStatuses",
            [list(bundle_uuids)],
        )