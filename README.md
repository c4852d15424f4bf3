# jitorpc

An asyncio client for the Jito block engine JSON-RPC API on Solana. It fetches
tip accounts, sends bundles and transactions, and queries bundle statuses.
Helpers are included for polling a sent bundle until it lands and is finalized.

## Installation

```
pip install jitorpc
```

To run the test suite:

```
pip install "jitorpc[test]"
pytest
```

## Using the client

`jitorpc.client.JitoClient(base_url, uuid=None, client=None)` sends JSON-RPC
requests to paths under `base_url`. It is an async context manager; leaving the
block calls `aclose()`, which closes the `httpx.AsyncClient` it created. If you
pass your own `httpx.AsyncClient` as `client`, it is used and left open.

When `uuid` is given, it is added as a `?uuid=` query parameter to the
tip-account and bundle-status requests.

```python
import asyncio

from jitorpc.client import JitoClient, JitoError, prettify


async def main():
    async with JitoClient("https://block-engine.example.com/api/v1") as jito:
        accounts = await jito.get_tip_accounts()
        print(prettify(accounts))

        tip_account = await jito.get_random_tip_account()
        print("Tip to:", tip_account)


asyncio.run(main())
```

Available calls:

- `get_tip_accounts()` returns the decoded JSON-RPC response.
- `get_random_tip_account()` returns one address picked at random from the
  response's `result` list.
- `send_bundle(params, uuid=None)` takes either a two-element list, which is
  sent as it is (normally `[transactions, {"encoding": "base64"}]`), or a list
  of one to five base64 transactions, which is sent with base64 encoding.
  An empty list, more than five transactions, or anything that is not a list
  raises `JitoError`. `uuid`, if given, is added to the request's query.
- `send_txn(params, bundle_only=False, uuid=None)` takes
  `{"tx": ..., "skipPreflight": ...}` and returns a tuple of the decoded
  response and the `x-bundle-id` response header (or `None`). `bundle_only=True`
  adds `bundleOnly=true` to the query. Parameters that are not a dict are sent
  as an empty list.
- `get_bundle_statuses(bundle_uuids)` and
  `get_in_flight_bundle_statuses(bundle_uuids)` query the state of sent bundles.

Network failures and responses that are not JSON raise `JitoError`.
`prettify(value)` renders any JSON value as indented text with sorted keys.

## Following a bundle

`jitorpc.bundle` polls the block engine after a bundle is sent:

```python
from jitorpc.bundle import BundleError, transaction_url, wait_for_landing

status = await wait_for_landing(jito, bundle_uuid, max_retries=30, retry_delay=2.0)
print(status.confirmation_status, transaction_url(status))
```

`wait_for_landing` polls the in-flight status. Once the bundle is reported as
`Landed`, it goes on with `wait_for_finalized` (up to 10 attempts, same delay)
and returns the finalized `BundleStatus`. It raises `BundleError` if the
bundle is reported as `Failed` or does not land within `max_retries` attempts.

`wait_for_finalized(client, bundle_uuid, max_retries=10, retry_delay=2.0)` can
also be called on its own for a bundle known to have landed. It returns the
`BundleStatus` once the bundle is `finalized` and raises `BundleError` if a
transaction reports an error or finalization is not reached in time.

Lower-level helpers:

- `parse_bundle_status(response)` turns a `getBundleStatuses` response into a
  `BundleStatus` with `confirmation_status`, `err` and `transactions`.
- `check_transaction_error(status)` raises `BundleError` if `err` holds a
  non-null `Ok` entry.
- `transaction_url(status)` returns an explorer URL for the first transaction,
  or `None` if there is none.

`BundleError` is a subclass of `JitoError`.

## Command line

The `jitorpc` command fetches the current tip accounts from the mainnet block
engine and prints them as indented JSON:

```
jitorpc
```

Options:

- `--base-url URL` selects another block engine API.
- `--uuid UUID` adds a UUID to the request.
- `--random` prints a single tip account picked at random.
- `--log-level LEVEL` sets the logging level (default `info`, or the value of
  the `JITORPC_LOG` environment variable).

Request errors are logged to standard error.

## What it does not do

The package does not build, sign or serialize Solana transactions, and it does
not talk to a Solana RPC node (for example to fetch a recent blockhash). Bring
base64-encoded signed transactions from another tool and pass them to
`send_bundle` or `send_txn`.