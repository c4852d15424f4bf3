import json

import httpx
import respx

from jitorpc.cli import main

BASE = "https://engine.test/api/v1"
ACCOUNTS = ["acct-one", "acct-two"]


def test_prints_tip_accounts(capsys):
    body = {"jsonrpc": "2.0", "result": ACCOUNTS, "id": 1}
    with respx.mock:
        route = respx.post(f"{BASE}/bundles").mock(
            return_value=httpx.Response(200, json=body)
        )
        code = main(["--base-url", BASE])
        sent = json.loads(route.calls.last.request.content)
    assert code == 0
    assert json.loads(capsys.readouterr().out) == body
    assert sent["method"] == "getTipAccounts"


def test_uuid_goes_into_query(capsys):
    body = {"jsonrpc": "2.0", "result": ACCOUNTS, "id": 1}
    with respx.mock:
        route = respx.post(f"{BASE}/bundles").mock(
            return_value=httpx.Response(200, json=body)
        )
        main(["--base-url", BASE, "--uuid", "abc"])
        url = route.calls.last.request.url
    assert url.params["uuid"] == "abc"
    assert json.loads(capsys.readouterr().out)["result"] == ACCOUNTS


def test_random_prints_one_account(capsys):
    body = {"jsonrpc": "2.0", "result": ACCOUNTS, "id": 1}
    with respx.mock:
        respx.post(f"{BASE}/bundles").mock(return_value=httpx.Response(200, json=body))
        code = main(["--base-url", BASE, "--random"])
    assert code == 0
    assert capsys.readouterr().out.strip() in ACCOUNTS


def test_request_failure_prints_nothing(capsys):
    with respx.mock:
        respx.post(f"{BASE}/bundles").mock(side_effect=httpx.ConnectError("down"))
        code = main(["--base-url", BASE])
    assert code == 0
    assert capsys.readouterr().out == ""