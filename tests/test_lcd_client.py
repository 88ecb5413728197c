from __future__ import annotations

import pytest
import requests

from irisgov.coins import parse_coins
from irisgov.config import ConfigurationError, GovConfig
from irisgov.lcd_client import BaseTx, LCDClient, NodeError, NodeTransportError, route_for
from irisgov.messages import build_deposit, build_submit_proposal, build_vote
from irisgov.model import Param, ProposalKind, VoteOption


class StubResponse:
    def __init__(self, status_code: int = 200, body=None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text
        self.url = "http://lcd"
        self.reason = "Bad Request"

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class StubSession:
    def __init__(self, *responses, error: Exception | None = None) -> None:
        self.responses = list(responses)
        self.error = error
        self.calls: list[dict] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def _config(**kwargs) -> GovConfig:
    defaults = {"chain_id": "irishub-test", "key_name": "alice", "password": "pw"}
    defaults.update(kwargs)
    return GovConfig(**defaults)


def test_address_of_reads_key_endpoint() -> None:
    session = StubSession(StubResponse(body={"name": "alice", "address": "faa1alice"}))
    client = LCDClient(_config(), session=session)  # type: ignore[arg-type]

    assert client.address_of("alice") == "faa1alice"
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://127.0.0.1:1317/keys/alice"


def test_routes_follow_message_kind() -> None:
    proposal = build_submit_proposal(
        "T",
        "D",
        ProposalKind.PARAMETER_CHANGE,
        "faa1",
        parse_coins("1iris"),
        Param(key="k", value="v", op="update"),
    )
    assert route_for(proposal) == "/gov/proposal"
    assert route_for(build_deposit("faa1", 4, parse_coins("1iris"))) == "/gov/proposals/4/deposits"
    assert route_for(build_vote("faa1", 9, VoteOption.YES)) == "/gov/proposals/9/votes"


def test_submit_posts_base_tx_and_message_fields() -> None:
    session = StubSession(StubResponse(body={"hash": "ABC"}))
    client = LCDClient(_config(), session=session)  # type: ignore[arg-type]
    vote = build_vote("faa1voter", 2, VoteOption.NO)

    responses = client.submit([vote], BaseTx.from_config(_config(fee="4iris")))

    assert responses == [{"hash": "ABC"}]
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"].endswith("/gov/proposals/2/votes")
    assert call["params"] is None
    assert call["json"]["voter"] == "faa1voter"
    assert call["json"]["option"] == "No"
    assert call["json"]["base_tx"]["chain_id"] == "irishub-test"
    assert call["json"]["base_tx"]["fee"] == "4iris"


def test_submit_generate_only_sets_query_flag() -> None:
    session = StubSession(StubResponse(body={"type": "auth/StdTx"}))
    client = LCDClient(_config(), session=session)  # type: ignore[arg-type]

    client.submit([build_vote("faa1", 2, VoteOption.YES)], BaseTx.from_config(_config()), generate_only=True)

    assert session.calls[0]["params"] == {"generate-only": "true"}


def test_application_errors_raise_node_error() -> None:
    session = StubSession(StubResponse(status_code=400, body={"error": "proposal not found"}))
    client = LCDClient(_config(), session=session)  # type: ignore[arg-type]

    with pytest.raises(NodeError) as excinfo:
        client.get_key("ghost")
    assert excinfo.value.status_code == 400
    assert "proposal not found" in str(excinfo.value)


def test_connection_failures_raise_transport_error() -> None:
    session = StubSession(error=requests.ConnectionError("refused"))
    client = LCDClient(_config(), session=session)  # type: ignore[arg-type]

    with pytest.raises(NodeTransportError):
        client.address_of("alice")


def test_malformed_json_raises_transport_error() -> None:
    session = StubSession(StubResponse(body=None, text="<html>"))
    client = LCDClient(_config(), session=session)  # type: ignore[arg-type]

    with pytest.raises(NodeTransportError):
        client.get_key("alice")


@pytest.mark.parametrize("missing", ["chain_id", "key_name"])
def test_base_tx_requires_chain_and_key(missing: str) -> None:
    with pytest.raises(ConfigurationError):
        BaseTx.from_config(_config(**{missing: None}))
