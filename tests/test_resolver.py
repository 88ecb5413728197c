import json
from pathlib import Path

import pytest

from irisgov.errors import (
    InvalidAmount,
    InvalidProposalContent,
    InvalidProposalID,
    InvalidVoteOption,
    MalformedParamInput,
    UnknownProposalKind,
)
from irisgov.model import Param, ProposalKind, VoteOption
from irisgov.resolver import (
    DepositOptions,
    SubmitProposalOptions,
    VoteOptions,
    format_param,
    format_vote,
    resolve_deposit,
    resolve_submit_proposal,
    resolve_vote,
)
from irisgov.validation import validate_request


def test_parameter_change_from_snapshot(node_home: Path, accounts) -> None:
    options = SubmitProposalOptions(
        title="Raise deposit",
        description="Raise the minimum deposit",
        proposal_type="ParameterChange",
        deposit="100uiris",
        path="node0",
        key="Gov/gov/depositProcedure",
        op="update",
    )

    request = resolve_submit_proposal(options, "alice", accounts, node_home=node_home)

    assert accounts.lookups == ["alice"]
    assert request.proposer == "faa1proposer"
    assert request.proposal_type is ProposalKind.PARAMETER_CHANGE
    assert request.param is not None
    assert request.param.value
    assert json.loads(request.param.value)["max_deposit_period"] == "1440"
    assert request.param.op == "update"
    validate_request(request)


def test_text_proposal_ignores_param_flags(tmp_path: Path, accounts) -> None:
    options = SubmitProposalOptions(
        title="Hello",
        description="World",
        proposal_type="Text",
        deposit="10iris",
        param="{not json",
    )

    request = resolve_submit_proposal(options, "alice", accounts, node_home=tmp_path)

    assert request.param is None


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"proposal_type": "Bogus"}, UnknownProposalKind),
        ({"deposit": "abc"}, InvalidAmount),
        ({"param": "{not json"}, MalformedParamInput),
        ({"param": "{}"}, MalformedParamInput),
        ({"title": ""}, InvalidProposalContent),
        ({"description": "   "}, InvalidProposalContent),
    ],
)
def test_submit_errors_precede_address_lookup(tmp_path: Path, accounts, overrides, error) -> None:
    fields = {
        "title": "T",
        "description": "D",
        "proposal_type": "ParameterChange",
        "deposit": "10iris",
        "param": '{"key":"k","value":"v","op":"update"}',
    }
    fields.update(overrides)

    with pytest.raises(error):
        resolve_submit_proposal(SubmitProposalOptions(**fields), "alice", accounts, node_home=tmp_path)
    assert accounts.lookups == []


def test_resolve_deposit(accounts) -> None:
    request = resolve_deposit(DepositOptions(proposal_id="12", deposit="5iris"), "bob", accounts)
    assert request.proposal_id == 12
    assert request.depositor == "faa1proposer"
    assert str(request.amount) == "5iris"


@pytest.mark.parametrize(
    "options, error",
    [
        (DepositOptions(proposal_id="-1", deposit="5iris"), InvalidProposalID),
        (DepositOptions(proposal_id="one", deposit="5iris"), InvalidProposalID),
        (DepositOptions(proposal_id="1", deposit="five"), InvalidAmount),
        (DepositOptions(proposal_id="1", deposit=""), InvalidAmount),
    ],
)
def test_resolve_deposit_rejects_bad_input_without_lookup(accounts, options, error) -> None:
    with pytest.raises(error):
        resolve_deposit(options, "bob", accounts)
    assert accounts.lookups == []


def test_resolve_vote(accounts) -> None:
    request = resolve_vote(VoteOptions(proposal_id="3", option="Abstain"), "carol", accounts)
    assert request.option is VoteOption.ABSTAIN
    assert format_vote(request) == "Vote[Voter:faa1proposer,ProposalID:3,Option:Abstain]"


@pytest.mark.parametrize(
    "options, error",
    [
        (VoteOptions(proposal_id="-5", option="Yes"), InvalidProposalID),
        (VoteOptions(proposal_id="5", option="yes"), InvalidVoteOption),
    ],
)
def test_resolve_vote_rejects_bad_input_without_lookup(accounts, options, error) -> None:
    with pytest.raises(error):
        resolve_vote(options, "carol", accounts)
    assert accounts.lookups == []


def test_format_param_echoes_indented_json() -> None:
    text = format_param(Param(key="k", value="v", op="update"))
    assert text.startswith("Param:\n")
    assert json.loads(text.split("\n", 1)[1]) == {"key": "k", "value": "v", "op": "update"}
