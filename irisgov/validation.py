"""Structural checks run before a request is handed to the node.

These mirror the ledger's own basic message validation so malformed requests
are rejected locally instead of costing a round trip.
"""

from __future__ import annotations

from typing import Any

from .errors import (
    InvalidAddress,
    InvalidAmount,
    InvalidProposalContent,
    InvalidProposalID,
    InvalidVoteOption,
)
from .model import (
    DepositRequest,
    GovRequest,
    ProposalKind,
    SubmitProposalRequest,
    VoteOption,
    VoteRequest,
)

MAX_PROPOSAL_ID = 2**63 - 1


def parse_proposal_id(raw: Any) -> int:
    """Return ``raw`` as a non-negative int64 proposal id."""

    if isinstance(raw, bool):
        raise InvalidProposalID(f"Invalid proposal id: {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdecimal():
        value = int(raw.strip())
    else:
        raise InvalidProposalID(f"Proposal id must be a non-negative integer, got {raw!r}")
    if value < 0 or value > MAX_PROPOSAL_ID:
        raise InvalidProposalID(f"Proposal id out of range: {value}")
    return value


def parse_vote_option(raw: str) -> VoteOption:
    for option in VoteOption:
        if option.value == raw:
            return option
    known = ", ".join(option.value for option in VoteOption)
    raise InvalidVoteOption(f"'{raw}' is not a valid vote option (expected one of {known})")


def _require_address(address: str, role: str) -> None:
    if not address:
        raise InvalidAddress(f"{role} address must not be empty")


def validate_proposal_content(title: str, description: str) -> None:
    if not title.strip():
        raise InvalidProposalContent("Proposal title must not be empty")
    if not description.strip():
        raise InvalidProposalContent("Proposal description must not be empty")


def validate_submit_proposal(request: SubmitProposalRequest) -> None:
    validate_proposal_content(request.title, request.description)
    if not isinstance(request.proposal_type, ProposalKind):
        raise InvalidProposalContent(f"Unknown proposal type: {request.proposal_type!r}")
    if (request.proposal_type is ProposalKind.PARAMETER_CHANGE) != (request.param is not None):
        raise InvalidProposalContent(
            "Only ParameterChange proposals carry a parameter, and they must carry one"
        )
    if request.param is not None and not request.param.key.strip():
        raise InvalidProposalContent("ParameterChange proposals must name a parameter key")
    _require_address(request.proposer, "Proposer")


def validate_deposit(request: DepositRequest) -> None:
    _require_address(request.depositor, "Depositor")
    parse_proposal_id(request.proposal_id)
    if not request.amount:
        raise InvalidAmount("Deposit amount must not be empty")


def validate_vote(request: VoteRequest) -> None:
    _require_address(request.voter, "Voter")
    parse_proposal_id(request.proposal_id)
    if not isinstance(request.option, VoteOption):
        raise InvalidVoteOption(f"'{request.option}' is not a valid vote option")


def validate_request(request: GovRequest) -> None:
    if isinstance(request, SubmitProposalRequest):
        validate_submit_proposal(request)
    elif isinstance(request, DepositRequest):
        validate_deposit(request)
    elif isinstance(request, VoteRequest):
        validate_vote(request)
    else:
        raise TypeError(f"Unsupported request type: {type(request).__name__}")
