"""Governance proposal, deposit, and vote request resolution for IRIShub."""

from .coins import Coin, Coins, parse_coins
from .errors import (
    GovError,
    InvalidAddress,
    InvalidAmount,
    InvalidProposalContent,
    InvalidProposalID,
    InvalidVoteOption,
    MalformedParamInput,
    MalformedSnapshot,
    ParameterSnapshotUnreadable,
    UnknownParameterKey,
    UnknownProposalKind,
)
from .model import (
    DepositRequest,
    Param,
    ProposalKind,
    SubmitProposalRequest,
    VoteOption,
    VoteRequest,
    classify_proposal_kind,
)
from .params import (
    DEFAULT_REGISTRY,
    ParameterRegistry,
    ParameterSnapshotDocument,
    resolve_param,
)
from .resolver import (
    DepositOptions,
    SubmitProposalOptions,
    VoteOptions,
    resolve_deposit,
    resolve_submit_proposal,
    resolve_vote,
)
from .validation import parse_proposal_id, parse_vote_option, validate_request

__all__ = [
    "Coin",
    "Coins",
    "parse_coins",
    "GovError",
    "InvalidAddress",
    "InvalidAmount",
    "InvalidProposalContent",
    "InvalidProposalID",
    "InvalidVoteOption",
    "MalformedParamInput",
    "MalformedSnapshot",
    "ParameterSnapshotUnreadable",
    "UnknownParameterKey",
    "UnknownProposalKind",
    "DepositRequest",
    "Param",
    "ProposalKind",
    "SubmitProposalRequest",
    "VoteOption",
    "VoteRequest",
    "classify_proposal_kind",
    "DEFAULT_REGISTRY",
    "ParameterRegistry",
    "ParameterSnapshotDocument",
    "resolve_param",
    "DepositOptions",
    "SubmitProposalOptions",
    "VoteOptions",
    "resolve_deposit",
    "resolve_submit_proposal",
    "resolve_vote",
    "parse_proposal_id",
    "parse_vote_option",
    "validate_request",
]
