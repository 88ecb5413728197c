"""Resolve operator input into validated governance requests.

Each ``resolve_*`` function takes the raw strings an operator typed, parses and
classifies them, looks up the signer address, builds the request, and
validates it.  Local input is checked before the address lookup, which may
reach the network.  The returned request is ready for
:meth:`irisgov.lcd_client.LCDClient.submit`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .coins import parse_coins
from .errors import InvalidAmount
from .messages import build_deposit, build_submit_proposal, build_vote
from .model import (
    DepositRequest,
    Param,
    SubmitProposalRequest,
    VoteRequest,
    classify_proposal_kind,
)
from .params import DEFAULT_REGISTRY, ParameterRegistry, resolve_param
from .validation import (
    parse_proposal_id,
    parse_vote_option,
    validate_deposit,
    validate_proposal_content,
    validate_submit_proposal,
    validate_vote,
)

logger = logging.getLogger(__name__)


class AccountResolver(Protocol):
    def address_of(self, name: str) -> str: ...


@dataclass
class SubmitProposalOptions:
    """Raw ``submit-proposal`` input.

    ``param`` is an inline ``{"key", "value", "op"}`` JSON document.  When it
    is empty, ``path``/``key``/``op`` select a value from the parameter
    snapshot under the node home instead.  Both only apply to ParameterChange
    proposals.
    """

    title: str = ""
    description: str = ""
    proposal_type: str = ""
    deposit: str = ""
    param: str = ""
    path: str = ""
    key: str = ""
    op: str = ""


@dataclass
class DepositOptions:
    proposal_id: str = ""
    deposit: str = ""


@dataclass
class VoteOptions:
    proposal_id: str = ""
    option: str = ""


def resolve_submit_proposal(
    options: SubmitProposalOptions,
    proposer: str,
    accounts: AccountResolver,
    node_home: str | Path,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
) -> SubmitProposalRequest:
    validate_proposal_content(options.title, options.description)
    amount = parse_coins(options.deposit)
    kind = classify_proposal_kind(options.proposal_type)
    param = resolve_param(
        kind,
        node_home=node_home,
        inline=options.param,
        path=options.path,
        key=options.key,
        op=options.op,
        registry=registry,
    )
    request = build_submit_proposal(
        options.title, options.description, kind, accounts.address_of(proposer), amount, param
    )
    validate_submit_proposal(request)
    logger.debug("Resolved %s proposal from %s", kind.value, request.proposer)
    return request


def resolve_deposit(
    options: DepositOptions, depositor: str, accounts: AccountResolver
) -> DepositRequest:
    proposal_id = parse_proposal_id(options.proposal_id)
    amount = parse_coins(options.deposit)
    if not amount:
        raise InvalidAmount("Deposit amount must not be empty")
    request = build_deposit(accounts.address_of(depositor), proposal_id, amount)
    validate_deposit(request)
    return request


def resolve_vote(options: VoteOptions, voter: str, accounts: AccountResolver) -> VoteRequest:
    proposal_id = parse_proposal_id(options.proposal_id)
    option = parse_vote_option(options.option)
    request = build_vote(accounts.address_of(voter), proposal_id, option)
    validate_vote(request)
    return request


def format_param(param: Param) -> str:
    return "Param:\n" + json.dumps(param.to_dict(), indent=1)


def format_vote(request: VoteRequest) -> str:
    return (
        f"Vote[Voter:{request.voter},ProposalID:{request.proposal_id},"
        f"Option:{request.option.value}]"
    )
