"""Assembly of governance request messages from resolved inputs."""

from __future__ import annotations

from .coins import Coins
from .model import (
    DepositRequest,
    Param,
    ProposalKind,
    SubmitProposalRequest,
    VoteOption,
    VoteRequest,
)


def build_submit_proposal(
    title: str,
    description: str,
    proposal_type: ProposalKind,
    proposer: str,
    initial_deposit: Coins,
    param: Param | None = None,
) -> SubmitProposalRequest:
    """Return a :class:`SubmitProposalRequest`.

    ParameterChange proposals must carry the resolved ``param``; other kinds
    must not.  Nothing is built when that pairing is wrong.
    """

    if proposal_type is ProposalKind.PARAMETER_CHANGE and param is None:
        raise ValueError("ParameterChange proposals require a resolved parameter")
    if proposal_type is not ProposalKind.PARAMETER_CHANGE and param is not None:
        raise ValueError(f"{proposal_type.value} proposals do not carry a parameter")
    return SubmitProposalRequest(
        title=title,
        description=description,
        proposal_type=proposal_type,
        proposer=proposer,
        initial_deposit=initial_deposit,
        param=param,
    )


def build_deposit(depositor: str, proposal_id: int, amount: Coins) -> DepositRequest:
    return DepositRequest(depositor=depositor, proposal_id=proposal_id, amount=amount)


def build_vote(voter: str, proposal_id: int, option: VoteOption) -> VoteRequest:
    return VoteRequest(voter=voter, proposal_id=proposal_id, option=option)
