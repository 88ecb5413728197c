"""Domain models for governance proposals, deposits, and votes.

The request objects defined here are built once per command invocation from
already-resolved inputs, validated, handed to the node for signing, and then
discarded.  They are frozen so nothing downstream can mutate them after
validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .coins import Coins
from .errors import UnknownProposalKind

GOV_ROUTE = "gov"


class ProposalKind(str, Enum):
    TEXT = "Text"
    PARAMETER_CHANGE = "ParameterChange"
    SOFTWARE_UPGRADE = "SoftwareUpgrade"

    def __str__(self) -> str:
        return self.value


class VoteOption(str, Enum):
    YES = "Yes"
    NO = "No"
    NO_WITH_VETO = "NoWithVeto"
    ABSTAIN = "Abstain"

    def __str__(self) -> str:
        return self.value


def classify_proposal_kind(name: str) -> ProposalKind:
    """Map a case-sensitive proposal type name onto :class:`ProposalKind`."""

    for kind in ProposalKind:
        if kind.value == name:
            return kind
    known = ", ".join(kind.value for kind in ProposalKind)
    raise UnknownProposalKind(f"'{name}' is not a valid proposal type (expected one of {known})")


@dataclass(frozen=True)
class Param:
    """A single parameter mutation carried by a ParameterChange proposal.

    ``value`` is an opaque JSON string whose shape depends on ``key``.
    """

    key: str
    value: str
    op: str

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value, "op": self.op}


@dataclass(frozen=True)
class SubmitProposalRequest:
    title: str
    description: str
    proposal_type: ProposalKind
    proposer: str
    initial_deposit: Coins
    param: Param | None = None

    route = GOV_ROUTE
    type = "submit_proposal"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "proposal_type": self.proposal_type.value,
            "proposer": self.proposer,
            "initial_deposit": self.initial_deposit.to_list(),
            "param": self.param.to_dict() if self.param is not None else None,
        }


@dataclass(frozen=True)
class DepositRequest:
    depositor: str
    proposal_id: int
    amount: Coins

    route = GOV_ROUTE
    type = "deposit"

    def to_dict(self) -> dict[str, Any]:
        return {
            "depositer": self.depositor,
            "proposal_id": str(self.proposal_id),
            "amount": self.amount.to_list(),
        }


@dataclass(frozen=True)
class VoteRequest:
    voter: str
    proposal_id: int
    option: VoteOption

    route = GOV_ROUTE
    type = "vote"

    def to_dict(self) -> dict[str, Any]:
        return {
            "voter": self.voter,
            "proposal_id": str(self.proposal_id),
            "option": self.option.value,
        }


GovRequest = Union[SubmitProposalRequest, DepositRequest, VoteRequest]
