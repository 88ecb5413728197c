"""Error taxonomy for governance request resolution.

Every error raised while turning operator input into a governance message is
terminal for the current invocation.  Callers are expected to surface the
message to the operator rather than retry.
"""

from __future__ import annotations


class GovError(RuntimeError):
    """Base class for request resolution failures."""


class UnknownProposalKind(GovError):
    """Raised when a proposal type name is not one of the known kinds."""


class MalformedParamInput(GovError):
    """Raised when an inline parameter blob cannot be decoded."""


class UnknownParameterKey(GovError):
    """Raised when no extractor is registered for a parameter key."""


class ParameterSnapshotUnreadable(GovError):
    """Raised when the parameter snapshot file cannot be read."""


class MalformedSnapshot(GovError):
    """Raised when the parameter snapshot cannot be decoded."""


class InvalidVoteOption(GovError):
    """Raised when a vote option is not one of the four named values."""


class InvalidProposalID(GovError):
    """Raised when a proposal id is not a non-negative integer."""


class InvalidAmount(GovError):
    """Raised when a coin amount string is malformed."""


class InvalidProposalContent(GovError):
    """Raised when a proposal is missing its title or description."""


class InvalidAddress(GovError):
    """Raised when a request is missing its signer address."""
