"""REST client for an IRIShub light-client daemon (LCD).

The LCD holds the operator's keys, signs, and broadcasts.  This client only
forwards already-validated governance requests to it and resolves key names to
addresses; no signing or fee logic lives here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import requests
from requests import RequestException, Response

from .config import ConfigurationError, GovConfig
from .model import DepositRequest, GovRequest, SubmitProposalRequest, VoteRequest

logger = logging.getLogger(__name__)


class NodeError(RuntimeError):
    """Raised when the LCD responds with an application error."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"LCD error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class NodeTransportError(RuntimeError):
    """Raised when the LCD is unreachable or returns malformed data."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class BaseTx:
    """Signing context the LCD needs alongside every governance message."""

    name: str
    password: str
    chain_id: str
    gas: int
    fee: str | None = None
    account_number: int = 0
    sequence: int = 0

    @classmethod
    def from_config(cls, config: GovConfig) -> "BaseTx":
        if not config.key_name:
            raise ConfigurationError(
                "A signing key name must be provided via --from, IRISGOV_FROM, or the config file"
            )
        if not config.chain_id:
            raise ConfigurationError(
                "A chain id must be provided via --chain-id, IRISGOV_CHAIN_ID, or the config file"
            )
        return cls(
            name=config.key_name,
            password=config.password or "",
            chain_id=config.chain_id,
            gas=config.gas,
            fee=config.fee,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "password": self.password,
            "chain_id": self.chain_id,
            "account_number": str(self.account_number),
            "sequence": str(self.sequence),
            "gas": str(self.gas),
        }
        if self.fee:
            payload["fee"] = self.fee
        return payload


def route_for(message: GovRequest) -> str:
    """Return the LCD path accepting ``message``."""

    if isinstance(message, SubmitProposalRequest):
        return "/gov/proposal"
    if isinstance(message, DepositRequest):
        return f"/gov/proposals/{message.proposal_id}/deposits"
    if isinstance(message, VoteRequest):
        return f"/gov/proposals/{message.proposal_id}/votes"
    raise TypeError(f"Unsupported governance message: {type(message).__name__}")


class LCDClient:
    """Thin HTTP client for the LCD governance and key endpoints."""

    def __init__(self, config: GovConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()
        self._base_url = config.base_url

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("LCD %s %s params=%s", method, url, params)
        try:
            response = self._session.request(
                method,
                url,
                json=payload,
                params=params,
                headers={"content-type": "application/json"},
                timeout=30,
            )
        except RequestException as exc:
            logger.error(
                "LCD connection failed: %s",
                exc,
                exc_info=logger.isEnabledFor(logging.DEBUG),
            )
            raise NodeTransportError(
                "LCD connection failed. Ensure the light-client daemon is running and that "
                "--node or IRISGOV_NODE points to the right host and port."
            ) from exc
        self._raise_for_status(response)
        try:
            return response.json()
        except ValueError as exc:
            logger.debug("LCD JSON parse error: %s", response.text, exc_info=True)
            raise NodeTransportError("LCD returned malformed JSON") from exc

    def _raise_for_status(self, response: Response) -> None:
        if response.ok:
            return
        # The LCD reports application errors as plain-text or JSON bodies on 4xx/5xx.
        try:
            body = response.json()
        except ValueError:
            body = response.text
        logger.error("LCD HTTP error %s from %s", response.status_code, response.url)
        logger.error("LCD error body: %s", body)
        if response.status_code >= 500 and not body:
            raise NodeTransportError(
                f"LCD returned HTTP {response.status_code}", status_code=response.status_code
            )
        if isinstance(body, dict):
            message = str(body.get("error") or body.get("message") or body)
        else:
            message = str(body).strip() or response.reason or "unknown error"
        raise NodeError(response.status_code, message)

    # Account resolver -----------------------------------------------------

    def get_key(self, name: str) -> Dict[str, Any]:
        return self.request("GET", f"/keys/{name}")

    def address_of(self, name: str) -> str:
        info = self.get_key(name)
        address = info.get("address") if isinstance(info, dict) else None
        if not address:
            raise NodeTransportError(f"LCD returned no address for key '{name}'")
        return address

    # Signer / broadcaster -------------------------------------------------

    def submit(
        self,
        messages: Sequence[GovRequest],
        base_tx: BaseTx,
        generate_only: bool = False,
    ) -> list[Any]:
        """Post each message to its LCD route and return the responses.

        With ``generate_only`` the daemon returns the unsigned transaction
        instead of signing and broadcasting it.
        """

        params = {"generate-only": "true"} if generate_only else None
        responses: list[Any] = []
        for message in messages:
            body = {"base_tx": base_tx.to_dict(), **message.to_dict()}
            logger.info(
                "Submitting %s/%s message%s",
                message.route,
                message.type,
                " (generate only)" if generate_only else "",
            )
            responses.append(self.request("POST", route_for(message), body, params=params))
        return responses
