"""Command-line interface for submitting governance transactions.

The CLI is a thin façade: it gathers flags into option dataclasses, hands them
to :mod:`irisgov.resolver`, echoes what will be sent, and forwards the
validated request to the light-client daemon for signing and broadcast.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .config import ConfigurationError, GovConfig, load_gov_config
from .errors import GovError
from .lcd_client import BaseTx, LCDClient, NodeError, NodeTransportError
from .model import GovRequest, ProposalKind, VoteOption
from .params import DEFAULT_REGISTRY, load_snapshot, param_from_snapshot, snapshot_path
from .resolver import (
    DepositOptions,
    SubmitProposalOptions,
    VoteOptions,
    format_param,
    format_vote,
    resolve_deposit,
    resolve_submit_proposal,
    resolve_vote,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

COMPACT_JSON_SEPARATORS = (",", ":")


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="IRIShub governance transactions")
    parser.add_argument("--config", default=None, help="Path to an irisgov YAML config file")
    parser.add_argument(
        "--home",
        default=None,
        help="Directory holding node data; snapshots are read from <home>/<path>/config/params.json",
    )
    parser.add_argument("--node", default=None, help="LCD endpoint URL (e.g. http://127.0.0.1:1317)")
    parser.add_argument("--chain-id", default=None, help="Chain id of the target network")
    parser.add_argument("--from", dest="from_name", default=None, help="Name of the signing key")
    parser.add_argument("--gas", type=int, default=None, help="Gas limit for the transaction")
    parser.add_argument("--fee", default=None, help="Fee to pay (e.g. 4000000000000000iris-atto)")
    parser.add_argument(
        "--generate-only",
        action="store_true",
        help="Print the unsigned transaction instead of signing and broadcasting it",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    submit_parser = subparsers.add_parser(
        "submit-proposal", help="submit a proposal along with an initial deposit"
    )
    submit_parser.add_argument("--title", default="", help="Title of the proposal")
    submit_parser.add_argument("--description", default="", help="Description of the proposal")
    submit_parser.add_argument(
        "--type",
        dest="proposal_type",
        default="",
        help="Proposal type: " + "/".join(kind.value for kind in ProposalKind),
    )
    submit_parser.add_argument("--deposit", default="", help="Initial deposit (e.g. 10iris)")
    submit_parser.add_argument(
        "--param",
        default="",
        help='Inline parameter change, e.g. {"key":"...","value":"...","op":"update"}',
    )
    submit_parser.add_argument(
        "--path", default="", help="Node directory under --home containing config/params.json"
    )
    submit_parser.add_argument("--key", default="", help="Key of the parameter to change")
    submit_parser.add_argument("--op", default="", help="Operation applied to the parameter")

    deposit_parser = subparsers.add_parser(
        "deposit", help="deposit tokens for activating a proposal"
    )
    deposit_parser.add_argument("--proposal-id", default="", help="Proposal to deposit on")
    deposit_parser.add_argument("--deposit", default="", help="Amount of the deposit")

    vote_parser = subparsers.add_parser(
        "vote",
        help="vote for an active proposal, options: "
        + "/".join(option.value for option in VoteOption),
    )
    vote_parser.add_argument("--proposal-id", default="", help="Proposal to vote on")
    vote_parser.add_argument("--option", default="", help="Vote option")

    show_parser = subparsers.add_parser(
        "show-param", help="print a parameter resolved from a node snapshot"
    )
    show_parser.add_argument("--path", default="", help="Node directory under --home")
    show_parser.add_argument(
        "--key",
        required=True,
        help="Parameter key (" + ", ".join(DEFAULT_REGISTRY.keys()) + ")",
    )
    show_parser.add_argument("--op", default="update", help="Operation (default: %(default)s)")

    return parser


def _config_from_args(args: argparse.Namespace) -> GovConfig:
    overrides: dict[str, Any] = {
        "node_home": args.home,
        "endpoint": args.node,
        "chain_id": args.chain_id,
        "key_name": args.from_name,
        "gas": args.gas,
        "fee": args.fee,
        # An absent flag must not mask IRISGOV_GENERATE_ONLY.
        "generate_only": True if args.generate_only else None,
    }
    return load_gov_config(config_path=args.config, overrides=overrides)


def _require_key_name(config: GovConfig) -> str:
    if not config.key_name:
        raise CLIError("--from (or IRISGOV_FROM) is required to sign governance transactions")
    return config.key_name


def _send(client: LCDClient, config: GovConfig, request: GovRequest) -> None:
    base_tx = BaseTx.from_config(config)
    responses = client.submit([request], base_tx, generate_only=config.generate_only)
    for response in responses:
        print(json.dumps(response, indent=2))


def cmd_submit_proposal(args: argparse.Namespace, config: GovConfig) -> None:
    options = SubmitProposalOptions(
        title=args.title,
        description=args.description,
        proposal_type=args.proposal_type,
        deposit=args.deposit,
        param=args.param,
        path=args.path,
        key=args.key,
        op=args.op,
    )
    client = LCDClient(config)
    request = resolve_submit_proposal(
        options, _require_key_name(config), client, node_home=config.node_home
    )
    if request.param is not None:
        print(format_param(request.param))
    _send(client, config, request)


def cmd_deposit(args: argparse.Namespace, config: GovConfig) -> None:
    options = DepositOptions(proposal_id=args.proposal_id, deposit=args.deposit)
    client = LCDClient(config)
    request = resolve_deposit(options, _require_key_name(config), client)
    _send(client, config, request)


def cmd_vote(args: argparse.Namespace, config: GovConfig) -> None:
    options = VoteOptions(proposal_id=args.proposal_id, option=args.option)
    client = LCDClient(config)
    request = resolve_vote(options, _require_key_name(config), client)
    print(format_vote(request))
    _send(client, config, request)


def cmd_show_param(args: argparse.Namespace, config: GovConfig) -> None:
    document = load_snapshot(snapshot_path(config.node_home, args.path))
    param = param_from_snapshot(document, args.key, args.op)
    print(json.dumps(param.to_dict(), separators=COMPACT_JSON_SEPARATORS))


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _config_from_args(args)
        if args.command == "submit-proposal":
            cmd_submit_proposal(args, config)
        elif args.command == "deposit":
            cmd_deposit(args, config)
        elif args.command == "vote":
            cmd_vote(args, config)
        elif args.command == "show-param":
            cmd_show_param(args, config)
        else:  # pragma: no cover - argparse enforces choices
            raise CLIError(f"Unknown command: {args.command}")
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        logger.info("Interrupted by user")
    except (
        CLIError,
        ConfigurationError,
        GovError,
        NodeError,
        NodeTransportError,
    ) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
