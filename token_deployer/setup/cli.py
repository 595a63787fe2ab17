#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys

from token_deployer import __version__
from token_deployer.config.logging_config import get_cli_logger
from token_deployer.config.settings import load_config
from token_deployer.errors import ArgumentError, TokenDeployError
from .context import DeployContext, build_context
from .orchestrator import deploy_and_fund, deploy_many
from .tokens import dump_tokens, parse_token, parse_token_batch

logger = logging.getLogger(__name__)


def _context(args: argparse.Namespace) -> DeployContext:
    config = load_config(env_file=args.env_file, rpc_url=args.rpc_url)
    return build_context(config)


def cmd_add(args: argparse.Namespace) -> int:
    # Validate before touching config or the chain
    token = parse_token(args.token_name, args.symbol, args.decimals)
    ctx = _context(args)
    result = deploy_and_fund(ctx, token)
    print(dump_tokens(result))
    return 0


def cmd_add_multi(args: argparse.Namespace) -> int:
    tokens = parse_token_batch(args.tokens_json)
    ctx = _context(args)
    results = deploy_many(ctx, tokens)
    print(dump_tokens(results))
    return 0


def _report_error(e: Exception) -> None:
    kind = e.kind if isinstance(e, TokenDeployError) else type(e).__name__
    print(f"Error: {e}", file=sys.stderr)
    print(json.dumps({"error": kind, "message": str(e)}), file=sys.stderr)


class _Parser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors go through the typed error path."""

    def error(self, message: str):
        raise ArgumentError(f"{self.prog}: {message}")


def build_parser() -> argparse.ArgumentParser:
    common = _Parser(add_help=False)
    common.add_argument("--env-file", help="Path to .env file to load before resolving env vars")
    common.add_argument("--rpc-url", help="Provider endpoint (default RPC_URL / ETH_CLIENT_WEB3_URL / local node)")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser = _Parser(prog="deploy-erc20", description="deploy testnet erc20 token")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    # add
    p_add = sub.add_parser("add", parents=[common], help="Adds a new token with a given fields")
    p_add.add_argument("-n", "--token-name", dest="token_name", help="Token name")
    p_add.add_argument("-s", "--symbol", help="Token symbol")
    p_add.add_argument("-d", "--decimals", type=int, help="Token decimals")
    p_add.set_defaults(func=cmd_add)

    # add-multi
    p_multi = sub.add_parser("add-multi", parents=[common], help="Adds a multiple tokens given in JSON format")
    p_multi.add_argument("tokens_json", help='JSON array of {"address": null, "name", "symbol", "decimals"}')
    p_multi.set_defaults(func=cmd_add_multi)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if not hasattr(args, "func"):
            parser.print_help(sys.stderr)
            raise ArgumentError("no command given, expected add or add-multi")
        get_cli_logger(verbose=args.verbose)
        return int(args.func(args))
    except Exception as e:
        logger.debug("Run aborted", exc_info=True)
        _report_error(e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
