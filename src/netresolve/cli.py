"""CLI subcommands for inspecting resolved network configuration.

Provides command-line interface for:
- Network listing and inspection (networks, network NAME)
- Local development chain inspection (local)
- Signer account listing (accounts)
"""

import argparse
import json
import sys

from pydantic import ValidationError

from netresolve.config import ResolverConfig, load_config
from netresolve.core.assembler import AssembledConfig, assemble
from netresolve.core.wallet import DEFAULT_ACCOUNT_COUNT, signer_provider
from netresolve.exceptions import ResolverError
from netresolve.observability.logging import configure_logging

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="netresolve",
        description="netresolve - multi-chain network configuration resolver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global flags
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )
    parser.add_argument(
        "--env-file",
        metavar="PATH",
        help="Dotenv file to load (default: $DOTENV_CONFIG_PATH or .env)",
    )
    parser.add_argument(
        "--fork",
        metavar="CHAIN",
        help="Fork the local chain from CHAIN (name or chain id)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("networks", help="List all networks")

    network_parser = subparsers.add_parser("network", help="Show one network")
    network_parser.add_argument("name", type=str, help="Network name, e.g. mainnet")

    subparsers.add_parser("local", help="Show the local development chain")

    accounts_parser = subparsers.add_parser("accounts", help="List signer addresses")
    accounts_parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_ACCOUNT_COUNT,
        help=f"Accounts to derive from a mnemonic (default: {DEFAULT_ACCOUNT_COUNT})",
    )

    return parser


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(self, config: ResolverConfig, json_output: bool = False):
        self.config = config
        self.json_output = json_output
        self._resolved: AssembledConfig | None = None

    @property
    def resolved(self) -> AssembledConfig:
        """Get the assembled configuration (lazy loaded)."""
        if self._resolved is None:
            self._resolved = assemble(self.config)
        return self._resolved

    def output(self, data: dict) -> None:
        """Output data in the appropriate format."""
        if self.json_output:
            print(json.dumps(data, indent=2))
        else:
            self._print_formatted(data)

    def _print_formatted(self, data: dict, indent: int = 0) -> None:
        """Print data in human-readable format."""
        prefix = "  " * indent
        for key, value in data.items():
            if isinstance(value, dict):
                print(f"{prefix}{key}:")
                self._print_formatted(value, indent + 1)
            elif isinstance(value, list) and value and isinstance(value[0], dict):
                print(f"{prefix}{key}:")
                for item in value:
                    self._print_formatted(item, indent + 1)
            else:
                print(f"{prefix}{key}: {value}")


def cmd_networks(ctx: CLIContext) -> int:
    """List every network with its chain id and endpoint."""
    try:
        networks = ctx.resolved.networks()
    except ResolverError as e:
        ctx.output({"error": str(e)})
        return 1

    ctx.output(
        {
            name: {
                "chain_id": int(network.chain_id),
                "url": network.masked_url,
            }
            for name, network in sorted(networks.items())
        }
    )
    return 0


def cmd_network(ctx: CLIContext, name: str) -> int:
    """Show one network entry."""
    try:
        network = ctx.resolved.network(name)
    except ResolverError as e:
        ctx.output({"error": str(e)})
        return 1

    ctx.output({network.name: network.to_dict()})
    return 0


def cmd_local(ctx: CLIContext) -> int:
    """Show the local development chain entry."""
    try:
        local = ctx.resolved.local
    except ResolverError as e:
        ctx.output({"error": str(e)})
        return 1

    data = local.to_dict()
    data["forked"] = local.is_fork
    ctx.output({local.name: data})
    return 0


def cmd_accounts(ctx: CLIContext, count: int = DEFAULT_ACCOUNT_COUNT) -> int:
    """List signer addresses for the active credentials."""
    try:
        credentials = ctx.resolved.credentials
        addresses = signer_provider(credentials, count=count).addresses
    except (ResolverError, ValueError) as e:
        ctx.output({"error": str(e)})
        return 1

    ctx.output({"mode": credentials.mode.value, "accounts": addresses})
    return 0


def run_cli(args: argparse.Namespace) -> int:
    """Execute CLI command based on parsed arguments.

    Returns
    -------
    int
        Exit code: 0 for success, positive for error, -1 signals caller
        to show help (no command specified).
    """
    if not args.command:
        return -1

    try:
        config = load_config(args.env_file)
        if args.fork:
            config = config.model_copy(update={"fork_chain": args.fork})
        configure_logging(level=config.log_level, log_format=config.log_format)
    except (ValidationError, ValueError) as e:
        if args.json:
            print(json.dumps({"error": f"Configuration error: {e}"}))
        else:
            print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    ctx = CLIContext(config, json_output=args.json)

    if args.command == "networks":
        return cmd_networks(ctx)
    elif args.command == "network":
        return cmd_network(ctx, args.name)
    elif args.command == "local":
        return cmd_local(ctx)
    elif args.command == "accounts":
        return cmd_accounts(ctx, args.count)
    else:
        print("Usage: netresolve [networks|network|local|accounts]", file=sys.stderr)
        return 1
