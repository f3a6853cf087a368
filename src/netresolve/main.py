#!/usr/bin/env python3
"""netresolve - multi-chain network configuration resolver.

Entry point for the netresolve command.
"""

import sys

from netresolve.cli import create_parser, run_cli


def parse_args(argv: list[str] | None = None):
    """Parse command line arguments."""
    return create_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for netresolve."""
    args = parse_args(argv)

    exit_code = run_cli(args)
    if exit_code < 0:
        create_parser().print_help()
        sys.exit(0)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
