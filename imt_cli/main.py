"""
IMT CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m imt_cli root <leaves.json> [--json]
    python -m imt_cli prove <leaves.json> <index> [--out PATH] [--json]
    python -m imt_cli verify <proof.json> [--root 0x...] [--json]
    python -m imt_cli config --init | --show

Environment Variables:
    IMT_DEPTH           Tree depth (default: 20)
    IMT_ARITY           Children per node (default: 2)
    IMT_HASH            Hash function: sha256, sha256-length-prefixed, blake2b
    IMT_ZERO_VALUE      Zero leaf as 0x hex (default: 32 zero bytes)
    IMT_LOG_LEVEL       Log level (default: INFO)
    IMT_LOG_FILE        Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from imt.config.runtime import TreeConfig, get_default_config_template, load_config
from imt.schemas.errors import IMTException
from imt_cli.commands import prove, root, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="imt",
        description="Incremental Merkle tree CLI - compute roots, create and verify proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./imt.yaml or ~/.config/imt/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Tree depth (overrides config)",
    )
    parser.add_argument(
        "--arity",
        type=int,
        default=None,
        help="Children per node (overrides config)",
    )
    parser.add_argument(
        "--hash",
        type=str,
        default=None,
        help="Hash function name (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Build a tree from a leaves file and print its root",
    )
    root_parser.add_argument("leaves", type=str, help="JSON array of leaves")
    root_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Create a membership proof for one leaf",
    )
    prove_parser.add_argument("leaves", type=str, help="JSON array of leaves")
    prove_parser.add_argument("index", type=int, help="Index of the leaf to prove")
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Write the proof to this path")
    prove_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof file",
        description="Recompute the root from the proof path and compare it with the proof root.",
    )
    verify_parser.add_argument("proof", type=str, help="Proof JSON file")
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root (0x hex); the proof must be anchored at it",
    )
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="imt.yaml",
        help="Path for config file (default: imt.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (IMT_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.tree_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: imt config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def apply_cli_overrides(config: TreeConfig, args: argparse.Namespace) -> TreeConfig:
    """Overlay --depth/--arity/--hash flags on the loaded configuration."""
    if args.depth is not None:
        config.depth = args.depth
    if args.arity is not None:
        config.arity = args.arity
    if args.hash is not None:
        config.hash = args.hash
    return config


def report_error(error: IMTException, as_json: bool) -> None:
    """Print a library error, as an IMTError record in JSON mode."""
    if as_json:
        print(json.dumps(error.to_error_model().model_dump(), indent=2))
    else:
        print(f"Error [{error.code}]: {error.message}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except IMTException as e:
        report_error(e, getattr(args, "json", False))
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level, log_file=config.log_file)

    args.tree_config = apply_cli_overrides(config, args)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except IMTException as e:
        report_error(e, getattr(args, "json", False))
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
