"""
CLI Root Command

Build a tree from a leaves file and print its root.

Usage:
    imt root leaves.json [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass

from imt.crypto.hashing import to_hex
from imt.merkle.incremental_tree import IncrementalMerkleTree
from imt_cli.leaves import load_leaves


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


@dataclass
class TreeSummary:
    """Summary of a built tree for CLI output."""
    root: str = ""
    size: int = 0
    capacity: int = 0
    depth: int = 0
    arity: int = 0
    hash: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def build_summary(tree: IncrementalMerkleTree, hash_name: str) -> TreeSummary:
    """Build a TreeSummary from a tree."""
    return TreeSummary(
        root=to_hex(tree.root),
        size=tree.size,
        capacity=tree.capacity,
        depth=tree.depth,
        arity=tree.arity,
        hash=hash_name,
    )


def print_summary_human(summary: TreeSummary) -> None:
    """Print summary in human-readable format."""
    print(f"root: {summary.root}")
    print(f"leaves: {summary.size}/{summary.capacity}")
    print(f"depth: {summary.depth}")
    print(f"arity: {summary.arity}")
    print(f"hash: {summary.hash}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments (uses args.tree_config)

    Returns:
        Exit code
    """
    config = args.tree_config
    leaves = load_leaves(args.leaves)

    tree = config.create_tree(leaves)
    logger.info(f"Built tree with {tree.size} leaves")

    summary = build_summary(tree, config.hash)
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
