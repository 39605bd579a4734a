"""
CLI Prove Command

Create a membership proof for one leaf of a leaves file.

Usage:
    imt prove leaves.json INDEX [--out proof.json] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from imt.merkle.serialization import proof_to_dict
from imt_cli.leaves import load_leaves


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    The proof is written to --out when given, otherwise printed. With
    --json the printed output is the proof record itself; without it a
    short human summary follows the file path.

    Returns:
        Exit code
    """
    config = args.tree_config
    leaves = load_leaves(args.leaves)
    tree = config.create_tree(leaves)

    proof = tree.create_proof(args.index)
    record = proof_to_dict(proof)
    text = json.dumps(record, indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote proof for leaf {args.index} to {out_path}")

    if args.json or not args.out:
        print(text)
    else:
        print(f"proof: {args.out}")
        print(f"leaf_index: {proof.leaf_index}")
        print(f"leaf: {record['leaf']}")
        print(f"root: {record['root']}")
        print(f"levels: {proof.depth}")

    return EXIT_SUCCESS
