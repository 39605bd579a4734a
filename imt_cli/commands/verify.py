"""
CLI Verify Command

Verify a proof file offline with the configured hash function.

Usage:
    imt verify proof.json [--root 0x...] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path

from imt.crypto.hashing import from_hex, to_hex
from imt.merkle.merkle_proofs import verify_proof
from imt.merkle.serialization import loads_proof


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf_index: int = 0
    root: str = ""
    proof_ok: bool = False
    root_matches: bool | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = asdict(self)
        if self.root_matches is None:
            del d["root_matches"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        """Check if all verifications passed."""
        if not self.proof_ok:
            return False
        if self.root_matches is not None and not self.root_matches:
            return False
        return True


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"leaf_index: {summary.leaf_index}")
    print(f"root: {summary.root}")
    print(f"proof_ok: {str(summary.proof_ok).lower()}")
    if summary.root_matches is not None:
        print(f"root_matches: {str(summary.root_matches).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    With --root the proof must also be anchored at that root, not just
    internally consistent.

    Returns:
        Exit code (0 valid, 2 invalid)
    """
    config = args.tree_config
    proof_path = Path(args.proof)
    if not proof_path.exists():
        raise FileNotFoundError(f"Proof file not found: {proof_path}")

    logger.info(f"Verifying proof: {proof_path}")
    proof = loads_proof(proof_path.read_text(encoding="utf-8"), decode=from_hex)

    summary = VerifySummary(
        proof_path=str(proof_path),
        leaf_index=proof.leaf_index,
        root=to_hex(proof.root),
        proof_ok=verify_proof(proof, config.hash_function()),
    )
    if not summary.proof_ok:
        summary.errors.append("Recomputed root does not match the proof root")

    if args.root:
        summary.root_matches = proof.root == from_hex(args.root)
        if not summary.root_matches:
            summary.errors.append(f"Proof root differs from expected root {args.root}")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.all_ok else EXIT_VERIFICATION_FAILED
