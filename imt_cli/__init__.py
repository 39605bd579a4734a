"""
IMT CLI

Command-line interface for building incremental Merkle trees and
creating/verifying membership proofs.

Usage:
    python -m imt_cli root leaves.json
    python -m imt_cli prove leaves.json 3 --out proof.json
    python -m imt_cli verify proof.json
    python -m imt_cli config --init
"""

__version__ = "0.1.0"
