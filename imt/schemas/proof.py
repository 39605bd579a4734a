"""
Schemas - Merkle Proof Wire Model
File: proof.py

Purpose: Pydantic model describing the external shape of a Merkle proof.
Field names follow the established JSON layout:

    {"root", "leaf", "leafIndex", "siblings", "pathIndices"}

Sibling groups and path indices are ordered by increasing level
(leaf level first). Node values are carried as already-encoded JSON
values (hex strings for byte digests).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MerkleProofModel(BaseModel):
    """Serializable form of a MerkleProof."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    root: Any = Field(..., description="Root of the tree the proof was taken from")
    leaf: Any = Field(..., description="Leaf value being proven")
    leaf_index: int = Field(..., alias="leafIndex", ge=0, description="Index of the leaf")
    siblings: list[list[Any]] = Field(
        default_factory=list,
        description="Sibling groups per level, path child omitted",
    )
    path_indices: list[int] = Field(
        default_factory=list,
        alias="pathIndices",
        description="Position of the path child within its group, per level",
    )

    @model_validator(mode="after")
    def _check_levels(self) -> "MerkleProofModel":
        if len(self.siblings) != len(self.path_indices):
            raise ValueError(
                f"siblings has {len(self.siblings)} levels but pathIndices has "
                f"{len(self.path_indices)}"
            )
        return self
