"""Vectorised pairwise set overlap.

Builds a binary incidence matrix (schemas x field tokens) and derives all
pairwise intersection sizes with one matrix product. Union sizes follow
from |A| + |B| - |A & B|. Memory is O(n * vocabulary) for the incidence
matrix plus O(n^2) for the pair matrices, which is fine for projects of a
few hundred to a few thousand schemas.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def incidence_matrix(token_sets: Sequence[set[str]]) -> np.ndarray:
    """Binary matrix with one row per set and one column per distinct token."""
    vocabulary = sorted(set().union(*token_sets)) if token_sets else []
    column = {token: i for i, token in enumerate(vocabulary)}
    matrix = np.zeros((len(token_sets), len(vocabulary)), dtype=np.int32)
    for row, tokens in enumerate(token_sets):
        if tokens:
            matrix[row, [column[t] for t in tokens]] = 1
    return matrix


def pairwise_overlap(token_sets: Sequence[set[str]]) -> tuple[np.ndarray, np.ndarray]:
    """Pairwise intersection and union sizes.

    Returns:
        (overlap, union), both integer arrays of shape (n, n).
    """
    matrix = incidence_matrix(token_sets)
    overlap = matrix @ matrix.T
    sizes = matrix.sum(axis=1)
    union = sizes[:, np.newaxis] + sizes[np.newaxis, :] - overlap
    return overlap, union
