"""
Forward-difference operator as an explicit matrix.

cvxpy expressions are built from variables and constant matrices, so the
adjacent-node difference `x[k+1] - x[k]` is written as `D @ x` with

    D[k, k] = -1, D[k, k+1] = +1, every other entry 0

for the (n - 1) x n matrix D.
"""

import numpy as np
from scipy.sparse import csr_matrix

from catenary_cvx.errors import InvalidInputError


def difference_operator(n: int, sparse: bool = False):
    """
    Build the (n - 1) x n forward-difference matrix.

    Args:
        n: Number of nodes, at least 2.
        sparse: Return a `scipy.sparse.csr_matrix` instead of a dense array.
            For large n the dense constant is mostly zeros and dominates the
            time cvxpy spends canonicalising the problem.

    Returns:
        The difference operator D.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 2:
        raise InvalidInputError(f"Difference operator needs n >= 2 nodes, got {n!r}")

    rows = np.arange(n - 1)
    if sparse:
        data = np.concatenate((-np.ones(n - 1), np.ones(n - 1)))
        row_idx = np.concatenate((rows, rows))
        col_idx = np.concatenate((rows, rows + 1))
        return csr_matrix((data, (row_idx, col_idx)), shape=(n - 1, n))

    D = np.zeros((n - 1, n))
    D[rows, rows] = -1.0
    D[rows, rows + 1] = 1.0
    return D


def apply_difference(values) -> np.ndarray:
    """Consecutive differences of a solved coordinate sequence."""
    return np.diff(np.asarray(values, dtype=float))
