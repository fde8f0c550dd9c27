"""Linear solvers used by the optimizer and the baseline estimators.

Two systems appear in this package:

* small dense systems (Levenberg-Marquardt normal equations, polynomial
  normal equations) solved by LU factorisation with partial pivoting;
* the symmetric pentadiagonal Whittaker system ``(W + lam * D2'D2) z = W y``
  of the AsLS baseline, solved in O(n) with a banded factorisation.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve as _lu_solve
from scipy.linalg import solve_banded, solveh_banded

from peakfit1d.core.shared.exceptions import InvalidInputError, SingularMatrixError

if TYPE_CHECKING:
    from peakfit1d.core.shared.typing import FloatArray

PIVOT_TOLERANCE = 1e-12


def lu_solve(a: FloatArray, b: FloatArray, pivot_tolerance: float = PIVOT_TOLERANCE) -> FloatArray:
    """Solve ``a @ x = b`` by LU decomposition with partial pivoting.

    Args:
        a: Square coefficient matrix
        b: Right-hand side vector
        pivot_tolerance: Smallest acceptable absolute pivot

    Returns
    -------
        Solution vector

    Raises
    ------
        SingularMatrixError: If a pivot falls below ``pivot_tolerance`` or the
            system contains non-finite values
        InvalidInputError: If the shapes are inconsistent
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.ndim != 2 or a.shape[0] != a.shape[1] or b.shape != (a.shape[0],):
        msg = f"Expected a square matrix and matching vector, got {a.shape} and {b.shape}"
        raise InvalidInputError(msg)
    if a.shape[0] == 0:
        return np.empty(0)
    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        raise SingularMatrixError("Linear system contains non-finite values")

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", LinAlgWarning)
        lu, piv = lu_factor(a, check_finite=False)

    if np.min(np.abs(np.diag(lu))) < pivot_tolerance:
        raise SingularMatrixError("Matrix is singular to working precision")

    return _lu_solve((lu, piv), b, check_finite=False)


def solve_pentadiagonal(
    diag: FloatArray,
    off1: FloatArray,
    off2: FloatArray,
    rhs: FloatArray,
) -> FloatArray:
    """Solve a symmetric pentadiagonal system in O(n).

    Args:
        diag: Main diagonal, length n
        off1: First off-diagonal, length n-1
        off2: Second off-diagonal, length n-2
        rhs: Right-hand side, length n

    Returns
    -------
        Solution vector
    """
    n = rhs.size
    if diag.size != n or off1.size != max(n - 1, 0) or off2.size != max(n - 2, 0):
        msg = "Pentadiagonal band lengths do not match the right-hand side"
        raise InvalidInputError(msg)
    if n < 3:
        return np.array(rhs, dtype=float)

    # Upper form for LAPACK banded storage
    ab = np.zeros((3, n))
    ab[0, 2:] = off2
    ab[1, 1:] = off1
    ab[2, :] = diag
    try:
        return solveh_banded(ab, rhs, check_finite=False)
    except np.linalg.LinAlgError:
        # Not positive definite (zero weights): banded LU instead of Cholesky
        full = np.zeros((5, n))
        full[0, 2:] = off2
        full[1, 1:] = off1
        full[2, :] = diag
        full[3, :-1] = off1
        full[4, :-2] = off2
        return solve_banded((2, 2), full, rhs, check_finite=False)


def second_difference_gram(n: int) -> tuple[FloatArray, FloatArray, FloatArray]:
    """Return the bands of ``D2' D2`` for the n-point second-difference operator.

    Interior rows carry the stencil ``[1, -4, 6, -4, 1]``; the first and last
    two rows carry the reduced boundary stencils.
    """
    stencil = np.array([1.0, -2.0, 1.0])
    diag = np.zeros(n)
    off1 = np.zeros(max(n - 1, 0))
    off2 = np.zeros(max(n - 2, 0))
    m = n - 2
    if m <= 0:
        return diag, off1, off2
    for j in range(3):
        diag[j : j + m] += stencil[j] ** 2
    for j in range(2):
        off1[j : j + m] += stencil[j] * stencil[j + 1]
    off2[:m] += stencil[0] * stencil[2]
    return diag, off1, off2
