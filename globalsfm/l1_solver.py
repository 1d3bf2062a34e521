"""Least absolute deviations solver, min ||A x - b||_1, using ADMM."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import scipy.linalg
import scipy.sparse
import scipy.sparse.linalg


@dataclass
class L1SolverOptions:
    """Iteration limit, ADMM parameters and convergence tolerances."""

    max_num_iterations: int = 1000
    # Augmented Lagrangian parameter.
    rho: float = 1.0
    # Over-relaxation parameter, typically between 1.0 and 1.8.
    alpha: float = 1.0
    absolute_tolerance: float = 1e-4
    relative_tolerance: float = 1e-2


def _shrinkage(vec: np.ndarray, kappa: float) -> np.ndarray:
    return np.maximum(0.0, vec - kappa) - np.maximum(0.0, -vec - kappa)


class L1Solver:
    """Solver for a fixed matrix A; dense arrays and scipy sparse matrices work."""

    def __init__(self, options: L1SolverOptions, mat) -> None:
        self.options = options
        if scipy.sparse.issparse(mat):
            self._a = scipy.sparse.csc_matrix(mat, dtype=float)
            spd = (self._a.T @ self._a).tocsc()
            try:
                self._solve_normal = scipy.sparse.linalg.factorized(spd)
            except RuntimeError as exc:
                raise np.linalg.LinAlgError(
                    "could not factorise the normal equations"
                ) from exc
        else:
            self._a = np.asarray(mat, dtype=float)
            if self._a.ndim != 2:
                raise ValueError("matrix must be two-dimensional")
            factor = scipy.linalg.cho_factor(self._a.T @ self._a)
            self._solve_normal = lambda b: scipy.linalg.cho_solve(factor, b)

    def solve(self, rhs) -> np.ndarray:
        """Return x minimising the L1 norm of A x - rhs."""
        opts = self.options
        a = self._a
        rows, cols = a.shape
        rhs = np.asarray(rhs, dtype=float).reshape(-1)
        if rhs.size != rows:
            raise ValueError(f"rhs has {rhs.size} entries, matrix has {rows} rows")

        x = np.zeros(cols)
        z = np.zeros(rows)
        u = np.zeros(rows)

        rhs_norm = np.linalg.norm(rhs)
        primal_abs_eps = math.sqrt(rows) * opts.absolute_tolerance
        dual_abs_eps = math.sqrt(cols) * opts.absolute_tolerance

        for _ in range(opts.max_num_iterations):
            x = np.asarray(self._solve_normal(a.T @ (rhs + z - u))).reshape(-1)
            if not np.all(np.isfinite(x)):
                raise np.linalg.LinAlgError(
                    "L1 minimisation failed: the linear system could not be solved"
                )

            a_times_x = np.asarray(a @ x).reshape(-1)
            ax_hat = opts.alpha * a_times_x + (1.0 - opts.alpha) * (z + rhs)

            z_old = z
            z = _shrinkage(ax_hat - rhs + u, 1.0 / opts.rho)
            u = u + ax_hat - z - rhs

            r_norm = np.linalg.norm(a_times_x - z - rhs)
            s_norm = np.linalg.norm(-opts.rho * (a.T @ (z - z_old)))
            max_norm = max(np.linalg.norm(a_times_x), np.linalg.norm(z), rhs_norm)
            primal_eps = primal_abs_eps + opts.relative_tolerance * max_norm
            dual_eps = dual_abs_eps + opts.relative_tolerance * np.linalg.norm(
                opts.rho * (a.T @ u)
            )
            if r_norm < primal_eps and s_norm < dual_eps:
                break
        return x