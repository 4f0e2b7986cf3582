"""
Discretised catenary as a convex program.

The chain is approximated by N nodes joined by N - 1 straight segments. Gravity
pulls the chain down, so the potential energy of a uniform chain is minimised
by minimising the sum of node heights. Each segment may be at most
h = L / (N - 1) long; relaxing "segment length == h" to "<= h" keeps the
feasible set convex, and the optimiser pushes the segments taut anyway.

Known limitation: the discrete solution is not guaranteed to approach the
continuous catenary as N grows. `closed_form.compare_with_closed_form` reports
the gap; nothing here tries to close it.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

import cvxpy as cp
import numpy as np
from loguru import logger

from catenary_cvx.difference import difference_operator
from catenary_cvx.errors import InvalidInputError
from catenary_cvx.runtime import SolverRuntime


class CatenarySolution(NamedTuple):
    """Solved node coordinates. Unpacks as `x, y`."""

    x: np.ndarray
    y: np.ndarray


@dataclass
class CatenaryProblem:
    """A built but not yet solved catenary program."""

    problem: cp.Problem
    x: cp.Variable
    y: cp.Variable
    segment_length: float


class CatenaryModelBuilder:
    """
    Builds and solves the discretised catenary between two fixed endpoints.
    """

    def __init__(
        self,
        beginx: float,
        beginy: float,
        endx: float,
        endy: float,
        n: int,
        length: float,
        sparse_operator: bool = False,
    ) -> None:
        """
        Validate the inputs; nothing is built until `build()` or `solve()`.

        Args:
            beginx, beginy: First endpoint.
            endx, endy: Last endpoint.
            n: Number of nodes, at least 2.
            length: Total chain length, at least the endpoint distance.
            sparse_operator: Use a sparse difference operator.

        Raises:
            InvalidInputError: The inputs cannot describe a feasible chain.
        """
        self.beginx, self.beginy, self.endx, self.endy = self._check_coordinates(
            beginx, beginy, endx, endy
        )
        self.n = self._check_nodes(n)
        self.length = self._check_length(length)
        self.sparse_operator = sparse_operator

    @staticmethod
    def _check_coordinates(*coords) -> tuple[float, ...]:
        values = []
        for c in coords:
            try:
                value = float(c)
            except (TypeError, ValueError) as e:
                raise InvalidInputError(f"Endpoint coordinate {c!r} is not a number") from e
            if not math.isfinite(value):
                raise InvalidInputError(f"Endpoint coordinate {c!r} is not finite")
            values.append(value)
        return tuple(values)

    @staticmethod
    def _check_nodes(n) -> int:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise InvalidInputError(f"Node count must be an integer, got {n!r}")
        if n < 2:
            raise InvalidInputError(f"A chain needs at least 2 nodes, got {n}")
        return int(n)

    def _check_length(self, length) -> float:
        try:
            length = float(length)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Chain length {length!r} is not a number") from e
        if not math.isfinite(length) or length <= 0:
            raise InvalidInputError(f"Chain length must be positive, got {length}")

        span = self.endpoint_distance
        if length < span:
            raise InvalidInputError(
                f"Chain length {length} is shorter than the endpoint distance {span:.6g}"
            )
        return length

    @property
    def endpoint_distance(self) -> float:
        """Straight-line distance between the endpoints."""
        return math.hypot(self.endx - self.beginx, self.endy - self.beginy)

    @property
    def segment_length(self) -> float:
        """Maximum length h of each of the N - 1 segments."""
        return self.length / (self.n - 1)

    def build(self) -> CatenaryProblem:
        """Build a fresh cvxpy problem for these inputs."""
        n = self.n
        h = self.segment_length
        D = difference_operator(n, sparse=self.sparse_operator)

        x = cp.Variable(n, name="x")
        y = cp.Variable(n, name="y")

        diffx = D @ x
        diffy = D @ y

        objective = cp.Minimize(cp.sum(y))
        constraints = [
            cp.square(diffx) + cp.square(diffy) <= h**2,
            x[0] == self.beginx,
            x[n - 1] == self.endx,
            y[0] == self.beginy,
            y[n - 1] == self.endy,
        ]
        logger.debug(f"Built catenary problem with {n} nodes, segment length {h:.6g}")
        return CatenaryProblem(
            problem=cp.Problem(objective, constraints), x=x, y=y, segment_length=h
        )

    def solve(self, runtime: Optional[SolverRuntime] = None) -> CatenarySolution:
        """
        Build and solve the problem.

        Args:
            runtime: An initialised solver runtime. When omitted a transient
                one with cvxpy's default solver is used for this call only.

        Returns:
            Node coordinates (x, y).

        Raises:
            SolverError: The solve did not reach an optimal status.
        """
        built = self.build()
        logger.info(
            f"Solving catenary from ({self.beginx:g}, {self.beginy:g}) to "
            f"({self.endx:g}, {self.endy:g}) with N={self.n}, L={self.length:g}"
        )

        if runtime is None:
            with SolverRuntime() as transient:
                report = transient.solve(built.problem)
        else:
            report = runtime.solve(built.problem)

        logger.success(
            f"Catenary solved ({report.status}), sum(y) = {report.objective:.6g}"
        )
        return CatenarySolution(
            x=np.asarray(built.x.value, dtype=float),
            y=np.asarray(built.y.value, dtype=float),
        )


def build_problem(
    beginx: float, beginy: float, endx: float, endy: float, n: int, length: float
) -> CatenaryProblem:
    """Validate the inputs and build the catenary program without solving it."""
    return CatenaryModelBuilder(beginx, beginy, endx, endy, n, length).build()


def solve_catenary(
    beginx: float,
    beginy: float,
    endx: float,
    endy: float,
    n: int,
    length: float,
    runtime: Optional[SolverRuntime] = None,
    sparse_operator: bool = False,
) -> CatenarySolution:
    """
    Solve the discretised catenary between (beginx, beginy) and (endx, endy).

    Args:
        beginx, beginy: First endpoint.
        endx, endy: Last endpoint.
        n: Number of nodes, at least 2.
        length: Total chain length, at least the endpoint distance.
        runtime: Optional solver runtime to reuse across calls.
        sparse_operator: Use a sparse difference operator.

    Returns:
        Node coordinates as a `CatenarySolution`, unpackable as `x, y`.

    Raises:
        InvalidInputError: Degenerate inputs, rejected before any solve.
        SolverError: The solver did not report an optimal solution.
    """
    builder = CatenaryModelBuilder(
        beginx, beginy, endx, endy, n, length, sparse_operator=sparse_operator
    )
    return builder.solve(runtime)
