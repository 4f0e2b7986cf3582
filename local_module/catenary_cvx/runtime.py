from dataclasses import dataclass
from typing import Optional

import cvxpy as cp
from loguru import logger

from catenary_cvx.config import ConfigLoader
from catenary_cvx.errors import SolverError, SolverUnavailableError


@dataclass(frozen=True)
class SolveReport:
    """Outcome of a single solve."""

    status: str
    objective: Optional[float]
    solver_name: Optional[str]
    solve_time: Optional[float]


class SolverRuntime:
    """
    Explicit lifecycle around the external convex solver.

    Call `initialize()` before the first solve (or use the runtime as a context
    manager) and `teardown()` once done. A torn-down runtime refuses to solve.
    """

    ACCEPTED_STATUSES = (cp.OPTIMAL,)
    INACCURATE_STATUSES = (cp.OPTIMAL_INACCURATE,)

    def __init__(
        self,
        solver: Optional[str] = None,
        verbose: bool = False,
        accept_inaccurate: bool = False,
        solver_options: Optional[dict] = None,
    ) -> None:
        self.solver = solver.upper() if solver else None
        self.verbose = verbose
        self.accept_inaccurate = accept_inaccurate
        self.solver_options = dict(solver_options or {})
        self.initialized = False
        self.closed = False
        self.last_report: Optional[SolveReport] = None

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "SolverRuntime":
        return cls(
            solver=config.get("solver", "name"),
            verbose=config.get("solver", "verbose", False),
            accept_inaccurate=config.get("solver", "accept_inaccurate", False),
            solver_options=config.get("solver", "options", {}),
        )

    def initialize(self) -> "SolverRuntime":
        """Check the requested solver is available. Safe to call more than once."""
        if self.closed:
            raise SolverError("Solver runtime has been torn down", status="closed")
        if self.initialized:
            return self

        installed = cp.installed_solvers()
        if self.solver is not None and self.solver not in installed:
            raise SolverUnavailableError(self.solver, installed)

        logger.info(
            f"Solver runtime ready: {self.solver or 'cvxpy default'} "
            f"(installed: {', '.join(installed)})"
        )
        self.initialized = True
        return self

    def solve(self, problem: cp.Problem) -> SolveReport:
        """
        Submit a problem to the solver.

        Args:
            problem: A DCP-compliant cvxpy problem.

        Returns:
            The solve report. Variable values are populated on the problem's variables.

        Raises:
            SolverError: The solver raised, or finished with a status other than optimal.
        """
        if self.closed:
            raise SolverError("Solver runtime has been torn down", status="closed")
        if not self.initialized:
            self.initialize()

        kwargs = dict(self.solver_options)
        if self.solver is not None:
            kwargs["solver"] = self.solver

        try:
            problem.solve(verbose=self.verbose, **kwargs)
        except cp.error.SolverError as e:
            logger.error(f"Solver failed: {e}")
            raise SolverError(f"Solver failed: {e}") from e

        stats = problem.solver_stats
        report = SolveReport(
            status=problem.status,
            objective=problem.value if problem.status in self._acceptable() else None,
            solver_name=stats.solver_name if stats is not None else None,
            solve_time=stats.solve_time if stats is not None else None,
        )
        self.last_report = report
        logger.debug(
            f"Solve finished with status {report.status} "
            f"using {report.solver_name} in {report.solve_time}s"
        )

        if report.status in self.INACCURATE_STATUSES and self.accept_inaccurate:
            logger.warning(f"Accepting inaccurate solution ({report.status})")
        elif report.status not in self.ACCEPTED_STATUSES:
            logger.error(f"Solve did not reach an optimal status: {report.status}")
            raise SolverError(
                f"Solve finished with status {report.status!r}", status=report.status
            )
        return report

    def teardown(self) -> None:
        if not self.closed:
            logger.debug("Solver runtime torn down")
        self.closed = True
        self.initialized = False

    def _acceptable(self) -> tuple:
        if self.accept_inaccurate:
            return self.ACCEPTED_STATUSES + self.INACCURATE_STATUSES
        return self.ACCEPTED_STATUSES

    def __enter__(self) -> "SolverRuntime":
        return self.initialize()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()
