"""Catenary curves as convex programs, solved with cvxpy."""

from catenary_cvx.closed_form import ClosedFormCatenary, compare_with_closed_form
from catenary_cvx.difference import difference_operator
from catenary_cvx.errors import (
    CatenaryError,
    InvalidInputError,
    SolverError,
    SolverUnavailableError,
)
from catenary_cvx.model import (
    CatenaryModelBuilder,
    CatenaryProblem,
    CatenarySolution,
    build_problem,
    solve_catenary,
)
from catenary_cvx.runtime import SolveReport, SolverRuntime

__all__ = [
    "CatenaryError",
    "CatenaryModelBuilder",
    "CatenaryProblem",
    "CatenarySolution",
    "ClosedFormCatenary",
    "InvalidInputError",
    "SolveReport",
    "SolverError",
    "SolverRuntime",
    "SolverUnavailableError",
    "build_problem",
    "compare_with_closed_form",
    "difference_operator",
    "solve_catenary",
]
