class CatenaryError(Exception):
    """Base class for all catenary-cvx failures."""


class InvalidInputError(CatenaryError, ValueError):
    """Raised before any model is built when the inputs cannot describe a hanging chain."""


class SolverError(CatenaryError, RuntimeError):
    """
    Raised when the external solve does not reach an acceptable status.

    The solver status is carried verbatim in `status`.
    """

    def __init__(self, message: str, status: str = "solver_error") -> None:
        super().__init__(message)
        self.status = status


class SolverUnavailableError(SolverError):
    """Raised when the requested solver is not installed alongside cvxpy."""

    def __init__(self, solver: str, installed: list[str]) -> None:
        super().__init__(
            f"Solver {solver!r} is not installed (available: {', '.join(installed)})",
            status="solver_unavailable",
        )
        self.solver = solver
        self.installed = installed
