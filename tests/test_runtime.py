import cvxpy as cp
import pytest
from loguru import logger

from catenary_cvx.config import ConfigLoader
from catenary_cvx.errors import SolverError, SolverUnavailableError
from catenary_cvx.model import build_problem, solve_catenary
from catenary_cvx.runtime import SolverRuntime


def test_unknown_solver_is_unavailable():
    runtime = SolverRuntime(solver="no_such_solver")
    with pytest.raises(SolverUnavailableError) as excinfo:
        runtime.initialize()
    assert excinfo.value.status == "solver_unavailable"
    assert excinfo.value.solver == "NO_SUCH_SOLVER"


def test_infeasible_problem_propagates_status(runtime):
    x = cp.Variable()
    problem = cp.Problem(cp.Minimize(x), [x >= 1, x <= 0])
    with pytest.raises(SolverError) as excinfo:
        runtime.solve(problem)
    assert excinfo.value.status == cp.INFEASIBLE
    assert runtime.last_report.status == cp.INFEASIBLE
    assert runtime.last_report.objective is None


def test_report_after_solve(runtime):
    built = build_problem(0, 0, 1, 0, 11, 2)
    report = runtime.solve(built.problem)
    assert report.status == cp.OPTIMAL
    assert report.objective == pytest.approx(sum(built.y.value))
    assert report.solver_name is not None


def test_torn_down_runtime_refuses_to_solve():
    runtime = SolverRuntime().initialize()
    runtime.teardown()
    with pytest.raises(SolverError) as excinfo:
        solve_catenary(0, 0, 1, 0, 5, 2, runtime=runtime)
    assert excinfo.value.status == "closed"
    with pytest.raises(SolverError):
        runtime.initialize()


def test_context_manager_lifecycle():
    with SolverRuntime() as runtime:
        assert runtime.initialized
    assert runtime.closed
    assert not runtime.initialized


def test_solve_initializes_lazily():
    runtime = SolverRuntime()
    solve_catenary(0, 0, 1, 0, 5, 2, runtime=runtime)
    assert runtime.initialized
    runtime.teardown()


def test_runtime_reused_across_solves(runtime):
    solve_catenary(0, 0, 1, 0, 11, 2, runtime=runtime)
    first = runtime.last_report
    solve_catenary(0, 0, 1, 0, 21, 2, runtime=runtime)
    assert runtime.last_report is not first


def test_from_config(clean_env):
    (clean_env / "config.toml").write_text(
        '[solver]\nname = "scs"\nverbose = true\n\n[solver.options]\nmax_iters = 5000\n'
    )
    runtime = SolverRuntime.from_config(ConfigLoader(clean_env / "config.toml"))
    assert runtime.solver == "SCS"
    assert runtime.verbose is True
    assert runtime.solver_options == {"max_iters": 5000}


@pytest.fixture
def inaccurate_solve(monkeypatch):
    """Make every solve finish with optimal_inaccurate and objective 1.5."""
    monkeypatch.setattr(cp.Problem, "solve", lambda self, *args, **kwargs: 1.5)
    monkeypatch.setattr(cp.Problem, "status", property(lambda self: cp.OPTIMAL_INACCURATE))
    monkeypatch.setattr(cp.Problem, "value", property(lambda self: 1.5))


def test_inaccurate_status_accepted_when_allowed(inaccurate_solve):
    warnings = []
    handler_id = logger.add(warnings.append, level="WARNING")
    try:
        with SolverRuntime(accept_inaccurate=True) as runtime:
            report = runtime.solve(build_problem(0, 0, 1, 0, 5, 2).problem)
    finally:
        logger.remove(handler_id)
    assert report.status == cp.OPTIMAL_INACCURATE
    assert report.objective == 1.5
    assert any("inaccurate" in message for message in warnings)


def test_inaccurate_status_rejected_by_default(inaccurate_solve):
    with SolverRuntime() as runtime:
        with pytest.raises(SolverError) as excinfo:
            runtime.solve(build_problem(0, 0, 1, 0, 5, 2).problem)
    assert excinfo.value.status == cp.OPTIMAL_INACCURATE
    assert runtime.last_report.objective is None


def test_cvxpy_solver_error_is_wrapped(monkeypatch, runtime):
    def failing_solve(self, *args, **kwargs):
        raise cp.error.SolverError("solver crashed")

    monkeypatch.setattr(cp.Problem, "solve", failing_solve)
    with pytest.raises(SolverError) as excinfo:
        runtime.solve(build_problem(0, 0, 1, 0, 5, 2).problem)
    assert excinfo.value.status == "solver_error"
    assert isinstance(excinfo.value.__cause__, cp.error.SolverError)
