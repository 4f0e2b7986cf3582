import math
import sys
from pathlib import Path

import fire
from loguru import logger

from catenary_cvx.closed_form import ClosedFormCatenary, compare_with_closed_form
from catenary_cvx.config import ConfigLoader
from catenary_cvx.errors import CatenaryError
from catenary_cvx.model import solve_catenary
from catenary_cvx.plotting import plot_solutions
from catenary_cvx.runtime import SolverRuntime


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def solve(
    beginx: float = None,
    beginy: float = None,
    endx: float = None,
    endy: float = None,
    nodes: int = None,
    length: float = None,
    config_path: str = "config.toml",
    plot: str = None,
    verbose: bool = False,
) -> None:
    """
    Solve the discretised catenary and report how far it is from the closed form.

    Args:
        beginx (float, optional): x of the first endpoint (default from config).
        beginy (float, optional): y of the first endpoint (default from config).
        endx (float, optional): x of the last endpoint (default from config).
        endy (float, optional): y of the last endpoint (default from config).
        nodes (int, optional): Number of discretisation nodes (default from config).
        length (float, optional): Chain length (default from config).
        config_path (str, optional): Path to the config.toml file.
        plot (str, optional): Write an HTML plot of the solution to this path.
        verbose (bool, optional): Log at DEBUG level.
    """
    _setup_logging(verbose)
    try:
        config = ConfigLoader(Path(config_path))

        begin = config.get("model", "begin")
        end = config.get("model", "end")
        beginx = begin[0] if beginx is None else beginx
        beginy = begin[1] if beginy is None else beginy
        endx = end[0] if endx is None else endx
        endy = end[1] if endy is None else endy
        nodes = config.get("model", "nodes") if nodes is None else nodes
        length = config.get("model", "length") if length is None else length

        with SolverRuntime.from_config(config) as runtime:
            solution = solve_catenary(
                beginx,
                beginy,
                endx,
                endy,
                nodes,
                length,
                runtime=runtime,
                sparse_operator=config.get("model", "sparse_operator", False),
            )
    except CatenaryError as e:
        logger.error(str(e))
        sys.exit(1)

    closed_form = None
    if endx != beginx and length > math.hypot(endx - beginx, endy - beginy):
        closed_form = ClosedFormCatenary.through(beginx, beginy, endx, endy, length)
        print(closed_form.summary())
        print(f"Max deviation from closed form: {compare_with_closed_form(solution, closed_form):.6g}")

    if plot:
        fig = plot_solutions(
            {f"N={nodes}": solution},
            closed_form=closed_form,
            num_points=config.get("plot", "num_points", 200),
            height=config.get("plot", "height", 600),
        )
        fig.write_html(plot)
        logger.success(f"Wrote plot to {plot}")


def compare(
    config_path: str = "config.toml", plot: str = None, verbose: bool = False
) -> None:
    """
    Solve (0, 0) -> (1, 0) with L = 2 at N = 51 and N = 101 and compare both
    against the closed form.

    Args:
        config_path (str, optional): Path to the config.toml file.
        plot (str, optional): Write an HTML plot of both solutions to this path.
        verbose (bool, optional): Log at DEBUG level.
    """
    _setup_logging(verbose)
    closed_form = ClosedFormCatenary.through(0, 0, 1, 0, 2)

    solutions = {}
    try:
        config = ConfigLoader(Path(config_path))
        with SolverRuntime.from_config(config) as runtime:
            for nodes in (51, 101):
                solutions[f"N={nodes}"] = solve_catenary(0, 0, 1, 0, nodes, 2, runtime=runtime)
    except CatenaryError as e:
        logger.error(str(e))
        sys.exit(1)

    for label, solution in solutions.items():
        print(f"{label}: max deviation from closed form {compare_with_closed_form(solution, closed_form):.6g}")

    if plot:
        plot_solutions(solutions, closed_form=closed_form).write_html(plot)
        logger.success(f"Wrote plot to {plot}")


def main() -> None:
    fire.Fire({"solve": solve, "compare": compare})


if __name__ == "__main__":
    main()
