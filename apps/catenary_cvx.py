import marimo

__generated_with = "0.13.15"
app = marimo.App(width="medium")


@app.cell
def _(mo):
    mo.md(
        r"""
    ## The Hanging Chain as a Convex Program

    A chain of length $L$ hangs between $(0, 0)$ and $(1, 0)$. Split it into $N$ nodes,
    let each of the $N - 1$ segments be at most $h = L / (N - 1)$ long, and minimise the
    sum of the node heights. The result is compared against the closed-form catenary
    $y = a \cosh((x - b) / a) + c$.

    ---
    """
    )
    return


@app.cell
def _():
    import marimo as mo

    return (mo,)


@app.cell
def _():
    from catenary_cvx import (
        CatenaryError,
        ClosedFormCatenary,
        SolverRuntime,
        compare_with_closed_form,
        solve_catenary,
    )
    from catenary_cvx.plotting import plot_solutions

    return (
        CatenaryError,
        ClosedFormCatenary,
        SolverRuntime,
        compare_with_closed_form,
        plot_solutions,
        solve_catenary,
    )


@app.cell
def _():
    # --- Constants for the sliders ---

    MIN_NODES = 3  # Fewer nodes than this is just a straight line or a "V"
    MAX_NODES = 201  # Beyond this the model build starts to dominate the wait
    MIN_LENGTH = 1.05  # Must exceed the endpoint distance of 1 m for a closed form
    MAX_LENGTH = 4.0
    return MAX_LENGTH, MAX_NODES, MIN_LENGTH, MIN_NODES


@app.cell
def _(MAX_LENGTH, MAX_NODES, MIN_LENGTH, MIN_NODES, mo):
    # --- UI controls ---

    nodes = mo.ui.slider(
        start=MIN_NODES,
        stop=MAX_NODES,
        value=51,
        step=2,
        label="Nodes N",
    )
    length = mo.ui.slider(
        start=MIN_LENGTH,
        stop=MAX_LENGTH,
        value=2.0,
        step=0.05,
        label="Chain length L (m)",
    )
    return length, nodes


@app.cell
def _(length, mo, nodes):
    # --- Show controls stacked ---

    mo.hstack([nodes, length])
    return


@app.cell
def _(SolverRuntime):
    runtime = SolverRuntime().initialize()
    return (runtime,)


@app.cell
def _(
    CatenaryError,
    ClosedFormCatenary,
    length,
    nodes,
    runtime,
    solve_catenary,
):
    # --- Try to solve the convex program ---

    solution = None
    error = None
    closed_form = ClosedFormCatenary.through(0, 0, 1, 0, length.value)
    try:
        solution = solve_catenary(0, 0, 1, 0, nodes.value, length.value, runtime=runtime)
    except CatenaryError as e:
        error = str(e)
    return closed_form, error, solution


@app.cell
def _(closed_form, error, mo, nodes, plot_solutions, solution):
    mo.md(f"**Error occurred:** {error}") if solution is None else plot_solutions(
        {f"N={nodes.value}": solution}, closed_form=closed_form
    )
    return


@app.cell
def _(closed_form, compare_with_closed_form, mo, solution):
    _deviation = (
        ""
        if solution is None
        else f"- Max deviation of the nodes from the closed form: `{compare_with_closed_form(solution, closed_form):.6f} m`\n"
    )
    mo.md(
        closed_form.describe()
        + _deviation
        + "\nThe discrete answer is not guaranteed to approach the closed form as N grows."
    )
    return


if __name__ == "__main__":
    app.run()
