from typing import Mapping, Optional

import plotly.graph_objects as go

from catenary_cvx.closed_form import ClosedFormCatenary
from catenary_cvx.model import CatenarySolution


def plot_solutions(
    solutions: Mapping[str, CatenarySolution],
    closed_form: Optional[ClosedFormCatenary] = None,
    num_points: int = 200,
    height: int = 600,
    show_endpoints: bool = True,
) -> go.Figure:
    """
    Plot solved catenaries, optionally against the analytic curve, using Plotly.

    Args:
        solutions: Solved node coordinates keyed by trace label.
        closed_form: Analytic catenary to draw underneath the solutions.
        num_points: Number of points to sample along the analytic curve.
        height: Height of the plot in pixels.
        show_endpoints: Whether to show the endpoints as red markers.

    Returns:
        Plotly Figure object.
    """
    fig = go.Figure()

    if closed_form is not None:
        xs, ys = closed_form.sample(num_points)
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=ys,
                mode="lines",
                name="Closed form",
                line=dict(color="black", dash="dash"),
            )
        )

    for label, (x, y) in solutions.items():
        fig.add_trace(go.Scatter(x=x, y=y, mode="lines+markers", name=label, marker=dict(size=4)))

    if show_endpoints and solutions:
        x, y = next(iter(solutions.values()))
        fig.add_trace(
            go.Scatter(
                x=[x[0], x[-1]],
                y=[y[0], y[-1]],
                mode="markers",
                marker=dict(size=10, color="red"),
                name="Endpoints",
            )
        )

    fig.update_layout(
        title="Catenary: convex program vs closed form",
        xaxis_title="Horizontal Distance (m)",
        yaxis_title="Vertical Position (m)",
        height=height,
        yaxis=dict(scaleanchor="x", scaleratio=1),
    )
    return fig
