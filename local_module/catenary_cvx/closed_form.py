import math

import numpy as np
from scipy.optimize import brentq

from catenary_cvx.errors import InvalidInputError
from catenary_cvx.model import CatenarySolution


class ClosedFormCatenary:
    """
    Represents the analytic catenary y = a * cosh((x - b) / a) + c.
    Provides fitting through two endpoints for a given length, geometric
    calculations and summaries.
    """

    INITIAL_BRACKET: float = 1.0
    MAX_BRACKET: float = 700.0  # cosh overflows a float shortly after this
    DEFAULT_PRECISION: float = 1e-12

    def __init__(self, a: float, b: float, c: float, x_start: float, x_end: float) -> None:
        """
        Initialise the catenary with its parameters and horizontal extent.

        Args:
            a: Scale parameter (horizontal tension over weight per unit length).
            b: Horizontal position of the vertex.
            c: Vertical offset, so the vertex sits at height a + c.
            x_start: Left end of the curve.
            x_end: Right end of the curve.
        """
        self.a = float(a)
        self.b = float(b)
        self.c = float(c)
        self.x_start = float(x_start)
        self.x_end = float(x_end)

    @classmethod
    def through(
        cls,
        beginx: float,
        beginy: float,
        endx: float,
        endy: float,
        length: float,
        precision: float = None,
    ) -> "ClosedFormCatenary":
        """
        Fit the catenary of the given length hanging between two endpoints.

        Args:
            beginx, beginy: One endpoint.
            endx, endy: The other endpoint; the order of the two does not matter.
            length: Arc length, strictly longer than the endpoint distance.
            precision: Tolerance for the root finder.

        Returns:
            The fitted catenary.
        """
        if precision is None:
            precision = cls.DEFAULT_PRECISION
        if endx < beginx:
            beginx, beginy, endx, endy = endx, endy, beginx, beginy

        dx = endx - beginx
        dy = endy - beginy
        if dx <= 0:
            raise InvalidInputError("Closed form needs endpoints at different x positions")
        if length <= math.hypot(dx, dy):
            raise InvalidInputError(
                f"Closed form needs a length longer than the endpoint distance, got {length}"
            )

        # sqrt(L^2 - dy^2) = 2a sinh(dx / 2a); with u = dx / 2a this is sinh(u) / u = ratio
        ratio = math.sqrt(length**2 - dy**2) / dx

        def residual(u: float) -> float:
            return math.sinh(u) / u - ratio

        upper = cls.INITIAL_BRACKET
        while residual(upper) < 0:
            upper *= 2
            if upper > cls.MAX_BRACKET:
                raise InvalidInputError(
                    f"Chain of length {length} is too slack for a closed-form fit"
                )

        u = brentq(residual, 1e-12, upper, xtol=precision)
        a = dx / (2 * u)
        b = (beginx + endx) / 2 - a * math.atanh(dy / length)
        c = beginy - a * math.cosh((beginx - b) / a)
        return cls(a, b, c, beginx, endx)

    def y(self, x):
        """Return the y-coordinate(s) of the catenary at position(s) x."""
        if np.ndim(x):
            return self.a * np.cosh((np.asarray(x, dtype=float) - self.b) / self.a) + self.c
        return self.a * math.cosh((x - self.b) / self.a) + self.c

    def sample(self, num_points: int = 200) -> tuple[np.ndarray, np.ndarray]:
        """Evenly spaced points along the curve, endpoints included."""
        xs = np.linspace(self.x_start, self.x_end, num_points)
        return xs, self.y(xs)

    def arc_length(self) -> float:
        """Length of the curve between its endpoints."""
        a, b = self.a, self.b
        return a * (math.sinh((self.x_end - b) / a) - math.sinh((self.x_start - b) / a))

    def lowest_point(self) -> tuple[float, float]:
        """The vertex if it lies between the endpoints, otherwise the lower endpoint."""
        if self.x_start <= self.b <= self.x_end:
            return self.b, self.a + self.c
        return min(
            ((self.x_start, self.y(self.x_start)), (self.x_end, self.y(self.x_end))),
            key=lambda p: p[1],
        )

    def summary(self) -> str:
        """Return a summary of the catenary's geometric properties as a string."""
        low_x, low_y = self.lowest_point()
        return (
            f"Catenary from x={self.x_start} to x={self.x_end}:\n"
            f"  Parameters (a, b, c): ({self.a:.7f}, {self.b:.7f}, {self.c:.7f})\n"
            f"  Arc length: {self.arc_length():.7f}\n"
            f"  Lowest point: ({low_x:.7f}, {low_y:.7f})"
        )

    def describe(self) -> str:
        """
        Return a Markdown-formatted summary of the catenary's parameters and geometric properties.
        """
        low_x, low_y = self.lowest_point()
        return (
            f"**Closed-form catenary:**\n\n"
            f"- a = `{self.a:.6f}`\n"
            f"- b = `{self.b:.6f}`\n"
            f"- c = `{self.c:.6f}`\n\n"
            f"**Geometric properties:**\n\n"
            f"- Arc length: `{self.arc_length():.6f} m`\n"
            f"- Lowest point: `({low_x:.6f}, {low_y:.6f}) m`\n"
        )


def compare_with_closed_form(
    solution: CatenarySolution, catenary: ClosedFormCatenary
) -> float:
    """Largest vertical gap between the solved nodes and the analytic curve."""
    x, y = solution
    return float(np.max(np.abs(np.asarray(y) - catenary.y(np.asarray(x)))))
