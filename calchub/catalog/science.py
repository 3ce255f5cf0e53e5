"""Mathematics and science calculators."""

from __future__ import annotations

import math

from calchub.catalog.base import REGISTRY
from calchub.models import InputField


@REGISTRY.register(
    "critical-points",
    name="Critical Points",
    description="Vertex of a quadratic ax² + bx + c",
    category="math-science",
    inputs=[
        InputField("a", "Coefficient a", -100, 100, 0.1, 2),
        InputField("b", "Coefficient b", -100, 100, 0.1, -4),
        InputField("c", "Coefficient c", -100, 100, 0.1, 1),
    ],
)
def critical_points(*, a: float, b: float, c: float) -> dict[str, float | str]:
    if a == 0:
        return {"Critical X": 0, "Type": "None (linear)"}
    x = -b / (2 * a)
    y = a * x * x + b * x + c
    return {
        "Critical X": round(x, 4),
        "Y Value": round(y, 4),
        "Type": "Minimum" if a > 0 else "Maximum",
    }


@REGISTRY.register(
    "completing-the-square",
    name="Completing the Square",
    description="Vertex form a(x-h)² + k of a quadratic",
    category="math-science",
    inputs=[
        InputField("a", "Coefficient a", -100, 100, 0.1, 1),
        InputField("b", "Coefficient b", -100, 100, 0.1, 6),
        InputField("c", "Coefficient c", -100, 100, 0.1, 5),
    ],
)
def completing_the_square(*, a: float, b: float, c: float) -> dict[str, float | str]:
    if a == 0:
        return {"Form": "not a quadratic (a = 0)"}
    h = -b / (2 * a)
    k = c - b * b / (4 * a)
    return {
        "h (vertex x)": round(h, 4),
        "k (vertex y)": round(k, 4),
        "Form": f"{a:g}(x-{h:.2f})²+{k:.2f}",
    }


@REGISTRY.register(
    "simpsons-rule",
    name="Simpson's Rule",
    description="Approximate the integral of sin(x) with Simpson's rule",
    category="math-science",
    inputs=[
        InputField("a", "Lower Limit (a)", -10, 10, 0.5, 0),
        InputField("b", "Upper Limit (b)", -10, 10, 0.5, 2),
        InputField("n", "Number of Intervals (even)", 2, 100, 2, 4),
    ],
)
def simpsons_rule(*, a: float, b: float, n: float) -> dict[str, float]:
    intervals = max(2, int(n) + int(n) % 2)
    dx = (b - a) / intervals
    total = 0.0
    for i in range(intervals + 1):
        fx = math.sin(a + i * dx)
        if i in (0, intervals):
            total += fx
        elif i % 2 == 1:
            total += 4 * fx
        else:
            total += 2 * fx
    return {"Approximate Integral": round(dx / 3 * total, 4), "Interval Width": round(dx, 4)}


@REGISTRY.register(
    "standard-deviation",
    name="Standard Deviation",
    description="Population and sample standard deviation of five values",
    category="math-science",
    inputs=[
        InputField(f"x{i}", f"Data Point {i}", -10000, 10000, 1, 10 * i)
        for i in range(1, 6)
    ],
)
def standard_deviation(**points: float) -> dict[str, float]:
    data = list(points.values())
    mean = sum(data) / len(data)
    squares = sum((x - mean) ** 2 for x in data)
    return {
        "Population σ": round(math.sqrt(squares / len(data)), 4),
        "Sample s": round(math.sqrt(squares / (len(data) - 1)), 4),
        "Mean": round(mean, 4),
    }


@REGISTRY.register(
    "binomial-expansion",
    name="Binomial Expansion",
    description="(a+b)^n with first, last and middle terms",
    category="math-science",
    inputs=[
        InputField("a", "Term a", -100, 100, 1, 2),
        InputField("b", "Term b", -100, 100, 1, 3),
        InputField("n", "Power n", 1, 10, 1, 3),
    ],
)
def binomial_expansion(*, a: float, b: float, n: float) -> dict[str, float]:
    power = int(n)
    result = sum(math.comb(power, k) * a ** (power - k) * b ** k for k in range(power + 1))
    first = a ** power
    last = b ** power
    return {
        "(a+b)^n": result,
        "First Term (a^n)": first,
        "Last Term (b^n)": last,
        "Middle Terms": round(result - first - last, 4),
    }


@REGISTRY.register(
    "taylor-series",
    name="Taylor Series of e^x",
    description="Truncated Taylor expansion of e^x about a point",
    category="math-science",
    inputs=[
        InputField("x", "x Value", -10, 10, 0.5, 1),
        InputField("a", "Center Point (a)", -10, 10, 0.5, 0),
        InputField("terms", "Number of Terms", 1, 10, 1, 4),
    ],
)
def taylor_series(*, x: float, a: float, terms: float) -> dict[str, float]:
    # Every derivative of e^x at a is e^a.
    approx = sum(
        math.exp(a) / math.factorial(k) * (x - a) ** k for k in range(int(terms))
    )
    actual = math.exp(x)
    return {
        "Taylor Approximation": round(approx, 6),
        "Actual e^x": round(actual, 6),
        "Error": round(abs(approx - actual), 6),
    }


@REGISTRY.register(
    "titration",
    name="Titration",
    description="Unknown concentration from a titration",
    category="math-science",
    inputs=[
        InputField("ca", "Known Concentration (mol/L)", 0.001, 10, 0.001, 0.1),
        InputField("va", "Volume of Known (mL)", 1, 1000, 1, 25),
        InputField("vb", "Volume of Unknown (mL)", 1, 1000, 1, 20),
        InputField("ratio", "Mole Ratio (nA/nB)", 1, 4, 0.5, 1),
    ],
)
def titration(*, ca: float, va: float, vb: float, ratio: float) -> dict[str, float]:
    cb = ca * va * ratio / vb
    return {
        "Unknown Concentration": round(cb, 4),
        "Moles A": round(ca * va / 1000, 6),
        "Moles B": round(cb * vb / 1000, 6),
    }
