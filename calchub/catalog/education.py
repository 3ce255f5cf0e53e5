"""Grade, points and credit calculators."""

from __future__ import annotations

from calchub.calculator import round_half_up
from calchub.catalog.base import REGISTRY
from calchub.models import InputField

# (minimum percent, grade point), highest first
PERCENT_TO_GRADE_POINT = [
    (85, 4.0), (80, 3.7), (75, 3.3), (70, 3.0),
    (65, 2.7), (60, 2.3), (55, 2.0), (50, 1.7),
]
LEAVING_CERT_POINTS = [(90, 100), (80, 88), (70, 77), (60, 66), (50, 46)]
ORDINARY_LEVEL_WEIGHT = 0.7
UCAS_POINTS = [(90, 56), (80, 48), (70, 40), (60, 32), (50, 24)]

GPA_SUBJECTS = 6


def _lookup(table: list[tuple[float, float]], value: float) -> float:
    for threshold, points in table:
        if value >= threshold:
            return points
    return 0


def _gpa_inputs() -> list[InputField]:
    fields = [
        InputField("mode", "Input Mode (1=Grade points, 2=Percent)", 1, 2, 1, 1),
        InputField("subjects", f"Number of Subjects (1-{GPA_SUBJECTS})", 1, GPA_SUBJECTS, 1, 4),
    ]
    defaults = [3.8, 3.5, 3.7, 3.9, 0, 0]
    for i in range(1, GPA_SUBJECTS + 1):
        fields.append(InputField(f"g{i}", f"Grade/Percent {i}", 0, 100, 0.1, defaults[i - 1]))
        fields.append(InputField(f"c{i}", f"Credits {i}", 0, 60, 1, 5))
    return fields


@REGISTRY.register(
    "gpa-calculator",
    name="GPA Calculator",
    description="Credit-weighted GPA from grade points or percentages",
    category="education-student",
    inputs=_gpa_inputs(),
)
def gpa(*, mode: float, subjects: float, **grades: float) -> dict[str, float]:
    quality = 0.0
    credits = 0.0
    for i in range(1, int(round_half_up(subjects)) + 1):
        g = grades[f"g{i}"]
        c = grades[f"c{i}"]
        point = g if round_half_up(mode) == 1 else _lookup(PERCENT_TO_GRADE_POINT, g)
        quality += point * c
        credits += c
    value = round(quality / credits, 3) if credits > 0 else 0
    return {"GPA": value, "Total Credits": credits}


def _leaving_cert_inputs() -> list[InputField]:
    fields = []
    for i, pct in enumerate([85, 80, 75, 70, 65, 60], start=1):
        fields.append(InputField(f"s{i}", f"Subject{i} %", 0, 100, 1, pct))
        fields.append(InputField(f"h{i}", f"Subject{i} Higher? (1=yes,0=no)", 0, 1, 1, 1))
    return fields


@REGISTRY.register(
    "leaving-cert-points",
    name="Leaving Cert Points",
    description="CAO points from six subject percentages and levels",
    category="education-student",
    inputs=_leaving_cert_inputs(),
)
def leaving_cert_points(**values: float) -> dict[str, float]:
    total = 0
    for i in range(1, 7):
        pct = max(0.0, min(100.0, values[f"s{i}"]))
        pts = _lookup(LEAVING_CERT_POINTS, pct)
        total += round_half_up(pts if values[f"h{i}"] else pts * ORDINARY_LEVEL_WEIGHT)
    return {"Total Points (6 best)": total}


@REGISTRY.register(
    "ucas-points",
    name="UCAS Points",
    description="UCAS tariff points from three subject percentages",
    category="education-student",
    inputs=[
        InputField("a1", "Subject1 %", 0, 100, 1, 90),
        InputField("a2", "Subject2 %", 0, 100, 1, 80),
        InputField("a3", "Subject3 %", 0, 100, 1, 70),
    ],
)
def ucas_points(*, a1: float, a2: float, a3: float) -> dict[str, float]:
    return {"UCAS Total": sum(_lookup(UCAS_POINTS, p) for p in (a1, a2, a3))}


@REGISTRY.register(
    "ects-calculator",
    name="ECTS Calculator",
    description="Total ECTS credits from module count",
    category="education-student",
    inputs=[
        InputField("modules_count", "Number of Modules", 1, 60, 1, 8),
        InputField("avg_ects", "Average ECTS per Module", 1, 60, 1, 5),
    ],
)
def ects(*, modules_count: float, avg_ects: float) -> dict[str, float]:
    return {"Total ECTS": modules_count * avg_ects}
