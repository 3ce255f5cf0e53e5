"""Pension, insurance and workplace leave calculators."""

from __future__ import annotations

from calchub.calculator import (
    annuity_future_value,
    compound_amount,
    percentage_of,
    round_half_up,
)
from calchub.catalog.base import REGISTRY
from calchub.models import InputField

SAFE_WITHDRAWAL_RATE = 0.04
MAX_CARRY_OVER_DAYS = 10


@REGISTRY.register(
    "pension-defined-benefit",
    name="Defined Benefit Pension",
    description="Annual pension from final salary, service and accrual rate",
    category="insurance-pension",
    currency="EUR",
    inputs=[
        InputField("final_salary", "Final/Avg Salary (€)", 0, 1000000, 1000, 60000),
        InputField("years_service", "Years of Service", 0, 60, 1, 30),
        InputField("accrual_rate", "Accrual Rate (%)", 0.1, 5, 0.01, 1.25),
    ],
)
def defined_benefit(
    *, final_salary: float, years_service: float, accrual_rate: float
) -> dict[str, float]:
    annual = final_salary * years_service * accrual_rate / 100
    return {
        "Annual Pension": round_half_up(annual),
        "Monthly Pension": round_half_up(annual / 12),
    }


@REGISTRY.register(
    "pension-defined-contribution",
    name="Defined Contribution Pension",
    description="Projected pot and income from current savings and contributions",
    category="insurance-pension",
    currency="EUR",
    inputs=[
        InputField("pot", "Current Pot (€)", 0, 5000000, 100, 50000),
        InputField("monthly", "Monthly Contribution (€)", 0, 20000, 10, 500),
        InputField("years", "Years to Retirement", 0, 60, 1, 30),
        InputField("annual_return", "Expected Annual Return (%)", 0, 20, 0.1, 5),
    ],
)
def defined_contribution(
    *, pot: float, monthly: float, years: float, annual_return: float
) -> dict[str, float]:
    r = annual_return / 100 / 12
    n = max(0, round_half_up(years * 12))
    future = compound_amount(pot, r, n) + annuity_future_value(monthly, r, n)
    return {
        "Future Value": round_half_up(future),
        "Est. Annual Income (4%)": round_half_up(future * SAFE_WITHDRAWAL_RATE),
    }


@REGISTRY.register(
    "annuity",
    name="Annuity Income",
    description="Income from converting a pension pot at an annuity rate",
    category="insurance-pension",
    currency="EUR",
    inputs=[
        InputField("pot", "Pension Pot (€)", 0, 5000000, 100, 200000),
        InputField("rate", "Annuity Rate (%)", 0.1, 20, 0.1, 5),
    ],
)
def annuity(*, pot: float, rate: float) -> dict[str, float]:
    annual = percentage_of(pot, rate)
    return {"Annual Income": round_half_up(annual), "Monthly Income": round_half_up(annual / 12)}


@REGISTRY.register(
    "life-insurance",
    name="Life Insurance Cover",
    description="Recommended cover from debts, income replacement and assets",
    category="insurance-pension",
    currency="EUR",
    inputs=[
        InputField("debts", "Total Debts", 0, 10000000, 100, 50000),
        InputField("income", "Annual Income", 0, 1000000, 1000, 40000),
        InputField("years", "Years to Replace", 1, 50, 1, 10),
        InputField("assets", "Existing Assets", 0, 10000000, 100, 10000),
    ],
)
def life_insurance(*, debts: float, income: float, years: float, assets: float) -> dict[str, float]:
    cover = debts + income * years - assets
    return {"Recommended Cover": max(0, round_half_up(cover))}


@REGISTRY.register(
    "income-protection",
    name="Income Protection",
    description="Monthly benefit from income protection cover",
    category="insurance-pension",
    currency="EUR",
    inputs=[
        InputField("monthly_income", "Monthly Gross Income", 0, 200000, 100, 3000),
        InputField("replace_pct", "Replacement %", 10, 100, 5, 60),
        InputField("defer_months", "Deferred Months", 0, 12, 1, 3),
    ],
)
def income_protection(
    *, monthly_income: float, replace_pct: float, defer_months: float
) -> dict[str, float]:
    return {
        "Monthly Benefit": round_half_up(percentage_of(monthly_income, replace_pct)),
        "Deferred Months": defer_months,
    }


@REGISTRY.register(
    "annual-leave",
    name="Annual Leave",
    description="Remaining and carry-over leave days",
    category="leave-work",
    inputs=[
        InputField("days_per_year", "Entitled Days per Year", 15, 35, 1, 22),
        InputField("days_used", "Days Used This Year", 0, 35, 1, 12),
    ],
)
def annual_leave(*, days_per_year: float, days_used: float) -> dict[str, float]:
    remaining = days_per_year - days_used
    carry_over = min(remaining, MAX_CARRY_OVER_DAYS)
    return {
        "Days Remaining": remaining,
        "Days to Carry Over": carry_over,
        "Days to Use": remaining - carry_over,
    }


@REGISTRY.register(
    "holiday-pay",
    name="Holiday Pay",
    description="Pay owed for holiday days taken",
    category="leave-work",
    currency="EUR",
    inputs=[
        InputField("hourly_rate", "Hourly Rate (€)", 10, 100, 1, 25),
        InputField("days_used", "Holiday Days Used", 1, 30, 1, 5),
        InputField("hours_per_day", "Hours per Day", 4, 10, 0.5, 8),
    ],
)
def holiday_pay(*, hourly_rate: float, days_used: float, hours_per_day: float) -> dict[str, float]:
    hours = days_used * hours_per_day
    return {"Total Holiday Hours": hours, "Holiday Pay (€)": round_half_up(hours * hourly_rate)}
