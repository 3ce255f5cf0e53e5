"""Loan, mortgage, savings and property calculators."""

from __future__ import annotations

from calchub.calculator import (
    amortized_payment,
    annuity_future_value,
    compound_amount,
    monthly_rate,
    round_half_up,
    simple_interest,
)
from calchub.catalog.base import REGISTRY
from calchub.models import InputField


@REGISTRY.register(
    "mortgage",
    name="Mortgage EMI",
    description="Monthly instalment, interest and total repayment for a home loan",
    category="mortgage-property",
    currency="INR",
    inputs=[
        InputField("amount", "Property Price", 500000, 20000000, 50000, 3000000, "₹"),
        InputField("rate", "Interest Rate (%)", 5, 15, 0.1, 8.5),
        InputField("years", "Loan Term (Years)", 5, 30, 1, 20),
    ],
)
def mortgage(*, amount: float, rate: float, years: float) -> dict[str, float]:
    n = years * 12
    emi = amortized_payment(amount, monthly_rate(rate), n)
    return {
        "Monthly EMI": round_half_up(emi),
        "Total Interest": round_half_up(emi * n - amount),
        "Total Payment": round_half_up(emi * n),
    }


@REGISTRY.register(
    "loan",
    name="Personal Loan EMI",
    description="Monthly instalment for a fixed-term personal loan",
    category="loan-finance",
    currency="INR",
    inputs=[
        InputField("amount", "Loan Amount", 10000, 5000000, 10000, 500000, "₹"),
        InputField("rate", "Interest Rate (%)", 6, 25, 0.1, 11),
        InputField("months", "Tenure (Months)", 6, 120, 1, 36),
    ],
)
def loan(*, amount: float, rate: float, months: float) -> dict[str, float]:
    emi = amortized_payment(amount, monthly_rate(rate), months)
    return {
        "Monthly EMI": round_half_up(emi),
        "Total Payment": round_half_up(emi * months),
    }


@REGISTRY.register(
    "car-loan",
    name="Car Loan Calculator",
    description="Monthly repayments for car finance",
    category="loan-finance",
    currency="EUR",
    inputs=[
        InputField("amount", "Loan Amount (€)", 1000, 100000, 500, 25000, "€"),
        InputField("rate", "Interest Rate (% per year)", 1, 20, 0.1, 5.5),
        InputField("years", "Loan Term (years)", 1, 10, 1, 5),
    ],
)
def car_loan(*, amount: float, rate: float, years: float) -> dict[str, float]:
    n = years * 12
    payment = amortized_payment(amount, monthly_rate(rate), n)
    total = payment * n
    return {
        "Monthly Payment": round_half_up(payment),
        "Total Payment": round_half_up(total),
        "Total Interest": round_half_up(total - amount),
    }


@REGISTRY.register(
    "car-finance",
    name="Car Finance Calculator",
    description="Compare finance options for vehicles",
    category="loan-finance",
    currency="EUR",
    inputs=[
        InputField("price", "Vehicle Price (€)", 5000, 150000, 1000, 35000),
        InputField("deposit", "Deposit %", 10, 50, 5, 20),
        InputField("rate", "APR (%)", 2, 10, 0.1, 4.9),
        InputField("months", "Months", 12, 84, 6, 60),
    ],
)
def car_finance(*, price: float, deposit: float, rate: float, months: float) -> dict[str, float]:
    dep = round_half_up(price * deposit / 100)
    financed = price - dep
    payment = amortized_payment(financed, monthly_rate(rate), months)
    return {
        "Deposit": dep,
        "Amount to Finance": round_half_up(financed),
        "Monthly Payment": round_half_up(payment),
        "Total Paid": round_half_up(payment * months),
    }


@REGISTRY.register(
    "credit-union-loan",
    name="Credit Union Loan Calculator",
    description="Estimate CU loan repayments",
    category="loan-finance",
    currency="EUR",
    inputs=[
        InputField("amount", "Loan Amount (€)", 1000, 50000, 500, 10000),
        InputField("rate", "Interest Rate (%)", 4, 15, 0.5, 7),
        InputField("months", "Loan Term (Months)", 6, 120, 6, 36),
    ],
)
def credit_union_loan(*, amount: float, rate: float, months: float) -> dict[str, float]:
    emi = amortized_payment(amount, monthly_rate(rate), months)
    return {
        "Monthly Repayment": round_half_up(emi),
        "Total Interest": round_half_up(emi * months - amount),
        "Total Amount": round_half_up(emi * months),
    }


@REGISTRY.register(
    "loan-interest-calculator",
    name="Loan Interest Calculator",
    description="Simple interest calculation for any loan",
    category="loan-finance",
    currency="EUR",
    inputs=[
        InputField("principal", "Principal Amount (€)", 100, 10000000, 100, 50000),
        InputField("rate", "Interest Rate (% p.a.)", 0.1, 25, 0.1, 5.0),
        InputField("years", "Time Period (Years)", 0.25, 50, 0.25, 5),
    ],
)
def loan_interest(*, principal: float, rate: float, years: float) -> dict[str, float]:
    interest = simple_interest(principal, rate, years)
    return {
        "Interest": round_half_up(interest),
        "Total Amount": round_half_up(principal + interest),
    }


@REGISTRY.register(
    "buy-to-let",
    name="Buy-to-Let Mortgage Calculator",
    description="Assess buy-to-let mortgage returns and costs",
    category="mortgage-property",
    currency="EUR",
    inputs=[
        InputField("price", "Property Price (€)", 100000, 2000000, 20000, 500000),
        InputField("rent", "Expected Monthly Rent (€)", 500, 10000, 100, 1500),
        InputField("rate", "Interest Rate (%)", 2, 8, 0.1, 3.8),
        InputField("years", "Loan Term (Years)", 5, 35, 1, 20),
    ],
)
def buy_to_let(*, price: float, rent: float, rate: float, years: float) -> dict[str, float | str]:
    emi = amortized_payment(price, monthly_rate(rate), years * 12)
    roi = (rent * 12 - emi * 12) / price * 100
    return {
        "Monthly Mortgage": round_half_up(emi),
        "Monthly Rent": round_half_up(rent),
        "ROI %": f"{roi:.2f}",
    }


@REGISTRY.register(
    "mortgage-switch",
    name="Mortgage Switch Calculator",
    description="Compare mortgage rates when switching",
    category="mortgage-property",
    currency="EUR",
    inputs=[
        InputField("balance", "Current Balance (€)", 50000, 3000000, 10000, 400000),
        InputField("current_rate", "Current Rate (%)", 1, 8, 0.1, 5.0),
        InputField("new_rate", "New Rate (%)", 1, 8, 0.1, 3.5),
        InputField("years", "Remaining Years", 1, 35, 1, 20),
    ],
)
def mortgage_switch(
    *, balance: float, current_rate: float, new_rate: float, years: float
) -> dict[str, float]:
    n = years * 12
    current = amortized_payment(balance, monthly_rate(current_rate), n)
    new = amortized_payment(balance, monthly_rate(new_rate), n)
    return {
        "Current Monthly": round_half_up(current),
        "New Monthly": round_half_up(new),
        "Total Savings": round_half_up((current - new) * n),
    }


@REGISTRY.register(
    "mortgage-overpayment",
    name="Mortgage Overpayment",
    description="Calculate mortgage cost with extra monthly payments",
    category="mortgage-property",
    currency="EUR",
    inputs=[
        InputField("balance", "Current Mortgage Balance (€)", 50000, 5000000, 10000, 400000),
        InputField("rate", "Interest Rate (%)", 1.5, 8, 0.1, 3.5),
        InputField("years", "Remaining Mortgage (Years)", 1, 30, 1, 20),
        InputField("overpay", "Extra Monthly Payment (€)", 0, 5000, 100, 200),
    ],
)
def mortgage_overpayment(
    *, balance: float, rate: float, years: float, overpay: float
) -> dict[str, float]:
    r = monthly_rate(rate)
    monthly = amortized_payment(balance, r, years * 12)
    # Months needed to clear the balance paying monthly + overpay.
    months = 0
    remaining = balance
    while remaining > 0 and months < years * 12:
        remaining = remaining * (1 + r) - (monthly + overpay)
        months += 1
    paid = (monthly + overpay) * months + min(0.0, remaining)
    return {
        "Standard Monthly": round_half_up(monthly),
        "With Extra": round_half_up(monthly + overpay),
        "Months Saved": years * 12 - months,
        "Interest Saved": round_half_up(monthly * years * 12 - paid),
    }


@REGISTRY.register(
    "equity-release",
    name="Equity Release Calculator",
    description="Estimate equity release options",
    category="mortgage-property",
    currency="EUR",
    inputs=[
        InputField("property_value", "Property Value (€)", 100000, 5000000, 50000, 500000),
        InputField("age", "Your Age", 55, 95, 1, 75),
        InputField("ltv", "LTV Percentage (%)", 10, 50, 5, 25),
    ],
)
def equity_release(*, property_value: float, age: float, ltv: float) -> dict[str, float]:
    lump_sum = property_value * ltv / 100
    adjusted = lump_sum * (1 - (age - 60) * 0.02)
    return {
        "Maximum Available": round_half_up(max(0.0, adjusted)),
        "Property Value": property_value,
    }


@REGISTRY.register(
    "stamp-duty",
    name="Stamp Duty",
    description="Stamp duty on a property purchase by buyer type",
    category="mortgage-property",
    currency="EUR",
    inputs=[
        InputField("price", "Property Price (€)", 100000, 2000000, 10000, 400000),
        InputField(
            "buyer_type",
            "Buyer Type (1=First-Time, 2=Residential, 3=Non-Residential)",
            1, 3, 1, 1,
        ),
    ],
)
def stamp_duty(*, price: float, buyer_type: float) -> dict[str, float]:
    if buyer_type == 1:
        duty = 0.0 if price <= 500000 else (price - 500000) * 0.10
    elif buyer_type == 2:
        duty = price * 0.01 if price <= 1000000 else 10000 + (price - 1000000) * 0.02
    else:
        duty = price * 0.025
    return {"Stamp Duty": round_half_up(duty), "Total Cost": round_half_up(price + duty)}


@REGISTRY.register(
    "cost-of-building-house",
    name="Cost of Building a House",
    description="Build cost with contingency and professional fees",
    category="mortgage-property",
    currency="EUR",
    inputs=[
        InputField("area", "Total Floor Area (m²)", 100, 500, 10, 200),
        InputField("build_rate", "Build Rate (€/m²)", 1000, 3500, 100, 2000),
    ],
)
def cost_of_building(*, area: float, build_rate: float) -> dict[str, float]:
    base_cost = area * build_rate
    contingency = round_half_up(base_cost * 0.15)
    fees = round_half_up(base_cost * 0.08)
    return {
        "Base Build Cost": round_half_up(base_cost),
        "Contingency (15%)": contingency,
        "Professional Fees (8%)": fees,
        "Total": round_half_up(base_cost + contingency + fees),
    }


@REGISTRY.register(
    "compound-interest",
    name="Compound Interest",
    description="Growth of a lump sum with periodic compounding",
    category="loan-finance",
    currency="EUR",
    inputs=[
        InputField("principal", "Principal Amount (€)", 1000, 1000000, 5000, 10000),
        InputField("rate", "Annual Rate (%)", 0.5, 20, 0.5, 5),
        InputField("years", "Time Period (Years)", 1, 50, 1, 10),
        InputField("frequency", "Compounding (1-12)", 1, 12, 1, 12),
    ],
)
def compound_interest(
    *, principal: float, rate: float, years: float, frequency: float
) -> dict[str, float]:
    amount = compound_amount(principal, rate / 100 / frequency, frequency * years)
    return {
        "Final Amount": round_half_up(amount),
        "Interest Earned": round_half_up(amount - principal),
    }


@REGISTRY.register(
    "investment-calculator",
    name="Investment Calculator",
    description="Lump sum plus monthly investments over time",
    category="loan-finance",
    currency="EUR",
    inputs=[
        InputField("initial", "Initial Investment (€)", 5000, 500000, 5000, 50000),
        InputField("monthly", "Monthly Investment (€)", 100, 10000, 100, 500),
        InputField("rate", "Annual Return (%)", 2, 20, 1, 8),
        InputField("years", "Investment Period (Years)", 1, 50, 1, 10),
    ],
)
def investment(*, initial: float, monthly: float, rate: float, years: float) -> dict[str, float]:
    months = years * 12
    future = compound_amount(initial, rate / 100, years) + annuity_future_value(
        monthly, monthly_rate(rate), months
    )
    invested = initial + monthly * months
    return {
        "Future Value": round_half_up(future),
        "Total Invested": round_half_up(invested),
        "Total Returns": round_half_up(future - invested),
    }


@REGISTRY.register(
    "savings-calculator",
    name="Savings Calculator",
    description="Regular monthly savings with interest",
    category="loan-finance",
    currency="EUR",
    inputs=[
        InputField("monthly", "Monthly Savings (€)", 50, 10000, 50, 500),
        InputField("rate", "Interest Rate (% p.a.)", 0.5, 5, 0.25, 2),
        InputField("years", "Time Period (Years)", 1, 30, 1, 5),
    ],
)
def savings(*, monthly: float, rate: float, years: float) -> dict[str, float]:
    months = years * 12
    fv = annuity_future_value(monthly, monthly_rate(rate), months)
    contributed = monthly * months
    return {
        "Total Saved": round_half_up(fv),
        "Contributed": round_half_up(contributed),
        "Interest Earned": round_half_up(fv - contributed),
    }
