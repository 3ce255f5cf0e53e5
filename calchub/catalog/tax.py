"""Tax and salary calculators."""

from __future__ import annotations

from calchub.calculator import banded_charge, percentage_of, round_half_up
from calchub.catalog.base import REGISTRY
from calchub.models import InputField

# Irish personal allowance used by the quick tax estimate.
STANDARD_ALLOWANCE = 12570


@REGISTRY.register(
    "vat",
    name="VAT Calculator",
    description="VAT amount and gross price for a net amount",
    category="tax-salary",
    currency="USD",
    inputs=[
        InputField("amount", "Net Amount", 0, 1000000, 100, 10000),
        InputField("rate", "VAT Rate (%)", 0, 30, 0.5, 20),
    ],
)
def vat(*, amount: float, rate: float) -> dict[str, float]:
    tax = percentage_of(amount, rate)
    return {"VAT Amount": round_half_up(tax), "Total Price": round_half_up(amount + tax)}


@REGISTRY.register(
    "tax-calculator",
    name="Tax Calculator",
    description="Estimate income tax for Ireland",
    category="tax-salary",
    currency="EUR",
    inputs=[InputField("gross", "Gross Income (Annual €)", 0, 500000, 5000, 50000)],
)
def tax_calculator(*, gross: float) -> dict[str, float]:
    taxable = max(0.0, gross - STANDARD_ALLOWANCE)
    tax = min(taxable * 0.20, taxable)
    return {"Income Tax": round_half_up(tax), "Net Income": round_half_up(gross - tax)}


@REGISTRY.register(
    "salary-deductions",
    name="Salary Deductions",
    description="Calculate statutory and other deductions",
    category="tax-salary",
    currency="EUR",
    inputs=[InputField("gross", "Gross Salary (€)", 0, 200000, 1000, 40000)],
)
def salary_deductions(*, gross: float) -> dict[str, float]:
    tax = round_half_up(gross * 0.205)
    prsi = round_half_up(gross * 0.0875)
    usc = round_half_up(gross * 0.045)
    return {
        "Income Tax": tax,
        "PRSI": prsi,
        "USC": usc,
        "Total Deductions": tax + prsi + usc,
    }


@REGISTRY.register(
    "take-home-pay",
    name="Take-home Pay",
    description="Estimate net pay after taxes and deductions",
    category="tax-salary",
    currency="EUR",
    inputs=[InputField("gross", "Gross Annual (€)", 0, 300000, 5000, 50000)],
)
def take_home_pay(*, gross: float) -> dict[str, float]:
    deductions = round_half_up(gross * 0.335)
    net = gross - deductions
    return {
        "Deductions": deductions,
        "Net Annual Pay": round_half_up(net),
        "Monthly Net": round_half_up(net / 12),
    }


@REGISTRY.register(
    "income-tax",
    name="Income Tax (Standard)",
    description="Calculate tax due across two bands with credits",
    category="tax-salary",
    currency="EUR",
    inputs=[
        InputField("gross_annual", "Gross Annual Income (€)", 0, 5000000, 100, 50000),
        InputField("pension_contrib", "Pension Contributions (€)", 0, 500000, 100, 0),
        InputField("band1_limit", "Band 1 Limit (€)", 0, 1000000, 100, 36800),
        InputField("rate1", "Rate 1 (%)", 0, 100, 0.1, 20),
        InputField("rate2", "Rate 2 (%)", 0, 100, 0.1, 40),
        InputField("tax_credits", "Tax Credits (€)", 0, 50000, 10, 3300),
    ],
)
def income_tax(
    *,
    gross_annual: float,
    pension_contrib: float,
    band1_limit: float,
    rate1: float,
    rate2: float,
    tax_credits: float,
) -> dict[str, float]:
    taxable = max(0.0, gross_annual - pension_contrib)
    due = banded_charge(taxable, [(band1_limit, rate1)], rate2) - tax_credits
    return {"Taxable Income": round_half_up(taxable), "Tax Due": round_half_up(max(0.0, due))}


@REGISTRY.register(
    "usc-calculator",
    name="USC Calculator",
    description="Calculate Universal Social Charge across bands",
    category="tax-salary",
    currency="EUR",
    inputs=[
        InputField("gross_income", "Gross Income (€)", 0, 10000000, 100, 50000),
        InputField("band1_limit", "USC Band1 Limit (€)", 0, 1000000, 100, 12012),
        InputField("rate1", "USC Rate1 (%)", 0, 100, 0.01, 0.5),
        InputField("band2_limit", "USC Band2 Limit (€)", 0, 1000000, 100, 21295),
        InputField("rate2", "USC Rate2 (%)", 0, 100, 0.01, 2),
        InputField("band3_limit", "USC Band3 Limit (€)", 0, 1000000, 100, 70044),
        InputField("rate3", "USC Rate3 (%)", 0, 100, 0.01, 4),
        InputField("rate4", "USC Rate4 (%)", 0, 100, 0.01, 8),
    ],
)
def usc(
    *,
    gross_income: float,
    band1_limit: float,
    rate1: float,
    band2_limit: float,
    rate2: float,
    band3_limit: float,
    rate3: float,
    rate4: float,
) -> dict[str, float]:
    bands = [
        (band1_limit, rate1),
        (band2_limit - band1_limit, rate2),
        (band3_limit - band2_limit, rate3),
    ]
    return {"Total USC": round_half_up(banded_charge(gross_income, bands, rate4))}


@REGISTRY.register(
    "prsi-calculator",
    name="PRSI Calculator",
    description="Weekly PRSI estimate using rate and limits",
    category="tax-salary",
    currency="EUR",
    inputs=[
        InputField("gross_weekly", "Gross Weekly Earnings (€)", 0, 10000, 1, 600),
        InputField("prsi_rate", "PRSI Rate (%)", 0, 100, 0.1, 4),
        InputField("lower_limit", "Lower Weekly Limit (€)", 0, 10000, 1, 0),
        InputField("upper_limit", "Upper Weekly Limit (€)", 0, 100000, 1, 10000),
    ],
)
def prsi(
    *, gross_weekly: float, prsi_rate: float, lower_limit: float, upper_limit: float
) -> dict[str, float]:
    earnings = min(max(gross_weekly, lower_limit), upper_limit)
    return {
        "PRSI Weekly": round_half_up(percentage_of(earnings, prsi_rate)),
        "Earnings used": round_half_up(earnings),
    }


@REGISTRY.register(
    "capital-gains-tax",
    name="Capital Gains Tax (CGT)",
    description="Calculate CGT from sale/purchase and allowable costs",
    category="tax-salary",
    currency="EUR",
    inputs=[
        InputField("sale_price", "Sale Price (€)", 0, 10000000, 100, 200000),
        InputField("purchase_price", "Purchase Price (€)", 0, 10000000, 100, 100000),
        InputField("allowable_costs", "Allowable Costs (€)", 0, 1000000, 100, 20000),
        InputField("annual_exemption", "Annual Exemption (€)", 0, 50000, 100, 12700),
        InputField("cgt_rate", "CGT Rate (%)", 0, 100, 0.1, 33),
    ],
)
def capital_gains_tax(
    *,
    sale_price: float,
    purchase_price: float,
    allowable_costs: float,
    annual_exemption: float,
    cgt_rate: float,
) -> dict[str, float]:
    gain = max(0.0, sale_price - purchase_price - allowable_costs - annual_exemption)
    return {
        "Chargeable Gain": round_half_up(gain),
        "CGT Due": round_half_up(percentage_of(gain, cgt_rate)),
    }


@REGISTRY.register(
    "dividend-tax-ireland",
    name="Dividend Tax (Ireland)",
    description="Estimate tax on dividend income",
    category="tax-salary",
    currency="EUR",
    inputs=[
        InputField("dividend", "Dividend Amount (€)", 0, 1000000, 10, 1000),
        InputField("other_income", "Other Income (€)", 0, 5000000, 100, 30000),
        InputField("is_dirt", "Is DIRT applicable (1=yes,0=no)", 0, 1, 1, 0),
        InputField("dirt_rate", "DIRT Rate (%)", 0, 50, 0.1, 25),
    ],
)
def dividend_tax(
    *, dividend: float, other_income: float, is_dirt: float, dirt_rate: float
) -> dict[str, float]:
    tax = percentage_of(dividend, dirt_rate) if is_dirt == 1 else dividend * 0.33
    return {
        "Dividend Tax": round_half_up(tax),
        "Net Dividend": round_half_up(dividend - tax),
        "Total Taxable (est)": round_half_up(other_income + dividend),
    }


@REGISTRY.register(
    "tax-calculator-denmark",
    name="Tax Calculator (Denmark)",
    description="Simple Denmark tax estimator",
    category="tax-salary",
    currency="EUR",
    inputs=[InputField("gross", "Gross Income (€)", 0, 500000, 500, 50000)],
)
def tax_denmark(*, gross: float) -> dict[str, float]:
    tax = round_half_up(gross * 0.37)
    return {"Estimated Tax": tax, "Net Income": round_half_up(gross - tax)}


@REGISTRY.register(
    "ebitda",
    name="EBITDA Calculator",
    description="Calculate EBITDA from basic financial inputs",
    category="tax-salary",
    currency="EUR",
    inputs=[
        InputField("revenue", "Revenue (€)", 0, 10000000, 1000, 100000),
        InputField("cogs", "COGS (€)", 0, 10000000, 1000, 30000),
        InputField("opex", "Operating Expenses (€)", 0, 10000000, 1000, 20000),
        InputField("depreciation", "Depreciation (€)", 0, 1000000, 100, 2000),
        InputField("amortisation", "Amortisation (€)", 0, 1000000, 100, 1000),
    ],
)
def ebitda(
    *, revenue: float, cogs: float, opex: float, depreciation: float, amortisation: float
) -> dict[str, float]:
    return {"EBITDA": round_half_up(revenue - cogs - opex + depreciation + amortisation)}
