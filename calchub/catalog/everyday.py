"""Sizing, energy, motoring, health and farm calculators."""

from __future__ import annotations

import math

from calchub.calculator import round_half_up
from calchub.catalog.base import REGISTRY
from calchub.models import InputField

# (minimum bust-band difference in cm, cup), smallest first
CUP_SIZES = [(17, "A"), (19, "B"), (21, "C"), (23, "D")]
PREGNANCY_DAYS = 280
CATTLE_GESTATION_DAYS = 283
# (max CO2 g/km, VRT rate)
VRT_BANDS = [(120, 0.015), (160, 0.02)]
VRT_TOP_RATE = 0.025


@REGISTRY.register(
    "bra-size",
    name="Bra Size",
    description="Estimated bra size from band and bust measurements",
    category="fashion-size",
    inputs=[
        InputField("band", "Band Size (cm)", 60, 120, 2.5, 85),
        InputField("bust", "Bust Size (cm)", 70, 150, 2.5, 95),
    ],
)
def bra_size(*, band: float, bust: float) -> dict[str, float | str]:
    diff = bust - band
    cup = "AA"
    for threshold, size in CUP_SIZES:
        if diff >= threshold:
            cup = size
    return {"Band Size": band, "Estimated Size": f"{band:g}{cup}"}


@REGISTRY.register(
    "shoe-size",
    name="Shoe Size",
    description="US and EU shoe size from foot length",
    category="fashion-size",
    inputs=[InputField("foot", "Foot Length (cm)", 15, 35, 0.5, 25)],
)
def shoe_size(*, foot: float) -> dict[str, float]:
    us = round_half_up((foot - 8.128) / 0.254)
    return {"Foot Length": foot, "US Size": us, "EU Size": us + 32}


@REGISTRY.register(
    "electricity-bill",
    name="Electricity Bill",
    description="Bill from usage, unit rate and standing charge",
    category="general-misc",
    currency="EUR",
    inputs=[
        InputField("usage_kwh", "Electricity Usage (kWh)", 0, 100000, 1, 400),
        InputField("unit_rate", "Unit Rate (€/kWh)", 0, 1, 0.001, 0.30),
        InputField("standing_charge", "Standing Charge (€/day)", 0, 5, 0.01, 0.20),
        InputField("days", "Billing Days", 1, 365, 1, 30),
    ],
)
def electricity_bill(
    *, usage_kwh: float, unit_rate: float, standing_charge: float, days: float
) -> dict[str, float]:
    energy = usage_kwh * unit_rate
    standing = standing_charge * days
    return {
        "Energy Cost": round_half_up(energy),
        "Standing Charge": round_half_up(standing),
        "Total Bill": round_half_up(energy + standing),
    }


@REGISTRY.register(
    "kwh-cost",
    name="kWh Cost",
    description="Running cost of an appliance",
    category="general-misc",
    currency="EUR",
    inputs=[
        InputField("power_kw", "Appliance Power (kW)", 0.01, 10, 0.01, 1),
        InputField("hours", "Hours of Use", 0, 24, 0.1, 2),
        InputField("unit_cost", "Unit Cost (€/kWh)", 0.01, 1, 0.001, 0.30),
    ],
)
def kwh_cost(*, power_kw: float, hours: float, unit_cost: float) -> dict[str, float]:
    kwh = power_kw * hours
    return {"kWh Used": round(kwh, 2), "Cost": round(kwh * unit_cost, 2)}


@REGISTRY.register(
    "fuel-cost",
    name="Fuel Cost",
    description="Fuel needed and cost for a trip",
    category="general-misc",
    currency="EUR",
    inputs=[
        InputField("distance", "Trip Distance (km)", 0, 5000, 1, 100),
        InputField("consumption", "Fuel Consumption (L/100km)", 1, 30, 0.1, 6.5),
        InputField("price_per_litre", "Fuel Price (€/L)", 0.1, 5, 0.01, 1.70),
    ],
)
def fuel_cost(*, distance: float, consumption: float, price_per_litre: float) -> dict[str, float]:
    litres = consumption / 100 * distance
    return {"Litres Needed": round(litres, 2), "Estimated Cost": round(litres * price_per_litre, 2)}


@REGISTRY.register(
    "vrt-calculator",
    name="VRT Calculator",
    description="Vehicle registration tax by CO2 band",
    category="general-misc",
    currency="EUR",
    inputs=[
        InputField("price", "Vehicle Price (€)", 5000, 500000, 5000, 30000),
        InputField("co2", "CO2 Emissions (g/km)", 50, 300, 10, 140),
    ],
)
def vrt(*, price: float, co2: float) -> dict[str, float | str]:
    rate = next((r for limit, r in VRT_BANDS if co2 <= limit), VRT_TOP_RATE)
    tax = price * rate
    return {
        "VRT Rate": f"{rate * 100:.1f}%",
        "VRT Amount": round_half_up(tax),
        "Total Cost": round_half_up(price + tax),
    }


@REGISTRY.register(
    "solar-payback",
    name="Solar Panel Payback",
    description="Payback period and 20-year return of a solar PV system",
    category="general-misc",
    currency="EUR",
    inputs=[
        InputField("system_size", "System Size (kWp)", 2, 10, 0.5, 4),
        InputField("annual_savings", "Estimated Annual Savings (€)", 200, 2000, 100, 800),
        InputField("system_cost", "System Cost (€)", 5000, 20000, 500, 10000),
    ],
)
def solar_payback(
    *, system_size: float, annual_savings: float, system_cost: float
) -> dict[str, float | str]:
    savings_20 = annual_savings * 20
    roi = (savings_20 - system_cost) / system_cost * 100
    return {
        "System Size (kWp)": system_size,
        "Payback Period (years)": f"{system_cost / annual_savings:.1f}",
        "20-Year Savings": round_half_up(savings_20),
        "ROI %": f"{roi:.1f}",
    }


@REGISTRY.register(
    "pregnancy-calculator",
    name="Pregnancy Calculator",
    description="Gestation progress from days since last menstrual period",
    category="general-misc",
    inputs=[
        InputField("lmp_days_ago", "Days Since LMP", 0, 300, 1, 70),
        InputField("cycle_length", "Average Cycle Length (days)", 20, 40, 1, 28),
    ],
)
def pregnancy(*, lmp_days_ago: float, cycle_length: float) -> dict[str, float]:
    # Cycles longer or shorter than 28 days shift ovulation and the due date.
    gestation = PREGNANCY_DAYS + (cycle_length - 28)
    return {
        "Weeks": math.floor(lmp_days_ago / 7),
        "Days": lmp_days_ago % 7,
        "Months": math.floor(lmp_days_ago / 30.44),
        "Days Remaining": max(0, gestation - lmp_days_ago),
    }


@REGISTRY.register(
    "calving-calculator",
    name="Calving Calculator",
    description="Days until calving from the breeding date",
    category="general-misc",
    inputs=[InputField("days_since_breeding", "Days Since Breeding", 0, 600, 1, 200)],
)
def calving(*, days_since_breeding: float) -> dict[str, float]:
    return {
        "Gestation Days": CATTLE_GESTATION_DAYS,
        "Days Remaining": max(0, CATTLE_GESTATION_DAYS - days_since_breeding),
    }


@REGISTRY.register(
    "stocking-rate",
    name="Stocking Rate",
    description="Animals a holding can carry from forage yield",
    category="general-misc",
    inputs=[
        InputField("area", "Land Area (ha)", 0.1, 1000, 0.1, 10),
        InputField("forage_yield", "Forage Yield (t DM/ha)", 0.1, 30, 0.1, 8),
        InputField("demand_per_animal", "Annual Demand per Animal (t DM)", 0.1, 10, 0.1, 2),
    ],
)
def stocking_rate(
    *, area: float, forage_yield: float, demand_per_animal: float
) -> dict[str, float]:
    forage = area * forage_yield
    return {
        "Total Forage (t)": round(forage, 2),
        "Stocking Rate (animals)": round_half_up(forage / demand_per_animal),
    }


@REGISTRY.register(
    "age-grade",
    name="Age Grade",
    description="Age reached during a given year, for underage grading",
    category="general-misc",
    inputs=[
        InputField("birth_year", "Birth Year (YYYY)", 1900, 2100, 1, 2005),
        InputField("current_year", "Current Year", 1900, 2100, 1, 2026),
    ],
)
def age_grade(*, birth_year: float, current_year: float) -> dict[str, float]:
    return {"Age": current_year - birth_year}
