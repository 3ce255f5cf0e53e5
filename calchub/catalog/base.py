"""The shared registry instance and its categories."""

from __future__ import annotations

from calchub.models import Category
from calchub.registry import Registry

REGISTRY = Registry()

for _category in (
    Category(
        "tax-salary",
        "Tax & Salary",
        "Tax calculations, salary deductions and take-home pay estimations",
    ),
    Category(
        "loan-finance",
        "Loan & Finance",
        "Car loans, credit union loans and other finance calculators",
    ),
    Category(
        "mortgage-property",
        "Mortgage & Property",
        "Property costs, stamp duty, renovation and construction cost calculators",
    ),
    Category(
        "insurance-pension",
        "Insurance & Pension",
        "Pensions, retirement and insurance planning tools",
    ),
    Category(
        "leave-work",
        "Leave & Work Allowance",
        "Maternity, annual leave and workplace allowance tools",
    ),
    Category(
        "education-student",
        "Education & Student",
        "GPA, QCA and university grade calculators",
    ),
    Category(
        "math-science",
        "Math & Science",
        "Advanced mathematics and scientific calculation tools",
    ),
    Category(
        "fashion-size",
        "Fashion & Size",
        "Size, measurement and conversion tools",
    ),
    Category(
        "general-misc",
        "General & Miscellaneous",
        "Various everyday utility calculators",
    ),
):
    REGISTRY.add_category(_category)
