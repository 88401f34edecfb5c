"""
Household income composition.

Combines tax and super calculations for each earner into a household
snapshot. Voluntary super is salary-sacrificed and the novated lease pre-tax
amount is packaged, so both come off taxable income before tax is worked
out; the post-tax lease amount comes off spendable income.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .household import IncomeInput, NovatedLease, PersonProfile
from .superannuation import SuperCalculationResult, calculate_super
from .tax import TaxCalculationResult, calculate_income_tax


class LeaseAmounts(BaseModel):
    """Annual novated lease amounts applied to one earner."""

    model_config = ConfigDict(frozen=True)

    pre_tax_annual: float = Field(default=0, ge=0)
    post_tax_annual: float = Field(default=0, ge=0)

    @classmethod
    def for_year(cls, lease: NovatedLease, year: int) -> "LeaseAmounts":
        """Lease amounts in a calendar year (zero outside the lease term)."""
        if not lease.is_active(year):
            return cls()
        return cls(
            pre_tax_annual=lease.pre_tax_annual, post_tax_annual=lease.post_tax_annual
        )


class CalculationConfig(BaseModel):
    """Settings shared by both earners' income calculations."""

    model_config = ConfigDict(frozen=True)

    include_medicare_levy: bool = Field(default=True)
    financial_year: str = Field(default="2025-26")
    primary_voluntary_super_rate: float = Field(
        default=0, ge=0, le=1, description="Voluntary super rate (0-1)"
    )
    partner_voluntary_super_rate: float = Field(default=0, ge=0, le=1)
    primary_spendable_exclusion: float = Field(default=0, ge=0)
    partner_spendable_exclusion: float = Field(default=0, ge=0)
    primary_lease: LeaseAmounts = Field(default_factory=LeaseAmounts)
    partner_lease: LeaseAmounts = Field(default_factory=LeaseAmounts)


class PersonIncomeData(BaseModel):
    """Income breakdown for one earner."""

    model_config = ConfigDict(frozen=True)

    base_salary: float
    variable_income: float
    allowances: float
    pre_total_adjustments: float
    gross_income: float = Field(..., description="Taxable income after sacrifice")
    tax: TaxCalculationResult
    superannuation: SuperCalculationResult
    after_tax_income: float
    spendable_income: float

    @property
    def gross_before_deductions(self) -> float:
        return (
            self.base_salary
            + self.variable_income
            + self.allowances
            + self.pre_total_adjustments
        )


class CombinedIncome(BaseModel):
    """Household totals."""

    model_config = ConfigDict(frozen=True)

    gross_income: float
    total_tax: float
    after_tax_income: float
    total_super: float
    spendable_income: float


class HouseholdIncomeData(BaseModel):
    """Income for both earners plus household totals."""

    model_config = ConfigDict(frozen=True)

    primary: PersonIncomeData
    partner: PersonIncomeData
    combined: CombinedIncome


def calculate_person_income(
    income: IncomeInput,
    voluntary_super_rate: float,
    financial_year: str,
    include_medicare_levy: bool,
    spendable_exclusion: float = 0,
    novated_lease_pre_tax: float = 0,
    novated_lease_post_tax: float = 0,
) -> PersonIncomeData:
    """
    Calculate the complete income breakdown for one earner.

    Args:
        income: Income components
        voluntary_super_rate: Salary-sacrificed super rate (0-1)
        financial_year: Financial year for tax and SG rates
        include_medicare_levy: Whether to add the Medicare levy
        spendable_exclusion: After-tax income not available for spending
        novated_lease_pre_tax: Annual pre-tax lease amount
        novated_lease_post_tax: Annual post-tax lease amount

    Returns:
        PersonIncomeData
    """
    super_result = calculate_super(
        base_salary=income.base_salary,
        bonus=income.variable_income,
        allowances=income.allowances,
        voluntary_super_rate=voluntary_super_rate,
        financial_year=financial_year,
    )

    gross_income = income.total - super_result.voluntary_super - novated_lease_pre_tax
    tax = calculate_income_tax(gross_income, include_medicare_levy, financial_year)
    after_tax_income = tax.after_tax_income
    spendable_income = after_tax_income - spendable_exclusion - novated_lease_post_tax

    return PersonIncomeData(
        base_salary=income.base_salary,
        variable_income=income.variable_income,
        allowances=income.allowances,
        pre_total_adjustments=income.pre_total_adjustments,
        gross_income=gross_income,
        tax=tax,
        superannuation=super_result,
        after_tax_income=after_tax_income,
        spendable_income=spendable_income,
    )


def calculate_household_income(
    primary_income: IncomeInput,
    partner_income: IncomeInput,
    config: CalculationConfig,
) -> HouseholdIncomeData:
    """Calculate income for both earners and the household."""
    primary = calculate_person_income(
        primary_income,
        config.primary_voluntary_super_rate,
        config.financial_year,
        config.include_medicare_levy,
        config.primary_spendable_exclusion,
        config.primary_lease.pre_tax_annual,
        config.primary_lease.post_tax_annual,
    )
    partner = calculate_person_income(
        partner_income,
        config.partner_voluntary_super_rate,
        config.financial_year,
        config.include_medicare_levy,
        config.partner_spendable_exclusion,
        config.partner_lease.pre_tax_annual,
        config.partner_lease.post_tax_annual,
    )

    return HouseholdIncomeData(
        primary=primary,
        partner=partner,
        combined=CombinedIncome(
            gross_income=primary.gross_income + partner.gross_income,
            total_tax=primary.tax.total_tax + partner.tax.total_tax,
            after_tax_income=primary.after_tax_income + partner.after_tax_income,
            total_super=(
                primary.superannuation.total_super
                + partner.superannuation.total_super
            ),
            spendable_income=primary.spendable_income + partner.spendable_income,
        ),
    )


def calculation_config_for(
    primary: PersonProfile,
    partner: PersonProfile,
    financial_year: str,
    include_medicare_levy: bool = True,
    year: Optional[int] = None,
) -> CalculationConfig:
    """
    Build a CalculationConfig from two earner profiles.

    Profiles store voluntary super as a percentage; it is converted to a
    decimal here. Lease amounts apply only when the lease is active in
    ``year`` (every configured lease applies when ``year`` is None).
    """

    def _lease(profile: PersonProfile) -> LeaseAmounts:
        if year is None:
            return LeaseAmounts(
                pre_tax_annual=profile.novated_lease.pre_tax_annual,
                post_tax_annual=profile.novated_lease.post_tax_annual,
            )
        return LeaseAmounts.for_year(profile.novated_lease, year)

    return CalculationConfig(
        include_medicare_levy=include_medicare_levy,
        financial_year=financial_year,
        primary_voluntary_super_rate=primary.voluntary_super_rate / 100,
        partner_voluntary_super_rate=partner.voluntary_super_rate / 100,
        primary_spendable_exclusion=primary.spendable_exclusion,
        partner_spendable_exclusion=partner.spendable_exclusion,
        primary_lease=_lease(primary),
        partner_lease=_lease(partner),
    )
