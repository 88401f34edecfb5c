"""
Mortgage amortization calculations for household forecasting.

This module provides repayment amounts, period-by-period balance projection
with extra repayments, and yearly amortization schedules. Interest rates are
annual percentages and repayments may be monthly, fortnightly or weekly.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .household import Mortgage


class YearlyMortgagePayment(BaseModel):
    """Totals for one loan year."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, description="Loan year (1-based)")
    total_payment: float = Field(..., ge=0, description="Total repaid in the year")
    total_principal: float = Field(..., description="Principal repaid")
    total_interest: float = Field(..., ge=0, description="Interest paid")
    ending_balance: float = Field(..., ge=0, description="Balance at year end")


class MortgageSchedule(BaseModel):
    """Yearly amortization schedule plus repayment equivalents."""

    model_config = ConfigDict(frozen=True)

    yearly_payments: List[YearlyMortgagePayment] = Field(
        ..., description="Year-by-year totals"
    )
    fortnightly_payment: float = Field(..., ge=0, description="Fortnightly equivalent")
    monthly_payment: float = Field(..., ge=0, description="Monthly equivalent")
    annual_payment: float = Field(..., ge=0, description="Annual repayments")
    total_interest_paid: float = Field(..., ge=0, description="Interest to payoff")


class MortgageCalculator:
    """Calculator for mortgage repayments and balance projection."""

    @staticmethod
    def rate_per_period(annual_rate: float, payments_per_year: int) -> float:
        """Periodic interest rate (decimal) for an annual percentage rate."""
        return annual_rate / 100 / payments_per_year

    @staticmethod
    def calculate_payment(
        principal: float,
        annual_rate: float,
        term_years: int,
        payments_per_year: int = 12,
    ) -> float:
        """
        Calculate the fixed periodic repayment using the annuity formula.

        PMT = P * r(1+r)^n / ((1+r)^n - 1)

        Args:
            principal: Loan principal amount
            annual_rate: Annual interest rate (%, e.g. 6.5)
            term_years: Loan term in years
            payments_per_year: Repayments per year (12, 26 or 52)

        Returns:
            Repayment per period
        """
        r = MortgageCalculator.rate_per_period(annual_rate, payments_per_year)
        n = term_years * payments_per_year

        if r == 0:
            return principal / n

        growth = (1 + r) ** n
        return principal * (r * growth) / (growth - 1)

    @staticmethod
    def extra_payment_per_period(
        extra_monthly_payment: float, payments_per_year: int
    ) -> float:
        """Convert an extra monthly repayment to the loan's repayment period."""
        if payments_per_year == 12:
            return extra_monthly_payment
        return extra_monthly_payment * 12 / payments_per_year

    @staticmethod
    def project_balance(
        balance: float,
        payment: float,
        rate_per_period: float,
        periods: int,
        extra_per_period: float = 0,
    ) -> float:
        """
        Apply a number of repayments to a running balance.

        Interest accrues on the opening balance of each period; the regular
        repayment less interest plus any extra repayment reduces principal.
        Stops early once the loan is repaid and never goes below zero.
        """
        for _ in range(periods):
            if balance <= 0:
                break
            interest = balance * rate_per_period
            principal = payment - interest + extra_per_period
            balance = max(0.0, balance - principal)
        return balance

    @staticmethod
    def calculate_remaining_balance(
        loan_amount: float,
        annual_rate: float,
        term_years: int,
        payments_per_year: int,
        years_elapsed: float,
        extra_monthly_payment: float = 0,
    ) -> float:
        """
        Calculate the outstanding balance after a number of loan years.

        Iterates period by period because extra repayments break the
        closed-form solution.
        """
        payment = MortgageCalculator.calculate_payment(
            loan_amount, annual_rate, term_years, payments_per_year
        )
        periods = int(years_elapsed * payments_per_year)
        return MortgageCalculator.project_balance(
            loan_amount,
            payment,
            MortgageCalculator.rate_per_period(annual_rate, payments_per_year),
            periods,
            MortgageCalculator.extra_payment_per_period(
                extra_monthly_payment, payments_per_year
            ),
        )

    @staticmethod
    def calculate_monthly_equivalent(mortgage: Mortgage) -> float:
        """Regular repayment for a mortgage expressed per month."""
        payment = MortgageCalculator.calculate_payment(
            mortgage.loan_amount,
            mortgage.interest_rate,
            mortgage.loan_term_years,
            mortgage.payments_per_year,
        )
        return payment * mortgage.payments_per_year / 12

    @staticmethod
    def generate_schedule(
        loan_amount: float,
        annual_rate: float,
        term_years: int,
        payments_per_year: int = 12,
        years_elapsed: int = 0,
    ) -> MortgageSchedule:
        """
        Generate a yearly amortization schedule.

        Args:
            loan_amount: Balance to amortize
            annual_rate: Annual interest rate (%)
            term_years: Loan term in years
            payments_per_year: Repayments per year
            years_elapsed: Loan years already passed; the schedule starts
                from this year and runs to payoff or the end of the term

        Returns:
            MortgageSchedule with yearly totals and repayment equivalents
        """
        payment = MortgageCalculator.calculate_payment(
            loan_amount, annual_rate, term_years, payments_per_year
        )
        rate = MortgageCalculator.rate_per_period(annual_rate, payments_per_year)

        balance = loan_amount
        yearly_payments = []

        for year in range(years_elapsed, term_years):
            year_principal = 0.0
            year_interest = 0.0

            for _ in range(payments_per_year):
                if balance <= 0:
                    break
                interest = balance * rate
                principal = payment - interest
                balance = max(0.0, balance - principal)
                year_principal += principal
                year_interest += interest

            yearly_payments.append(
                YearlyMortgagePayment(
                    year=year + 1,
                    total_payment=year_principal + year_interest,
                    total_principal=year_principal,
                    total_interest=year_interest,
                    ending_balance=balance,
                )
            )

            if balance <= 0:
                break

        if payments_per_year == 26:
            fortnightly = payment
        else:
            fortnightly = payment * payments_per_year / 26
        if payments_per_year == 12:
            monthly = payment
        else:
            monthly = payment * payments_per_year / 12

        return MortgageSchedule(
            yearly_payments=yearly_payments,
            fortnightly_payment=fortnightly,
            monthly_payment=monthly,
            annual_payment=payment * payments_per_year,
            total_interest_paid=sum(y.total_interest for y in yearly_payments),
        )
