"""Compound Interest Evaluator — future value with optional monthly contributions.

    A = P(1 + r/n)^(nt) + PMT · [((1 + r/n)^(nt) − 1) / (r/n)]

Invariants:
    - Pure: same request → same result, no IO
    - principal ≤ 0 and no positive contribution → EvaluationResult.invalid()
    - Negative principal, rate or period → EvaluationResult.invalid()
    - Period above MAX_YEARS, or any figure that overflows → EvaluationResult.invalid()
    - totalInterestEarned == futureValue − totalContributions (exact, same floats)
    - 0 ≤ interestOnInterest ≤ totalInterestEarned
    - Yearly schedule rows telescope: Σ interest == totalInterestEarned
    - Money stays in the user's chosen currency (the formula is scale-invariant)

Design Decisions:
    - Yearly balances re-derived from the closed form at each year, not accumulated
    - Simple-interest baseline for contributions uses the closed form of the
      month-by-month sum instead of a loop
"""

import math

from calcdeck.core.domain_types import Locale
from calcdeck.core.evaluation import EvaluationRequest, EvaluationResult, all_finite
from calcdeck.core.locale_text import LocaleText, fill_template
from calcdeck.core.number_format import (
    PLACEHOLDER, format_currency, format_number, format_percent, round_half_up,
)

COMPOUND_N: dict[str, int] = {
    "daily": 365,
    "monthly": 12,
    "quarterly": 4,
    "semiannually": 2,
    "annually": 1,
}
DEFAULT_INFLATION_RATE = 3.0
DEFAULT_TAX_RATE = 25.0
RULE_OF_72 = 72.0
# Upper bound on the yearly schedule length
MAX_YEARS = 100

DEFAULT_SUMMARY = (
    "Invest {initial} at {rate}% for {period} years → {futureValue}. "
    "Total interest: {totalInterest} ({interestOnInterest} from compounding alone). "
    "Your money doubles in ~{doublingTime}. Daily earnings: {dailyEarnings}."
)


# ─── Formula pieces ──────────────────────────────────────────────

def future_value(
    principal: float, annual_rate: float, periods_per_year: int,
    years: float, monthly_contribution: float,
) -> float:
    """Balance after `years`; contributions spread evenly over compounding periods."""
    rate_per_period = annual_rate / periods_per_year
    total_periods = periods_per_year * years
    growth = (1 + rate_per_period) ** total_periods
    fv_principal = principal * growth
    if monthly_contribution <= 0:
        return fv_principal
    if rate_per_period == 0:
        return fv_principal + monthly_contribution * 12 * years
    pmt_per_period = monthly_contribution * 12 / periods_per_year
    return fv_principal + pmt_per_period * (growth - 1) / rate_per_period


def simple_interest(
    principal: float, annual_rate: float, years: float, monthly_contribution: float,
) -> float:
    """Interest with no compounding: principal for the full term, each deposit for its remainder."""
    on_principal = principal * annual_rate * years
    if monthly_contribution <= 0:
        return on_principal
    total_months = years * 12
    deposits = math.floor(total_months)
    # Σ_{m=1..deposits} (total_months − m) / 12
    remaining_years = (deposits * total_months - deposits * (deposits + 1) / 2) / 12
    return on_principal + monthly_contribution * annual_rate * remaining_years


def contributions_until(principal: float, monthly_contribution: float, years: float) -> float:
    return principal + monthly_contribution * 12 * years


def chart_step(years: float) -> int:
    if years <= 20:
        return 1
    if years <= 35:
        return 2
    return 5


# ─── Evaluator ───────────────────────────────────────────────────

def evaluate_compound_interest(request: EvaluationRequest) -> EvaluationResult:
    text = request.text
    locale = request.locale
    currency = request.unit("initialInvestment", "USD")

    principal = request.number("initialInvestment") or 0.0
    annual_rate_pct = request.number("interestRate") or 0.0
    years = request.number("investmentPeriod") or 1.0
    frequency = request.choice("compoundingFrequency", "monthly")
    include_contributions = request.flag("includeContributions")
    monthly = (request.number("monthlyContribution") or 0.0) if include_contributions else 0.0
    include_inflation = request.flag("includeInflation")
    inflation_pct = (
        request.number("inflationRate") or DEFAULT_INFLATION_RATE
    ) if include_inflation else 0.0
    include_tax = request.flag("includeTax")
    tax_pct = (request.number("taxRate") or DEFAULT_TAX_RATE) if include_tax else 0.0

    if principal < 0 or annual_rate_pct < 0 or years < 0 or years > MAX_YEARS or monthly < 0:
        return EvaluationResult.invalid()
    if principal <= 0 and monthly <= 0:
        return EvaluationResult.invalid()

    r = annual_rate_pct / 100
    n = COMPOUND_N.get(frequency, 12)

    try:
        fv = future_value(principal, r, n, years, monthly)
        effective_rate = ((1 + r / n) ** n - 1) * 100
        inflation_adjusted = (
            fv / (1 + inflation_pct / 100) ** years if include_inflation else None
        )
    except OverflowError:
        return EvaluationResult.invalid()
    total_contributed = contributions_until(principal, monthly, years)
    total_interest = fv - total_contributed

    total_simple = simple_interest(principal, r, years, monthly)
    interest_on_interest = min(max(0.0, total_interest - total_simple), max(total_interest, 0.0))
    simple_total = total_contributed + total_simple
    compound_advantage = fv - simple_total

    doubling_years = RULE_OF_72 / annual_rate_pct if annual_rate_pct > 0 else None
    daily_earnings = principal * r / 365
    after_tax = fv - total_interest * (tax_pct / 100) if include_tax else None
    if not all_finite(
        fv, total_contributed, total_interest, total_simple, compound_advantage,
        effective_rate, daily_earnings, inflation_adjusted, after_tax,
    ):
        return EvaluationResult.invalid()

    # --- Formatting ---------------------------------------------------------
    def money(amount: float) -> str:
        return format_currency(amount, currency, locale, compact=True)

    years_word = text.resolve("years", "years")
    ioi_share = interest_on_interest / total_interest * 100 if total_interest > 0 else 0.0
    doubling_text = (
        f"{format_number(doubling_years, 1, locale)} {years_word}"
        if doubling_years is not None else "N/A"
    )
    daily_text = (
        f"{format_currency(daily_earnings, currency, locale, decimals=2)}"
        f"{text.resolve('/day', '/day')}"
    )
    advantage_sign = "+" if round_half_up(compound_advantage) >= 0 else ""

    formatted = {
        "futureValue": money(fv),
        "totalInterestEarned": money(total_interest),
        "totalContributions": money(total_contributed),
        "interestOnInterest": (
            f"{money(interest_on_interest)} ({format_number(ioi_share, 0, locale)}% "
            f"{text.resolve('of total interest', 'of total interest')})"
        ),
        "effectiveRate": f"{format_percent(effective_rate, 2, locale)} APY",
        "doublingTime": f"~{doubling_text}" if doubling_years is not None else "N/A",
        "dailyEarnings": daily_text,
        "simpleVsCompoundDiff": (
            f"{advantage_sign}{money(compound_advantage)} "
            f"{text.resolve('vs simple interest', 'vs simple interest')}"
        ),
        "inflationAdjustedValue": (
            f"{money(inflation_adjusted)} "
            f"{text.resolve('real purchasing power', 'real purchasing power')}"
            if inflation_adjusted is not None else PLACEHOLDER
        ),
        "afterTaxValue": (
            f"{money(after_tax)} {text.resolve('after tax', 'after tax')}"
            if after_tax is not None else PLACEHOLDER
        ),
    }

    summary = fill_template(
        text.template("summary", DEFAULT_SUMMARY),
        initial=money(principal),
        rate=_plain_number(annual_rate_pct, locale),
        period=_plain_number(years, locale),
        futureValue=formatted["futureValue"],
        totalInterest=formatted["totalInterestEarned"],
        interestOnInterest=money(interest_on_interest),
        doublingTime=doubling_text,
        dailyEarnings=daily_text,
    )

    schedule = _yearly_schedule(principal, r, n, years, monthly, inflation_pct if include_inflation else None)

    return EvaluationResult(
        values={
            "futureValue": fv,
            "totalInterestEarned": total_interest,
            "totalContributions": total_contributed,
            "interestOnInterest": interest_on_interest,
            "effectiveRate": effective_rate,
            "doublingTime": doubling_years,
            "dailyEarnings": daily_earnings,
            "simpleVsCompoundDiff": compound_advantage,
            "inflationAdjustedValue": inflation_adjusted,
            "afterTaxValue": after_tax,
        },
        formatted=formatted,
        summary=summary,
        is_valid=True,
        metadata={
            "currency": currency.upper(),
            "yearlySchedule": schedule,
            "tableData": _schedule_table(schedule, currency, text, locale),
            "chartData": _growth_chart(principal, r, n, years, monthly),
            "distribution": _distribution(principal, total_contributed - principal, total_interest, fv),
        },
    )


# ─── Metadata builders ───────────────────────────────────────────

def _plain_number(value: float, locale: Locale) -> str:
    """7 → "7", 4.5 → "4.5", 3.125 → "3.13"."""
    if value == int(value):
        return format_number(value, 0, locale)
    decimals = 1 if round_half_up(value, 1) == round_half_up(value, 2) else 2
    return format_number(value, decimals, locale)


def _schedule_years(years: float) -> list[float]:
    whole = int(math.floor(years))
    marks = [float(y) for y in range(1, whole + 1)]
    if years > whole:
        marks.append(years)
    return marks


def _yearly_schedule(
    principal: float, r: float, n: int, years: float, monthly: float,
    inflation_pct: float | None,
) -> list[dict]:
    rows = []
    previous_year = 0.0
    previous_balance = principal
    cumulative_interest = 0.0
    for year in _schedule_years(years):
        balance = future_value(principal, r, n, year, monthly)
        deposits = monthly * 12 * (year - previous_year)
        interest = balance - previous_balance - deposits
        cumulative_interest += interest
        rows.append({
            "year": year,
            "balance": balance,
            "contributions": contributions_until(principal, monthly, year),
            "interest": interest,
            "cumulativeInterest": cumulative_interest,
            "inflationAdjusted": (
                balance / (1 + inflation_pct / 100) ** year if inflation_pct is not None else None
            ),
        })
        previous_year, previous_balance = year, balance
    return rows


def _schedule_table(
    schedule: list[dict], currency: str, text: LocaleText, locale: Locale,
) -> list[dict]:
    year_word = text.resolve("Year", "Year")

    def money(amount: float) -> str:
        return format_currency(amount, currency, locale)

    return [
        {
            "year": f"{year_word} {_plain_number(row['year'], locale)}",
            "contributions": money(row["contributions"]),
            "interest": money(row["interest"]),
            "balance": money(row["balance"]),
            "inflationAdjusted": (
                money(row["inflationAdjusted"]) if row["inflationAdjusted"] is not None
                else PLACEHOLDER
            ),
        }
        for row in schedule
    ]


def _growth_chart(
    principal: float, r: float, n: int, years: float, monthly: float,
) -> list[dict]:
    """Stacked layers: deposits, simple interest, interest earned on interest."""
    step = chart_step(years)
    marks = [float(y) for y in range(step, int(math.floor(years)) + 1, step)]
    if not marks or marks[-1] != years:
        marks.append(years)

    points = [{"year": 0.0, "contributions": principal, "principalInterest": 0.0, "interestOnInterest": 0.0}]
    for year in marks:
        balance = future_value(principal, r, n, year, monthly)
        contributed = contributions_until(principal, monthly, year)
        simple = simple_interest(principal, r, year, monthly)
        points.append({
            "year": year,
            "contributions": contributed,
            "principalInterest": simple,
            "interestOnInterest": max(0.0, balance - contributed - simple),
        })
    return points


def _distribution(
    principal: float, contributions: float, interest: float, total: float,
) -> list[dict]:
    def share(part: float) -> float:
        return part / total * 100 if total > 0 else 0.0

    return [
        {"id": "principal", "value": share(principal), "max": 100},
        {"id": "contributions", "value": share(contributions), "max": 100},
        {"id": "interest", "value": share(interest), "max": 100},
    ]
