"""Compound interest formulas. Pure functions, no I/O."""


def monthly_rate(annual_return: float) -> float:
    """Monthly rate from an annual percentage."""
    return annual_return / 100 / 12


def future_value(initial: float, monthly: float, annual_return: float, years: int) -> float:
    """Value after ``years`` with monthly compounding and end-of-month contributions."""
    months = years * 12
    rate = monthly_rate(annual_return)
    if rate == 0:
        return initial + monthly * months

    growth = (1 + rate) ** months
    return initial * growth + monthly * (growth - 1) / rate


def total_contributions(initial: float, monthly: float, years: int) -> float:
    """Money put in over the horizon."""
    return initial + monthly * 12 * years


def yearly_balances(initial: float, monthly: float, annual_return: float, years: int) -> list[float]:
    """Balance at the end of each year."""
    return [round(future_value(initial, monthly, annual_return, y), 2) for y in range(1, years + 1)]


def project(initial: float, monthly: float, annual_return: float, years: int) -> dict:
    """Projection summary for a scenario."""
    fv = future_value(initial, monthly, annual_return, years)
    contributed = total_contributions(initial, monthly, years)
    return {
        "future_value": round(fv, 2),
        "total_contributions": round(contributed, 2),
        "total_gains": round(fv - contributed, 2),
        "yearly_balances": yearly_balances(initial, monthly, annual_return, years),
    }
