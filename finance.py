# finance.py
from typing import Iterable, List

import numpy as np

from project import BudgetItem
from simulate import HourlyResult
from summary import aggregate_results


def capex(budget: Iterable[BudgetItem]) -> float:
    """Investment cost: sum of quantity x unit price over the budget lines."""
    return float(sum(item.quantity * item.unit_price for item in budget))


def simple_payback(investment: float, annual_savings: float) -> float:
    """Years to recover ``investment``; NaN when the proposal saves nothing."""
    if annual_savings <= 0:
        return np.nan
    return investment / annual_savings


def compare_scenarios(existing: List[HourlyResult], proposed: List[HourlyResult],
                      budget: Iterable[BudgetItem] = ()) -> dict:
    """
    Annual comparison of the existing and proposed runs, flat so it can be
    written straight to a sheet.
    """
    base = aggregate_results(existing)
    prop = aggregate_results(proposed)
    investment = capex(budget)
    savings = base.cost - prop.cost

    out = {}
    for prefix, totals in (("existing", base), ("proposed", prop)):
        for key, value in totals.as_dict().items():
            out[f"{prefix}_{key}"] = value
    out.update({
        "annual_savings": savings,
        "savings_pct": (savings / base.cost * 100.0) if base.cost > 0 else 0.0,
        "capex": investment,
        "payback_years": simple_payback(investment, savings),
    })
    return out
