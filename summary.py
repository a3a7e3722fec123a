"""
summary.py

Reductions and views over the 8760 hourly records: annual totals, monthly
table, typical day/week windows, comfort failures, and CSV/Excel export.
"""
from dataclasses import asdict, dataclass, fields
import os
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

from config import TYPICAL_DAY_START, TYPICAL_WEEK_START, COMFORT_TOLERANCE
from simulate import HourlyResult
from utils import DAY_NAMES, MONTH_NAMES, hour_to_calendar


@dataclass(frozen=True)
class AnnualTotals:
    elec_kwh: float = 0.0
    gas_kwh: float = 0.0
    solar_kwh: float = 0.0
    demand_kwh: float = 0.0
    cost: float = 0.0

    def __add__(self, other: "AnnualTotals") -> "AnnualTotals":
        return AnnualTotals(*(getattr(self, f.name) + getattr(other, f.name) for f in fields(self)))

    def as_dict(self) -> dict:
        return asdict(self)


def aggregate_results(results: Iterable[HourlyResult]) -> AnnualTotals:
    """Sum energy by vector, solar yield, demand and cost over any run of hours."""
    elec = gas = solar = demand = cost = 0.0
    for r in results:
        elec += r.consumed_elec_kwh
        gas += r.consumed_gas_kwh
        solar += r.solar_gain_kwh
        demand += r.demand_kwh
        cost += r.cost
    return AnnualTotals(elec, gas, solar, demand, cost)


def results_to_frame(results: List[HourlyResult]) -> pd.DataFrame:
    """One row per hour, columns = record fields plus month and hour_of_day."""
    df = pd.DataFrame([asdict(r) for r in results], columns=[f.name for f in fields(HourlyResult)])
    cal = [hour_to_calendar(int(h)) for h in df["hour"]]
    df["month"] = [c[1] for c in cal]
    df["hour_of_day"] = [c[2] for c in cal]
    return df


def monthly_summary(results: List[HourlyResult]) -> pd.DataFrame:
    """Twelve rows (Jan..Dec) of demand, cost, solar, electricity and gas."""
    df = results_to_frame(results)
    cols = {
        "demand_kwh": "demand",
        "cost": "cost",
        "solar_gain_kwh": "solar",
        "consumed_elec_kwh": "elec",
        "consumed_gas_kwh": "gas",
    }
    monthly = (
        df.groupby("month")[list(cols)].sum()
        .reindex(range(12), fill_value=0.0)
        .rename(columns=cols)
    )
    monthly.insert(0, "name", MONTH_NAMES)
    return monthly.reset_index(drop=True)


def typical_day(results: List[HourlyResult], start: int = TYPICAL_DAY_START) -> pd.DataFrame:
    window = results_to_frame(results[start:start + 24])
    return window[["hour_of_day", "temp_tank", "demand_kwh", "solar_gain_kwh", "cost"]].reset_index(drop=True)


def typical_week(results: List[HourlyResult], start: int = TYPICAL_WEEK_START) -> pd.DataFrame:
    window = results_to_frame(results[start:start + 168])
    window["day"] = [DAY_NAMES[d] for d in window["day_of_week"]]
    return window[["day", "hour_of_day", "temp_tank", "demand_kwh", "solar_gain_kwh", "cost"]].reset_index(drop=True)


def comfort_failures(results: List[HourlyResult], tolerance: float = COMFORT_TOLERANCE) -> dict:
    """
    Hours with a draw where the delivered temperature falls more than
    ``tolerance`` below the required one.
    """
    df = results_to_frame(results)
    failed = df[(df["demand_l"] > 0) & (df["t_delivered"] < df["t_required"] - tolerance)]
    by_hour = failed.groupby("hour_of_day").size().reindex(range(24), fill_value=0)
    by_day = failed.groupby("day_of_week").size().reindex(range(7), fill_value=0)
    demand_hours = int((df["demand_l"] > 0).sum())
    return {
        "failure_hours": int(len(failed)),
        "demand_hours": demand_hours,
        "failure_pct": (len(failed) / demand_hours * 100.0) if demand_hours > 0 else 0.0,
        "by_hour": by_hour.astype(int).tolist(),
        "by_day": dict(zip(DAY_NAMES, by_day.astype(int).tolist())),
    }


def scenario_kpis(results: List[HourlyResult]) -> dict:
    totals = aggregate_results(results)
    temps = np.array([r.temp_tank for r in results], dtype=float)
    fails = comfort_failures(results)
    return {
        **totals.as_dict(),
        "solar_fraction": (totals.solar_kwh / totals.demand_kwh) if totals.demand_kwh > 0 else 0.0,
        "avg_temp": float(temps.mean()) if temps.size else np.nan,
        "failure_hours": fails["failure_hours"],
        "failure_pct": fails["failure_pct"],
    }


# -----------------------------
# Export
# -----------------------------
def export_hourly_csv(results: List[HourlyResult], path: str) -> str:
    """Raw 8760 sequence, one row per hour, columns = record fields."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    df = pd.DataFrame([asdict(r) for r in results], columns=[f.name for f in fields(HourlyResult)])
    df.to_csv(path, index=False)
    return path


def write_workbook(path: str, scenarios: Dict[str, List[HourlyResult]], comparison: dict = None) -> str:
    """
    Per scenario: the hourly sequence, the monthly table and the typical
    day/week windows. Plus a comparison sheet when given.
    """
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with pd.ExcelWriter(path, engine="xlsxwriter") as writer:
        wb = writer.book
        fmt_money = wb.add_format({'num_format': '#,##0.00'})
        fmt_kwh = wb.add_format({'num_format': '0.000'})
        fmt_deg = wb.add_format({'num_format': '0.0'})

        for name, results in scenarios.items():
            df = results_to_frame(results)
            sheet = f"{name}_hourly"[:31]
            df.to_excel(writer, sheet_name=sheet, index=False)
            ws = writer.sheets[sheet]

            def set_col_fmt(col_name, fmt, frame=df, sheet_ws=ws):
                if col_name in frame.columns:
                    idx = frame.columns.get_loc(col_name)
                    sheet_ws.set_column(idx, idx, None, fmt)

            for c in ('demand_kwh', 'consumed_elec_kwh', 'consumed_gas_kwh', 'solar_gain_kwh'):
                set_col_fmt(c, fmt_kwh)
            for c in ('temp_tank', 't_required', 't_delivered'):
                set_col_fmt(c, fmt_deg)
            set_col_fmt('cost', fmt_money)

            monthly = monthly_summary(results).round(2)
            monthly.to_excel(writer, sheet_name=f"{name}_monthly"[:31], index=False)
            if len(results) >= TYPICAL_WEEK_START + 168:
                typical_day(results).to_excel(writer, sheet_name=f"{name}_day"[:31], index=False)
                typical_week(results).to_excel(writer, sheet_name=f"{name}_week"[:31], index=False)

        if comparison:
            rows = [{"metric": k, "value": v} for k, v in comparison.items() if np.isscalar(v)]
            pd.DataFrame(rows).to_excel(writer, sheet_name="comparison", index=False)
            writer.sheets["comparison"].set_column(1, 1, 16, fmt_money)
    return path
