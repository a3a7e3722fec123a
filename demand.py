"""
demand.py

Scheduled hot-water activities and their aggregation into hourly draws.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

import pandas as pd

from config import SIM_PARAMS, WEEKS_PER_YEAR


@dataclass(frozen=True)
class Activity:
    """
    One scheduled water use.

    volume is litres per active day, spread evenly over ``hours``.
    ``active_days=None`` means the activity runs every day of the week.
    """
    name: str
    volume: float
    temp_required: float
    hours: tuple = ()
    active_days: Optional[tuple] = None

    def is_active(self, day_of_week: int, hour_of_day: int) -> bool:
        day_ok = self.active_days is None or day_of_week in self.active_days
        return day_ok and hour_of_day in self.hours


def hourly_demand(activities: Iterable[Activity], day_of_week: int, hour_of_day: int) -> tuple[float, float]:
    """
    Combined draw for one (day, hour) slot.

    Returns (litres, required_temp) where required_temp is the volume-weighted
    mean of the active activities, or 0 when nothing draws.
    """
    litres = 0.0
    weighted_temp = 0.0
    for act in activities:
        if act.is_active(day_of_week, hour_of_day):
            # only divided by the number of hours, never by active days
            h_vol = act.volume / (len(act.hours) or 1)
            litres += h_vol
            weighted_temp += h_vol * act.temp_required
    t_required = weighted_temp / litres if litres > 0 else 0.0
    return litres, t_required


def draw_energy_kwh(litres: float, t_required: float) -> float:
    # E = V cp ΔT against mains water; 1 L ≈ 1 kg
    dT = max(0.0, t_required - SIM_PARAMS["cold_water_temp"])
    return litres * SIM_PARAMS["cp_water"] * dT / 1000.0


class DemandProfile:
    """
    Weekly view of an activity set: 7 days x 24 hours of litres, required
    temperature and thermal energy, plus the headline metrics shown next to
    the consumption schedule (daily/weekly/yearly energy and the peak hour).
    """
    def __init__(self, activities: Iterable[Activity]):
        self.activities = list(activities)

        rows = []
        for day in range(7):
            for hour in range(24):
                litres, t_req = hourly_demand(self.activities, day, hour)
                rows.append({
                    "day_of_week": day,
                    "hour_of_day": hour,
                    "litres": litres,
                    "t_required": t_req,
                    "energy_kwh": draw_energy_kwh(litres, t_req),
                })
        self.df = pd.DataFrame(rows)

        self.weekly_kwh = float(self.df["energy_kwh"].sum())
        self.daily_kwh = self.weekly_kwh / 7.0
        self.yearly_kwh = self.weekly_kwh * WEEKS_PER_YEAR

        if self.df["energy_kwh"].max() > 0:
            peak = self.df.loc[self.df["energy_kwh"].idxmax()]
            self.peak_power_kw = float(peak["energy_kwh"])
            self.peak_liters = float(peak["litres"])
            self.peak_temp = float(peak["t_required"])
        else:
            self.peak_power_kw = 0.0
            self.peak_liters = 0.0
            self.peak_temp = 0.0

    def hourly_frame(self) -> pd.DataFrame:
        return self.df.copy()

    def metrics(self) -> dict:
        return {
            "daily_kwh": self.daily_kwh,
            "weekly_kwh": self.weekly_kwh,
            "yearly_kwh": self.yearly_kwh,
            "peak_power_kw": self.peak_power_kw,
            "peak_liters": self.peak_liters,
            "peak_temp": self.peak_temp,
        }
