import pandas as pd
import pytest

from conftest import flat_climate, make_project
from demand import Activity
from equipment import Equipment, EquipmentType
from project import System
from simulate import HourlyResult, run_simulation
from summary import (
    AnnualTotals, aggregate_results, comfort_failures, export_hourly_csv, monthly_summary,
    results_to_frame, scenario_kpis, typical_day, typical_week, write_workbook,
)
from tank import Storage


@pytest.fixture(scope="module")
def hp_solar_results():
    system = System(
        name="hp+solar",
        equipments=(Equipment(EquipmentType.HP, power=2, cop=3.5),
                    Equipment(EquipmentType.SOLAR, area=4)),
        storage=Storage(volume=300, loss_factor=1.2),
    )
    acts = (Activity("shower", 100, 40, (7, 8, 21), tuple(range(1, 6))),
            Activity("kitchen", 20, 50, (13,)))
    return run_simulation(make_project(acts, system, climate=flat_climate(temp=12, radiation=4)), system)


def _record(hour, **kw):
    base = dict(hour=hour, day_of_week=(hour // 24) % 7, demand_kwh=0.0, demand_l=0.0, temp_tank=45.0,
                t_required=0.0, t_delivered=0.0, consumed_elec_kwh=0.0, consumed_gas_kwh=0.0,
                solar_gain_kwh=0.0, cost=0.0)
    base.update(kw)
    return HourlyResult(**base)


def test_aggregate_sums_each_field():
    results = [
        _record(0, consumed_elec_kwh=1.0, cost=0.2, demand_kwh=3.0),
        _record(1, consumed_gas_kwh=2.0, cost=0.24, solar_gain_kwh=0.5),
    ]
    totals = aggregate_results(results)
    assert totals == AnnualTotals(elec_kwh=1.0, gas_kwh=2.0, solar_kwh=0.5, demand_kwh=3.0,
                                  cost=pytest.approx(0.44))


def test_aggregate_empty():
    assert aggregate_results([]) == AnnualTotals()


@pytest.mark.parametrize("split", [0, 1, 1234, 4380, 8759, 8760])
def test_aggregate_is_additive_over_splits(hp_solar_results, split):
    whole = aggregate_results(hp_solar_results).as_dict()
    parts = (aggregate_results(hp_solar_results[:split]) + aggregate_results(hp_solar_results[split:])).as_dict()
    for key, value in whole.items():
        assert parts[key] == pytest.approx(value)


def test_results_frame_columns(hp_solar_results):
    df = results_to_frame(hp_solar_results)
    assert len(df) == 8760
    assert {"hour", "day_of_week", "temp_tank", "cost", "month", "hour_of_day"} <= set(df.columns)
    assert df["month"].iloc[-1] == 11
    assert df["hour_of_day"].iloc[30] == 6


def test_monthly_summary_matches_annual(hp_solar_results):
    monthly = monthly_summary(hp_solar_results)
    totals = aggregate_results(hp_solar_results)
    assert list(monthly["name"]) == ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                                     "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    assert monthly["cost"].sum() == pytest.approx(totals.cost)
    assert monthly["solar"].sum() == pytest.approx(totals.solar_kwh)
    assert monthly["elec"].sum() == pytest.approx(totals.elec_kwh)


def test_typical_windows(hp_solar_results):
    day = typical_day(hp_solar_results)
    week = typical_week(hp_solar_results)
    assert len(day) == 24
    assert list(day["hour_of_day"]) == [(500 + i) % 24 for i in range(24)]
    assert len(week) == 168
    assert set(week["day"]) == {"Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"}


def test_comfort_failures_counts_cold_deliveries():
    results = [
        _record(7, demand_l=10, t_required=40.0, t_delivered=35.0),
        _record(8, demand_l=10, t_required=40.0, t_delivered=39.8),
        _record(31, demand_l=10, t_required=40.0, t_delivered=20.0),
        _record(12, demand_l=0, t_required=0.0, t_delivered=0.0),
    ]
    fails = comfort_failures(results)
    assert fails["failure_hours"] == 2
    assert fails["demand_hours"] == 3
    assert fails["by_hour"][7] == 2
    assert sum(fails["by_hour"]) == 2
    assert fails["by_day"]["Sun"] == 1
    assert fails["by_day"]["Mon"] == 1


def test_scenario_kpis(hp_solar_results):
    k = scenario_kpis(hp_solar_results)
    assert k["solar_kwh"] > 0
    assert 0 <= k["solar_fraction"]
    assert 15 <= k["avg_temp"] <= 95


def test_export_hourly_csv(tmp_path, hp_solar_results):
    path = export_hourly_csv(hp_solar_results, str(tmp_path / "out" / "8760h.csv"))
    df = pd.read_csv(path)
    assert len(df) == 8760
    assert list(df.columns) == ["hour", "day_of_week", "demand_kwh", "demand_l", "temp_tank", "t_required",
                                "t_delivered", "consumed_elec_kwh", "consumed_gas_kwh", "solar_gain_kwh", "cost"]


def test_write_workbook(tmp_path, hp_solar_results):
    path = write_workbook(str(tmp_path / "results.xlsx"),
                          {"existing": hp_solar_results, "proposed": hp_solar_results},
                          {"annual_savings": 0.0, "capex": 100.0})
    assert (tmp_path / "results.xlsx").exists()
    assert path.endswith("results.xlsx")
