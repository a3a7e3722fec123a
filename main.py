"""
main.py

Run the existing and proposed DHW systems of one project for a full year.
Outputs one Excel workbook, one 8760-row CSV per scenario and a monthly chart.

The project comes from config.PROJECT_FILE (env DHW_PROJECT_FILE) when set,
otherwise the built-in default project is used.
"""
import os
os.environ["MPLBACKEND"] = "Agg"

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt

import numpy as np

from config import OUTPUT_DIR, PROJECT_FILE, N_JOBS
from demand import DemandProfile
from finance import compare_scenarios
from project import default_project, load_project
from simulate import simulate_scenarios
from utils import MONTH_NAMES
from summary import (
    export_hourly_csv, monthly_summary, scenario_kpis, write_workbook,
)


def _safe_name(name: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in name).strip("_") or "project"


def plot_monthly(scenarios: dict, out_png: str):
    """Side-by-side monthly cost bars for each scenario."""
    fig, ax = plt.subplots(figsize=(9, 4.5))
    width = 0.8 / max(1, len(scenarios))
    x = np.arange(12)
    for i, (name, results) in enumerate(scenarios.items()):
        monthly = monthly_summary(results)
        ax.bar(x + i * width, monthly["cost"], width=width, label=name)
    ax.set_xticks(x + width * (len(scenarios) - 1) / 2)
    ax.set_xticklabels(MONTH_NAMES)
    ax.set_ylabel("Cost per month")
    ax.set_title("Monthly operating cost")
    ax.legend()
    fig.tight_layout(); fig.savefig(out_png, dpi=130); plt.close(fig)


def main():
    try:
        project = load_project(PROJECT_FILE) if PROJECT_FILE else default_project()
    except (OSError, ValueError, KeyError) as e:
        print(f"  ✖ Could not load project: {e}")
        return

    print(f"\n====== Running project: {project.name} ======")

    profile = DemandProfile(project.activities)
    m = profile.metrics()
    print(f"  Demand: {m['daily_kwh']:.2f} kWh/day | {m['yearly_kwh']:.0f} kWh/year | "
          f"peak {m['peak_power_kw']:.2f} kW ({m['peak_liters']:.0f} L/h @ {m['peak_temp']:.1f} °C)")
    if not project.activities:
        print("  ⚠ Project has no activities; results will carry no demand.")

    scenarios = simulate_scenarios(project, n_jobs=N_JOBS)

    for name, results in scenarios.items():
        k = scenario_kpis(results)
        print(f"  → {name}: elec {k['elec_kwh']:.1f} kWh | gas {k['gas_kwh']:.1f} kWh | "
              f"solar {k['solar_kwh']:.1f} kWh | cost {k['cost']:.2f} | "
              f"comfort failures {k['failure_hours']} h")

    comparison = compare_scenarios(scenarios["existing"], scenarios["proposed"], project.budget)
    payback = comparison["payback_years"]
    print(f"  Savings: {comparison['annual_savings']:.2f}/year ({comparison['savings_pct']:.1f}%) | "
          f"CAPEX {comparison['capex']:.2f} | "
          + (f"payback {payback:.1f} years" if np.isfinite(payback) else "no payback"))

    stub = _safe_name(project.name)
    out_dir = os.path.join(OUTPUT_DIR, stub)
    for name, results in scenarios.items():
        out_csv = export_hourly_csv(results, os.path.join(out_dir, f"8760h_{stub}_{name}.csv"))
        print(f"  ✅ Saved: {out_csv}")

    out_xlsx = write_workbook(os.path.join(out_dir, f"results_{stub}.xlsx"), scenarios, comparison)
    print(f"  ✅ Saved: {out_xlsx}")

    try:
        out_png = os.path.join(out_dir, f"monthly_cost_{stub}.png")
        plot_monthly(scenarios, out_png)
        print(f"  📈 Saved chart: {out_png}")
    except Exception as e:
        print(f"  ⚠ Plotting failed: {e}")


if __name__ == "__main__":
    main()
