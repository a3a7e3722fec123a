# simulate.py

from dataclasses import dataclass, field
from functools import reduce
import math
from typing import NamedTuple

from joblib import Parallel, delayed

from config import (
    SIM_PARAMS, EQUIPMENT_DEFAULTS, HP_COP_PARAMS, SAFETY_SETPOINTS,
    DISPATCH_PRIORITY, HOURS_PER_YEAR, N_JOBS, DIAG_PRINTS,
)
from demand import hourly_demand
from equipment import Equipment, dispatch_order, find_solar, purchased_energy
from project import OperatingMode, Project, System
from tank import StorageTank
from tariff import hourly_cost
from utils import hour_to_calendar


@dataclass(frozen=True)
class SimulationConstants:
    """Physical constants and control rules the engine runs with."""
    cp_water: float = SIM_PARAMS["cp_water"]
    cold_water_temp: float = SIM_PARAMS["cold_water_temp"]
    initial_tank_temp: float = SIM_PARAMS["initial_tank_temp"]
    tank_min_temp: float = SIM_PARAMS["tank_min_temp"]
    tank_max_temp: float = SIM_PARAMS["tank_max_temp"]
    solar_conversion: float = SIM_PARAMS["solar_conversion"]
    delivery_tolerance: float = SIM_PARAMS["delivery_tolerance"]
    hours: int = HOURS_PER_YEAR
    equipment_defaults: dict = field(default_factory=lambda: dict(EQUIPMENT_DEFAULTS))
    cop_params: dict = field(default_factory=lambda: dict(HP_COP_PARAMS))
    safety_setpoints: dict = field(default_factory=lambda: {k: dict(v) for k, v in SAFETY_SETPOINTS.items()})
    priority: dict = field(default_factory=lambda: dict(DISPATCH_PRIORITY))

    def safety_setpoint(self, t_required: float, mixing_valve: bool) -> float:
        rule = self.safety_setpoints["mixing_valve" if mixing_valve else "direct"]
        return max(t_required + rule["margin"], rule["floor"])


DEFAULT_CONSTANTS = SimulationConstants()


class EnergyUse(NamedTuple):
    electricity: float = 0.0    # kWh
    gas: float = 0.0            # kWh

    def plus(self, elec: float, gas: float) -> "EnergyUse":
        return EnergyUse(self.electricity + elec, self.gas + gas)


@dataclass(frozen=True)
class HourlyResult:
    hour: int
    day_of_week: int
    demand_kwh: float
    demand_l: float
    temp_tank: float
    t_required: float
    t_delivered: float
    consumed_elec_kwh: float
    consumed_gas_kwh: float
    solar_gain_kwh: float
    cost: float


# -----------------------------
# Solar
# -----------------------------
def solar_availability(hour_of_day: int) -> float:
    """Sine bell between 06:00 and 18:00, peak at noon; exactly 0 at night."""
    if hour_of_day <= 6 or hour_of_day >= 18:
        return 0.0
    return max(0.0, math.sin((hour_of_day - 6) * math.pi / 12))


def solar_gain(solar: Equipment, tank: StorageTank, radiation: float, hour_of_day: int,
               constants: SimulationConstants = DEFAULT_CONSTANTS) -> float:
    """Collector yield (kWh) for the hour, limited to what lifts the tank to the collector's max."""
    max_temp = solar.max_temp(constants.equipment_defaults)
    if tank.temp >= max_temp:
        return 0.0
    optical = solar.optical_efficiency or constants.equipment_defaults["optical_efficiency"]
    gain = (radiation * float(solar.area or 0.0) * optical * solar_availability(hour_of_day)
            / constants.solar_conversion)
    return max(0.0, min(gain, tank.energy_to_reach(max_temp)))


# -----------------------------
# Auxiliary dispatch
# -----------------------------
def storage_dispatch(equipments, tank: StorageTank, setpoint: float, t_ambient: float,
                     constants: SimulationConstants = DEFAULT_CONSTANTS) -> tuple[float, EnergyUse]:
    """
    Fold the priority-ordered units over (tank_temp, energy_use).

    Each unit sees the temperature already raised by the units before it.
    Returns the new tank temperature and the purchased energy; the tank
    object itself is not modified.
    """
    def step(state, eq):
        temp, used = state
        eq_max = eq.max_temp(constants.equipment_defaults)
        if temp >= eq_max or temp >= setpoint:
            return state
        target = min(setpoint, eq_max)
        heat = max(0.0, min(eq.power_kw(), tank.energy_to_reach(target, from_temp=temp)))
        elec, gas = purchased_energy(eq, heat, t_ambient, target,
                                     constants.cop_params, constants.equipment_defaults)
        return temp + tank.temp_rise(heat), used.plus(elec, gas)

    ordered = dispatch_order(equipments, constants.priority)
    return reduce(step, ordered, (tank.temp, EnergyUse()))


def instantaneous_dispatch(equipments, energy_required: float, t_required: float, t_ambient: float,
                           constants: SimulationConstants = DEFAULT_CONSTANTS) -> tuple[float, EnergyUse]:
    """
    Fold the priority-ordered units over (energy_provided, energy_use).

    A unit only takes part when it can reach the required temperature within
    the delivery tolerance.
    """
    def step(state, eq):
        provided, used = state
        remaining = energy_required - provided
        if remaining <= 0:
            return state
        if eq.max_temp(constants.equipment_defaults) < t_required - constants.delivery_tolerance:
            return state
        heat = max(0.0, min(eq.power_kw(), remaining))
        elec, gas = purchased_energy(eq, heat, t_ambient, t_required,
                                     constants.cop_params, constants.equipment_defaults)
        return provided + heat, used.plus(elec, gas)

    ordered = dispatch_order(equipments, constants.priority)
    return reduce(step, ordered, (0.0, EnergyUse()))


# -----------------------------
# One hour per operating mode
# -----------------------------
def _instantaneous_hour(system: System, litres: float, t_required: float, t_ambient: float,
                        constants: SimulationConstants):
    cold = constants.cold_water_temp
    if litres <= 0:
        return cold, 0.0, EnergyUse(), 0.0

    energy_required = max(0.0, litres * constants.cp_water * (t_required - cold) / 1000.0)
    provided, used = instantaneous_dispatch(system.equipments, energy_required, t_required,
                                            t_ambient, constants)
    t_delivered = cold + provided * 1000.0 / (litres * constants.cp_water)
    if system.has_mixing_valve:
        t_delivered = min(t_delivered, t_required)
    delivered_kwh = litres * constants.cp_water * (max(t_delivered, cold) - cold) / 1000.0
    return t_delivered, delivered_kwh, used, 0.0


def _storage_hour(system: System, tank: StorageTank, solar, litres: float, t_required: float,
                  t_ambient: float, radiation: float, hour_of_day: int,
                  constants: SimulationConstants):
    # a) solar yield is evaluated on the start-of-hour temperature
    q_solar = solar_gain(solar, tank, radiation, hour_of_day, constants) if solar is not None else 0.0

    # b) auxiliary heating towards the safety setpoint
    setpoint = constants.safety_setpoint(t_required, system.has_mixing_valve)
    tank.temp, used = storage_dispatch(system.equipments, tank, setpoint, t_ambient, constants)

    # c) solar, still limited to the collector's max after auxiliary heating
    if solar is not None:
        collector_max = solar.max_temp(constants.equipment_defaults)
        q_solar = max(0.0, min(q_solar, tank.energy_to_reach(collector_max)))
    tank.add_heat(q_solar)

    # d) standing loss, e) draw-off, f) bounds
    tank.apply_loss(t_ambient)
    t_delivered, extracted_kwh = tank.draw(litres, t_required, system.has_mixing_valve)
    tank.clamp()
    return t_delivered, extracted_kwh, used, q_solar


def run_simulation(project: Project, system: System,
                   constants: SimulationConstants = DEFAULT_CONSTANTS) -> list[HourlyResult]:
    """
    Simulate one system for a full year of hourly steps.

    Storage mode carries the tank temperature from hour to hour; instantaneous
    mode overwrites it every hour with the delivered temperature. Always
    returns ``constants.hours`` records, in hour order.
    """
    climate = project.climate()
    mode = system.operating_mode
    solar = find_solar(system.equipments)

    tank = StorageTank(system.storage, cp=constants.cp_water, cold_temp=constants.cold_water_temp,
                       min_temp=constants.tank_min_temp, max_temp=constants.tank_max_temp)
    tank.initialize(constants.initial_tank_temp)

    results: list[HourlyResult] = []
    for h in range(constants.hours):
        _, month, hour_of_day, day_of_week = hour_to_calendar(h)
        month_climate = climate[month]
        t_ambient = float(month_climate.temp)

        litres, t_required = hourly_demand(project.activities, day_of_week, hour_of_day)

        if mode is OperatingMode.INSTANTANEOUS:
            t_delivered, demand_kwh, used, q_solar = _instantaneous_hour(
                system, litres, t_required, t_ambient, constants)
            tank.temp = t_delivered
        else:
            t_delivered, demand_kwh, used, q_solar = _storage_hour(
                system, tank, solar, litres, t_required, t_ambient,
                float(month_climate.radiation), hour_of_day, constants)

        results.append(HourlyResult(
            hour=h,
            day_of_week=day_of_week,
            demand_kwh=demand_kwh,
            demand_l=litres,
            temp_tank=tank.temp,
            t_required=t_required,
            t_delivered=t_delivered,
            consumed_elec_kwh=used.electricity,
            consumed_gas_kwh=used.gas,
            solar_gain_kwh=q_solar,
            cost=hourly_cost(used.electricity, used.gas, project.energy),
        ))

    if DIAG_PRINTS and results:
        tag = system.name or mode.value
        temps = [r.temp_tank for r in results]
        print(f"[{tag}] MODE: {mode.value} | HOURS={len(results)}")
        print(f"[{tag}] Tank/delivery temp: min {min(temps):.1f} | max {max(temps):.1f} | "
              f"mean {sum(temps) / len(temps):.1f} °C")
        print(f"[{tag}] Elec (kWh): {sum(r.consumed_elec_kwh for r in results):.1f} | "
              f"Gas (kWh): {sum(r.consumed_gas_kwh for r in results):.1f} | "
              f"Solar (kWh): {sum(r.solar_gain_kwh for r in results):.1f} | "
              f"Cost: {sum(r.cost for r in results):.2f}")

    return results


def simulate_scenarios(project: Project, n_jobs: int = N_JOBS,
                       constants: SimulationConstants = DEFAULT_CONSTANTS) -> dict:
    """Run the existing and proposed systems as two independent jobs."""
    systems = {"existing": project.existing_system, "proposed": project.proposed_system}
    runs = Parallel(n_jobs=n_jobs, backend="loky")(
        delayed(run_simulation)(project, system, constants)
        for system in systems.values()
    )
    return dict(zip(systems.keys(), runs))
