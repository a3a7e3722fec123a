"""
tank.py

Single-node (fully mixed) hot water storage tank.
"""
from dataclasses import dataclass
import math

from config import SIM_PARAMS


@dataclass(frozen=True)
class Storage:
    volume: float = 0.0         # L
    loss_factor: float = 0.0    # W/K to ambient
    is_existing: bool = False


class StorageTank:
    """
    Lumped-capacitance tank.

    Attributes
    ----------
    temp : float
        Water temperature (°C), the only state carried between hours.
    mass : float
        Water mass (kg ≈ L). Zero or missing volume is treated as 1 L.
    loss_factor : float
        Static loss coefficient (W/K).
    cp : float
        Specific heat of water (Wh/L·K).
    """
    def __init__(self, storage: Storage, cp: float = SIM_PARAMS["cp_water"],
                 cold_temp: float = SIM_PARAMS["cold_water_temp"],
                 min_temp: float = SIM_PARAMS["tank_min_temp"],
                 max_temp: float = SIM_PARAMS["tank_max_temp"]):
        self.mass = float(storage.volume or 0.0) or 1.0
        self.loss_factor = float(storage.loss_factor or 0.0)
        self.cp = float(cp)
        self.cold_temp = float(cold_temp)
        self.min_temp = float(min_temp)
        self.max_temp = float(max_temp)
        self.temp = None

    def initialize(self, T0: float):
        self.temp = float(T0)

    @property
    def capacity_kwh_per_k(self) -> float:
        return self.mass * self.cp / 1000.0

    def energy_to_reach(self, target: float, from_temp: float = None) -> float:
        """kWh needed to take the tank from ``from_temp`` (default: now) to ``target``."""
        start = self.temp if from_temp is None else from_temp
        return self.capacity_kwh_per_k * (target - start)

    def temp_rise(self, energy_kwh: float) -> float:
        return energy_kwh / self.capacity_kwh_per_k

    def add_heat(self, energy_kwh: float):
        self.temp += self.temp_rise(energy_kwh)

    def apply_loss(self, t_ambient: float) -> float:
        """Remove one hour of static loss to ``t_ambient``; returns the loss in kWh."""
        loss_kwh = self.loss_factor * max(0.0, self.temp - t_ambient) / 1000.0
        self.temp -= self.temp_rise(loss_kwh)
        return loss_kwh

    def draw(self, litres: float, t_required: float, mixing_valve: bool) -> tuple[float, float]:
        """
        Extract one hour of hot water.

        Returns (t_delivered, extracted_kwh). With a mixing valve the outlet is
        blended down to ``t_required``; without one the tank temperature is
        delivered. No draw delivers nothing (0 °C, 0 kWh).
        """
        if litres <= 0:
            # 0 °C marks "nothing delivered", not a cold delivery
            return 0.0, 0.0
        t_delivered = min(self.temp, t_required) if mixing_valve else self.temp
        extracted_kwh = litres * self.cp * (max(t_delivered, self.cold_temp) - self.cold_temp) / 1000.0
        self.temp -= self.temp_rise(extracted_kwh)
        return t_delivered, extracted_kwh

    def clamp(self) -> float:
        # Ensure temperature is not NaN, then hold it within the tank bounds
        if math.isnan(self.temp):
            self.temp = self.min_temp
        self.temp = max(self.min_temp, min(self.max_temp, self.temp))
        return self.temp
