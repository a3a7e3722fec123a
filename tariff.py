# tariff.py
from dataclasses import dataclass


@dataclass(frozen=True)
class EnergyPrices:
    electricity: float      # currency/kWh
    gas: float              # currency/kWh
    water: float = 0.0      # currency/m³, reporting only


DEFAULT_PRICES = EnergyPrices(electricity=0.22, gas=0.12, water=2.5)


def hourly_cost(elec_kwh: float, gas_kwh: float, prices: EnergyPrices) -> float:
    """Cost of one hour of consumption at flat per-vector prices."""
    return float(elec_kwh) * prices.electricity + float(gas_kwh) * prices.gas
