"""
equipment.py

Heat production units, their dispatch order and the rule that turns
delivered heat into purchased electricity or gas.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from config import DISPATCH_PRIORITY, EQUIPMENT_DEFAULTS, HP_COP_PARAMS


class EquipmentType(str, Enum):
    HP = "HP"
    BOILER = "BOILER"
    SOLAR = "SOLAR"
    HEATER = "HEATER"
    ELECTRIC_TANK = "ELECTRIC_TANK"


@dataclass(frozen=True)
class Equipment:
    """
    A production unit tagged by ``type``.

    Fields that do not apply to a type stay None:
      HP             power, cop
      ELECTRIC_TANK  power, efficiency
      BOILER/HEATER  power, efficiency
      SOLAR          area, optical_efficiency
    """
    type: EquipmentType
    name: str = ""
    power: Optional[float] = None               # kW
    cop: Optional[float] = None
    efficiency: Optional[float] = None
    area: Optional[float] = None                # m²
    optical_efficiency: Optional[float] = None
    max_output_temp: Optional[float] = None     # °C
    is_existing: bool = False

    @property
    def is_solar(self) -> bool:
        return self.type is EquipmentType.SOLAR

    def power_kw(self) -> float:
        return float(self.power or 0.0)

    def max_temp(self, defaults: dict = EQUIPMENT_DEFAULTS) -> float:
        if self.max_output_temp is not None:
            return float(self.max_output_temp)
        if self.is_solar:
            return float(defaults["solar_max_output_temp"])
        return float(defaults["max_output_temp"])


def dispatch_order(equipments: Iterable[Equipment], priority: dict = DISPATCH_PRIORITY) -> list[Equipment]:
    """Non-solar units sorted by priority; ties keep their configured order."""
    auxiliaries = [eq for eq in equipments if not eq.is_solar]
    return sorted(auxiliaries, key=lambda eq: priority.get(eq.type.value, 99))


def find_solar(equipments: Iterable[Equipment]) -> Optional[Equipment]:
    return next((eq for eq in equipments if eq.is_solar), None)


def dynamic_cop(nominal_cop: float, t_ambient: float, target_temp: float,
                params: dict = HP_COP_PARAMS) -> float:
    """
    Heat pump COP de-rated for cold air and high delivery temperature,
    floored at ``min_cop``.
    """
    temp_corr = 1 + (t_ambient - params["ambient_ref"]) * params["ambient_coeff"]
    setpoint_corr = 1 - (target_temp - params["target_ref"]) * params["target_coeff"]
    return max(params["min_cop"], nominal_cop * temp_corr * setpoint_corr)


# -----------------------------
# Heat -> purchased energy, one entry per EquipmentType
# Each returns (electricity_kwh, gas_kwh)
# -----------------------------
def _heat_pump(eq, heat_kwh, t_ambient, target, cop_params, defaults):
    cop = dynamic_cop(eq.cop or defaults["cop"], t_ambient, target, cop_params)
    return heat_kwh / cop, 0.0


def _electric(eq, heat_kwh, t_ambient, target, cop_params, defaults):
    return heat_kwh / (eq.efficiency or defaults["electric_efficiency"]), 0.0


def _gas(eq, heat_kwh, t_ambient, target, cop_params, defaults):
    return 0.0, heat_kwh / (eq.efficiency or defaults["gas_efficiency"])


def _solar(eq, heat_kwh, t_ambient, target, cop_params, defaults):
    return 0.0, 0.0


_CONVERSION = {
    EquipmentType.HP: _heat_pump,
    EquipmentType.ELECTRIC_TANK: _electric,
    EquipmentType.BOILER: _gas,
    EquipmentType.HEATER: _gas,
    EquipmentType.SOLAR: _solar,
}


def purchased_energy(eq: Equipment, heat_kwh: float, t_ambient: float, target_temp: float,
                     cop_params: dict = HP_COP_PARAMS,
                     defaults: dict = EQUIPMENT_DEFAULTS) -> tuple[float, float]:
    """
    Electricity and gas (kWh) bought to deliver ``heat_kwh`` at ``target_temp``
    with outdoor air at ``t_ambient``.
    """
    return _CONVERSION[eq.type](eq, heat_kwh, t_ambient, target_temp, cop_params, defaults)
