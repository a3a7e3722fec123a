"""
project.py

Project and system configuration records, the built-in default project,
and loading of saved project documents (JSON, camelCase keys).
"""
from dataclasses import dataclass, field
from enum import Enum
import json
from typing import Optional

from climate import ClimateMonth, resolve_climate
from config import DEFAULT_DISTRICT
from demand import Activity
from equipment import Equipment, EquipmentType
from tank import Storage
from tariff import DEFAULT_PRICES, EnergyPrices


class OperatingMode(str, Enum):
    STORAGE = "storage"
    INSTANTANEOUS = "instantaneous"


@dataclass(frozen=True)
class System:
    name: str
    equipments: tuple = ()
    storage: Storage = Storage()
    has_mixing_valve: bool = False
    has_storage: bool = True
    description: str = ""

    @property
    def operating_mode(self) -> OperatingMode:
        return OperatingMode.STORAGE if self.has_storage else OperatingMode.INSTANTANEOUS


@dataclass(frozen=True)
class BudgetItem:
    description: str
    category: str
    quantity: float
    unit: str
    unit_price: float

    @property
    def total(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Project:
    name: str
    energy: EnergyPrices
    district: str
    activities: tuple
    existing_system: System
    proposed_system: System
    custom_climate: Optional[tuple] = None
    budget: tuple = field(default_factory=tuple)

    def climate(self) -> list[ClimateMonth]:
        return resolve_climate(self.district, self.custom_climate)


# -----------------------------
# Built-in presets
# -----------------------------
PRESET_ACTIVITIES = {
    "Residential T2 (3 people)": (
        Activity("Morning shower", 50, 40, (7, 8), (1, 2, 3, 4, 5)),
        Activity("Kitchen", 15, 45, (13, 20), (0, 1, 2, 3, 4, 5, 6)),
        Activity("Evening shower", 50, 40, (21, 22), (1, 2, 3, 4, 5)),
    ),
    "Medium restaurant": (
        Activity("Preparation", 100, 45, (10, 11, 12), (1, 2, 3, 4, 5, 6)),
        Activity("Dishwashing", 300, 55, (14, 15, 22, 23), (1, 2, 3, 4, 5, 6)),
    ),
}

DEFAULT_BUDGET = (
    BudgetItem("Removal of the old system to an authorised disposal site",
               "V - LABOUR AND SERVICES", 1, "un", 450),
    BudgetItem("Insulated multilayer piping with fittings",
               "III - HYDRAULICS AND DISTRIBUTION", 20, "m", 15),
    BudgetItem("Installation, testing and commissioning of the complete system",
               "V - LABOUR AND SERVICES", 1, "lot", 1500),
    BudgetItem("Electrical protection board and signal/power wiring",
               "IV - ELECTRICAL AND CONTROL", 1, "un", 350),
    BudgetItem("Thermostatic mixing valve and safety groups",
               "III - HYDRAULICS AND DISTRIBUTION", 1, "un", 280),
)


def default_project() -> Project:
    """Residential T2 in Lisboa: gas boiler baseline vs heat pump + solar."""
    return Project(
        name="Default project",
        energy=DEFAULT_PRICES,
        district=DEFAULT_DISTRICT,
        activities=PRESET_ACTIVITIES["Residential T2 (3 people)"],
        existing_system=System(
            name="Baseline system",
            storage=Storage(volume=200, loss_factor=1.5),
            equipments=(Equipment(EquipmentType.BOILER, "Gas water heater", efficiency=0.85),),
        ),
        proposed_system=System(
            name="Efficient system",
            storage=Storage(volume=300, loss_factor=1.2),
            equipments=(
                Equipment(EquipmentType.HP, "Heat pump", cop=3.5, power=2),
                Equipment(EquipmentType.SOLAR, "Solar collectors", area=4, optical_efficiency=0.75),
            ),
        ),
        budget=DEFAULT_BUDGET,
    )


# -----------------------------
# Saved documents
# -----------------------------
def _opt_float(d: dict, key: str) -> Optional[float]:
    value = d.get(key)
    return None if value is None else float(value)


def _activity_from_dict(d: dict) -> Activity:
    days = d.get("activeDays")
    return Activity(
        name=str(d.get("name", "")),
        volume=float(d.get("volume", 0.0)),
        temp_required=float(d.get("tempRequired", 0.0)),
        hours=tuple(int(h) for h in d.get("hours", ())),
        active_days=None if days is None else tuple(int(x) for x in days),
    )


def _equipment_from_dict(d: dict) -> Equipment:
    try:
        eq_type = EquipmentType(d["type"])
    except (KeyError, ValueError):
        raise ValueError(
            f"Unknown equipment type {d.get('type')!r}. Valid: {[t.value for t in EquipmentType]}"
        )
    return Equipment(
        type=eq_type,
        name=str(d.get("name", "")),
        power=_opt_float(d, "power"),
        cop=_opt_float(d, "cop"),
        efficiency=_opt_float(d, "efficiency"),
        area=_opt_float(d, "area"),
        optical_efficiency=_opt_float(d, "opticalEfficiency"),
        max_output_temp=_opt_float(d, "maxOutputTemp"),
        is_existing=bool(d.get("isExisting", False)),
    )


def _system_from_dict(d: dict) -> System:
    st = d.get("storage") or {}
    return System(
        name=str(d.get("name", "")),
        equipments=tuple(_equipment_from_dict(e) for e in d.get("equipments", ())),
        storage=Storage(
            volume=float(st.get("volume") or 0.0),
            loss_factor=float(st.get("lossFactor") or 0.0),
            is_existing=bool(st.get("isExisting", False)),
        ),
        has_mixing_valve=bool(d.get("hasMixingValve", False)),
        # only an explicit false switches to instantaneous production
        has_storage=d.get("hasStorage") is not False,
        description=str(d.get("description", "")),
    )


def _climate_from_rows(rows) -> tuple:
    if len(rows) != 12:
        raise ValueError(f"Custom climate must have 12 monthly rows, got {len(rows)}")
    return tuple(
        ClimateMonth(int(r.get("month", i + 1)), float(r["temp"]), float(r["radiation"]))
        for i, r in enumerate(rows)
    )


def project_from_dict(data: dict) -> Project:
    energy = data.get("energy") or {}
    custom = data.get("customClimate")
    admin = data.get("admin") or {}
    return Project(
        name=str(admin.get("projectDesignation") or data.get("name") or data.get("id") or "Project"),
        energy=EnergyPrices(
            electricity=float(energy.get("electricity", DEFAULT_PRICES.electricity)),
            gas=float(energy.get("gas", DEFAULT_PRICES.gas)),
            water=float(energy.get("water", DEFAULT_PRICES.water)),
        ),
        district=str(data.get("district", DEFAULT_DISTRICT)),
        activities=tuple(_activity_from_dict(a) for a in data.get("activities", ())),
        existing_system=_system_from_dict(data.get("existingSystem") or {}),
        proposed_system=_system_from_dict(data.get("proposedSystem") or {}),
        custom_climate=_climate_from_rows(custom) if custom else None,
        budget=tuple(
            BudgetItem(
                description=str(b.get("description", "")),
                category=str(b.get("category", "")),
                quantity=float(b.get("quantity", 0.0)),
                unit=str(b.get("unit", "")),
                unit_price=float(b.get("unitPrice", 0.0)),
            )
            for b in data.get("budget", ())
        ),
    )


def load_project(path: str) -> Project:
    with open(path, encoding="utf-8") as f:
        return project_from_dict(json.load(f))
