import pytest

from climate import ClimateMonth
from demand import Activity
from equipment import Equipment, EquipmentType
from project import Project, System
from tank import Storage
from tariff import EnergyPrices


def flat_climate(temp=15.0, radiation=5.0):
    return tuple(ClimateMonth(i + 1, temp, radiation) for i in range(12))


def make_project(activities=(), system=None, climate=None, prices=None):
    system = system or System(name="empty")
    return Project(
        name="test",
        energy=prices or EnergyPrices(electricity=0.2, gas=0.1),
        district="Lisboa",
        activities=tuple(activities),
        existing_system=system,
        proposed_system=system,
        custom_climate=climate if climate is not None else flat_climate(),
    )


@pytest.fixture
def constant_draw():
    # 48 L/day spread over every hour of every day -> 2 L/h at 45 °C
    return Activity("constant", 48, 45, tuple(range(24)), tuple(range(7)))


@pytest.fixture
def electric_tank_system():
    return System(
        name="electric tank",
        equipments=(Equipment(EquipmentType.ELECTRIC_TANK, "tank", power=2, efficiency=0.98),),
        storage=Storage(volume=200, loss_factor=0),
    )
