"""
climate.py

Monthly climate tables (mean air temperature and daily radiation) per district,
and resolution of the table a project runs with.
"""
from dataclasses import dataclass
import math

from config import DEFAULT_DISTRICT


@dataclass(frozen=True)
class ClimateMonth:
    month: int          # 1..12
    temp: float         # mean air temperature, °C
    radiation: float    # mean daily radiation, kWh/m²/day


def _sinusoid(temp_base: float, temp_amp: float, rad_base: float, rad_amp: float) -> list[ClimateMonth]:
    # Approximate table for districts without measured monthly data
    return [
        ClimateMonth(i + 1, temp_base + math.sin(i / 2) * temp_amp, rad_base + math.sin(i / 2) * rad_amp)
        for i in range(12)
    ]


def _measured(rows) -> list[ClimateMonth]:
    return [ClimateMonth(i + 1, float(t), float(r)) for i, (t, r) in enumerate(rows)]


DISTRICTS_CLIMATE: dict[str, list[ClimateMonth]] = {
    "Aveiro":                 _sinusoid(11, 8, 2.0, 5.0),
    "Beja":                   _sinusoid(10, 14, 2.5, 6.0),
    "Braga":                  _sinusoid(9, 10, 1.8, 6.0),
    "Bragança":               _sinusoid(5, 15, 2.0, 5.5),
    "Castelo Branco":         _sinusoid(8, 16, 2.2, 6.0),
    "Coimbra":                _sinusoid(10, 12, 2.0, 5.5),
    "Évora":                  _sinusoid(10, 15, 2.4, 6.0),
    "Faro": _measured([
        (12.0, 2.8), (12.9, 3.7), (14.8, 5.3), (16.4, 6.6), (19.0, 7.9), (22.4, 8.8),
        (24.6, 9.2), (24.8, 8.3), (22.9, 6.4), (19.6, 4.4), (15.6, 3.0), (13.0, 2.5),
    ]),
    "Guarda":                 _sinusoid(4, 14, 1.9, 6.0),
    "Leiria":                 _sinusoid(11, 10, 2.1, 5.5),
    "Lisboa": _measured([
        (11.6, 2.3), (12.7, 3.1), (14.9, 4.8), (15.9, 5.9), (18.0, 7.2), (21.2, 7.9),
        (23.1, 8.3), (23.5, 7.6), (22.1, 5.8), (18.8, 3.8), (15.0, 2.6), (12.4, 2.0),
    ]),
    "Portalegre":             _sinusoid(9, 15, 2.3, 6.0),
    "Porto": _measured([
        (9.5, 1.8), (10.4, 2.7), (12.5, 4.2), (14.1, 5.3), (16.5, 6.8), (19.4, 7.5),
        (21.2, 7.8), (21.4, 7.1), (19.8, 5.3), (16.6, 3.4), (12.8, 2.1), (10.5, 1.6),
    ]),
    "Santarém":               _sinusoid(11, 13, 2.2, 6.0),
    "Setúbal":                _sinusoid(12, 11, 2.4, 6.0),
    "Viana do Castelo":       _sinusoid(10, 9, 1.7, 5.5),
    "Vila Real":              _sinusoid(8, 13, 1.9, 5.5),
    "Viseu":                  _sinusoid(9, 13, 2.0, 6.0),
    "Funchal (Madeira)":      _sinusoid(16, 6, 3.0, 4.0),
    "Ponta Delgada (Açores)": _sinusoid(14, 7, 2.2, 4.5),
}


def get_district_climate(district: str) -> list[ClimateMonth]:
    """
    Return the 12-month table for the exact district key.
    Raises a clear error if the district is unknown.
    """
    try:
        return DISTRICTS_CLIMATE[district]
    except KeyError:
        raise KeyError(f"Climate data does not exist for district: {district}")


def resolve_climate(district: str, custom_climate=None) -> list[ClimateMonth]:
    """
    A custom table wins over the district table; an unknown district runs
    with the default district so a simulation always has a climate.
    """
    if custom_climate:
        return list(custom_climate)
    return DISTRICTS_CLIMATE.get(district, DISTRICTS_CLIMATE[DEFAULT_DISTRICT])
