# config.py
import os

# -----------------------------
# Paths (overridable from the environment)
# -----------------------------
ROOT_DIR = os.environ.get("DHW_ROOT_DIR", os.path.dirname(os.path.abspath(__file__)))
OUTPUT_DIR = os.path.join(ROOT_DIR, "results")
PROJECT_FILE = os.environ.get("DHW_PROJECT_FILE")   # None -> built-in default project

# -----------------------------
# Simulation knobs
# -----------------------------
HOURS_PER_YEAR      = 8760
DAYS_PER_MONTH      = 30.42                 # mean month length used for climate lookup
WEEKS_PER_YEAR      = 52.14
N_JOBS              = 2                     # existing + proposed run side by side
DEFAULT_DISTRICT    = "Lisboa"

# Report windows (hour index into the 8760 sequence)
TYPICAL_DAY_START   = 500
TYPICAL_WEEK_START  = 1000
COMFORT_TOLERANCE   = 0.5                   # °C below required before an hour counts as a failure

# -----------------------------
# Thermal model parameters
# -----------------------------
SIM_PARAMS = {
    "cp_water": 1.163,            # Wh/(L·K)
    "cold_water_temp": 15.0,      # °C mains water temp
    "initial_tank_temp": 45.0,    # °C
    "tank_min_temp": 15.0,        # °C
    "tank_max_temp": 95.0,        # °C
    "solar_conversion": 7.63,     # daily radiation total -> hourly model
    "delivery_tolerance": 2.0,    # °C, instantaneous eligibility margin
}

EQUIPMENT_DEFAULTS = {
    "max_output_temp": 60.0,      # °C, non-solar
    "solar_max_output_temp": 80.0,
    "cop": 3.5,
    "electric_efficiency": 0.98,
    "gas_efficiency": 0.88,
    "optical_efficiency": 0.75,
}

HP_COP_PARAMS = {
    "min_cop": 1.5,
    "ambient_ref": 20.0,          # °C
    "ambient_coeff": 0.03,        # per K
    "target_ref": 45.0,           # °C
    "target_coeff": 0.015,        # per K
}

# setpoint = max(t_required + margin, floor)
SAFETY_SETPOINTS = {
    "mixing_valve": {"margin": 2.0, "floor": 55.0},
    "direct":       {"margin": 1.0, "floor": 45.0},
}

# Lower value fires first; SOLAR is never dispatched
DISPATCH_PRIORITY = {
    "HP": 1,
    "ELECTRIC_TANK": 2,
    "BOILER": 3,
    "HEATER": 4,
}

# Diagnostics
DIAG_PRINTS = False            # set True to print a run summary per scenario
