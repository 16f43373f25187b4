"""Global default values and constants.

All numeric constants used throughout the pv_design_model package must be
defined here rather than as inline literals. Import from this module wherever a
constant is needed to ensure a single source of truth and full traceability.

Standardised catalogs are tuples and lookup tables are read-only mappings so
neither can be mutated at runtime.
"""

from collections.abc import Mapping
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Solar geometry
# ---------------------------------------------------------------------------

EARTH_AXIAL_TILT_DEG: float = 23.45
"""Amplitude of the solar declination approximation in degrees."""

DAYS_PER_YEAR: int = 365
"""Period of the declination approximation (non-leap calendar)."""

DECLINATION_DAY_OFFSET: int = 284
"""Day offset of the Cooper declination formula."""

DEGREES_PER_HOUR: float = 15.0
"""Earth rotation per hour of solar time (hour-angle step)."""

SOLAR_NOON_HOUR: float = 12.0
"""Clock hour treated as solar noon (no equation-of-time correction)."""

AZIMUTH_SOUTH_DEG: float = 180.0
"""Azimuth of due South in the 0 = North, clockwise convention."""

FULL_CIRCLE_DEG: float = 360.0
"""Degrees in a full circle."""

AZIMUTH_DENOMINATOR_EPS: float = 1e-12
"""Denominator magnitude below which the azimuth ratio is treated as clamped."""

SUMMER_SOLSTICE_DAY: int = 172
"""Day of year of the June solstice (21 June, non-leap)."""

EQUINOX_DAY: int = 80
"""Day of year of the March equinox (21 March, non-leap)."""

WINTER_SOLSTICE_DAY: int = 355
"""Day of year of the December solstice (21 December, non-leap).

Shadow spacing is designed for this day: lowest sun of the year, longest
shadows.
"""

SUN_PATH_STEP_DEG: float = 2.0
"""Default hour-angle resolution of sun path traces in degrees."""

SUN_PATH_HOUR_ANGLE_LIMIT_DEG: float = 180.0
"""Sun path traces span hour angles in [-limit, +limit]."""

# ---------------------------------------------------------------------------
# Tilt optimisation
# ---------------------------------------------------------------------------

SEASONAL_TILT_OFFSET_DEG: float = 15.0
"""Winter tilt = |lat| + offset, summer tilt = |lat| - offset."""

TILT_MIN_DEG: float = 0.0
"""Lower clamp for seasonal tilt angles."""

TILT_MAX_DEG: float = 90.0
"""Upper clamp for seasonal tilt angles."""

LOW_LATITUDE_THRESHOLD_DEG: float = 10.0
"""Below this |latitude| the annual tilt equals the latitude itself."""

ANNUAL_TILT_FACTOR: float = 0.87
"""Empirical annual-yield correction applied to |latitude| above the threshold."""

# ---------------------------------------------------------------------------
# String configuration search
# ---------------------------------------------------------------------------

STC_TEMPERATURE_C: float = 25.0
"""Standard test condition cell temperature in °C (datasheet reference)."""

VMP_TEMP_COEFF_PCT_PER_C: float = -0.4
"""Assumed Vmp temperature coefficient (%/°C) for hot-weather voltage droop."""

DC_AC_OVERSIZING_FACTOR: float = 1.3
"""Maximum DC/AC ratio allowed when bounding the total panel count (130 %)."""

MAX_RANKED_CONFIGURATIONS: int = 10
"""Number of best-ranked string configurations returned by the search."""

DUAL_STRING_MIN_MPPT_CHANNELS: int = 2
"""Minimum MPPT channel count for dual-string candidates."""

VIOLATION_CURRENT_LIMIT: str = "current_limit"
"""Violation name: panel Isc reaches the inverter input current limit."""

# ---------------------------------------------------------------------------
# Cable sizing
# ---------------------------------------------------------------------------

MATERIAL_COPPER: str = "copper"
"""Identifier for copper conductors."""

MATERIAL_ALUMINIUM: str = "aluminium"
"""Identifier for aluminium conductors."""

CONDUCTIVITY_BY_MATERIAL: Mapping[str, float] = MappingProxyType({
    MATERIAL_COPPER: 56.0,
    MATERIAL_ALUMINIUM: 35.0,
})
"""Conductivity in m/(Ω·mm²) per conductor material."""

MATERIAL_ALIASES: Mapping[str, str] = MappingProxyType({
    "cu": MATERIAL_COPPER,
    "copper": MATERIAL_COPPER,
    "al": MATERIAL_ALUMINIUM,
    "aluminium": MATERIAL_ALUMINIUM,
    "aluminum": MATERIAL_ALUMINIUM,
})
"""Accepted spellings of the conductor material."""

ROUND_TRIP_LENGTH_FACTOR: float = 2.0
"""Outbound + return conductor length multiplier."""

STANDARD_CABLE_SECTIONS_MM2: tuple[float, ...] = (
    1.5, 2.5, 4.0, 6.0, 10.0, 16.0, 25.0, 35.0, 50.0, 70.0, 95.0,
)
"""Commercial conductor cross-sections in mm², ascending."""

# ---------------------------------------------------------------------------
# Protection sizing
# ---------------------------------------------------------------------------

PROTECTION_SAFETY_FACTOR: float = 1.25
"""Continuous-current derating applied to overcurrent devices."""

DC_FUSE_RATINGS_A: tuple[float, ...] = (10.0, 12.0, 15.0, 20.0, 25.0, 30.0, 40.0)
"""Commercial DC string fuse ratings in A, ascending."""

AC_BREAKER_RATINGS_A: tuple[float, ...] = (
    10.0, 16.0, 20.0, 25.0, 32.0, 40.0, 50.0, 63.0, 80.0, 100.0, 125.0,
)
"""Commercial AC miniature circuit breaker ratings in A, ascending."""

SINGLE_PHASE: int = 1
"""Phase count of a single-phase grid connection."""

THREE_PHASE: int = 3
"""Phase count of a three-phase grid connection."""

THREE_PHASE_LINE_VOLTAGE_V: float = 400.0
"""Fixed line-to-line voltage assumed for three-phase output current."""

# ---------------------------------------------------------------------------
# Battery bank sizing
# ---------------------------------------------------------------------------

DOD_PRESETS: Mapping[str, float] = MappingProxyType({
    "lead_acid": 50.0,
    "lead_carbon": 70.0,
    "lithium": 90.0,
})
"""Recommended depth of discharge (%) per battery technology.

lead_acid: flooded / GEL / AGM; lead_carbon: lead-carbon and OPzS stationary
cells; lithium: LiFePO4.
"""

# ---------------------------------------------------------------------------
# Financial return
# ---------------------------------------------------------------------------

FINANCIAL_HORIZON_YEARS: int = 25
"""Horizon of the linear net-benefit extrapolation in years."""

# ---------------------------------------------------------------------------
# Energy yield
# ---------------------------------------------------------------------------

DEFAULT_PERFORMANCE_RATIO_PCT: float = 82.0
"""Typical performance ratio of a grid-tied installation in %."""

AVERAGE_DAYS_PER_MONTH: float = 30.41
"""Average month length used for the monthly yield figure."""

HSP_CLIMATE_ZONES: Mapping[int, tuple[str, float]] = MappingProxyType({
    1: ("Zone 1 (North)", 3.6),
    2: ("Zone 2 (Centre-North)", 4.0),
    3: ("Zone 3 (Centre)", 4.6),
    4: ("Zone 4 (South)", 5.0),
    5: ("Zone 5 (Far South)", 5.4),
})
"""Annual-average peak sun hours per climate zone (PVGIS-based estimates)."""

# ---------------------------------------------------------------------------
# Output defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR: str = "output"
"""Default root directory for design result files."""

CSV_DELIMITER: str = ","
"""Delimiter used in all input and output CSV files."""

FLOAT_PRECISION: int = 4
"""Number of decimal places for floating-point values in output CSVs."""

CURRENCY_PRECISION: int = 2
"""Number of decimal places for monetary values in output CSVs."""
