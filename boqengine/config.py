"""Global configuration: defaults, limits and catalog constants."""

# Storey height used when a level has no level above it
DEFAULT_STOREY_HEIGHT_M = 3.0

# Lap length = bar diameter (mm) x multiplier / 1000
DEFAULT_LAP_MULTIPLIER = 40

# Wall finishes: openings smaller than this are absorbed into wastage
DEFAULT_DEDUCTION_THRESHOLD_M2 = 0.5
DEFAULT_DEDUCTION_TYPES = ("door", "window")

# Slab main-bar spacing when the template gives neither spacing nor count
DEFAULT_SLAB_BAR_SPACING_M = 0.15

# Catalog search limits
CATALOG_SEARCH_DEFAULT_LIMIT = 1000
CATALOG_SEARCH_MAX_LIMIT = 5000

# Number of calculation runs visible per project
RUN_HISTORY_LIMIT = 10

# Default pay items for structural trades
DEFAULT_CONCRETE_ITEM = "900 (1) a"
DEFAULT_FORMWORK_ITEM = "903 (1)"

# Roofing and structural steel defaults: key -> (item number, unit)
ROOFING_DPWH_ITEMS = {
    "truss_steel": ("1047 (8) a", "Kilogram"),
    "purlin_steel": ("1047 (8) b", "Kilogram"),
    "bracing_steel": ("1047 (4) b", "Each"),
    "ridge_cap": ("1013 (2) a", "Linear Meter"),
}

# Truss and framing constants
DEFAULT_PURLIN_SPACING_MM = 600
DEFAULT_TRUSS_SPACING_MM = 600
DEFAULT_BRACING_INTERVAL_MM = 6000
TRUSS_SPAN_LIMITS_M = (3.0, 30.0)
MAX_TRUSS_SPACING_MM = 3000

# Takeoff unit symbols and their catalog unit names
UNIT_ALIASES = {
    "m³": "Cubic Meter",
    "m3": "Cubic Meter",
    "m²": "Square Meter",
    "m2": "Square Meter",
    "m": "Linear Meter",
    "lm": "Linear Meter",
    "kg": "Kilogram",
    "ea": "Each",
    "pc": "Each",
    "pcs": "Each",
}
