"""Embedded DPWH Volume III pay items.

A working subset of the catalog, enough to reconcile structural, finish,
roofing and schedule takeoffs without loading the full catalog file.
Each entry: (item number, description, unit, category, trade).
"""

SEED_CATALOG_VERSION = "dpwh-vol3-2023-seed"

SEED_ITEMS: list[tuple[str, str, str, str, str]] = [
    # Earthwork
    ("800 (1)", "Clearing and Grubbing", "Square Meter", "Site Preparation", "Earthwork"),
    ("800 (3) a1", "Individual Removal of Trees, Small", "Each", "Site Preparation", "Earthwork"),
    ("801 (1)", "Removal of Structures and Obstructions", "Lump Sum", "Site Preparation", "Earthwork"),
    ("803 (1) a", "Structure Excavation (Common Soil)", "Cubic Meter", "Excavation", "Earthwork"),
    ("804 (1) a", "Embankment from Structure Excavation", "Cubic Meter", "Embankment", "Earthwork"),
    # Concrete and reinforcement
    ("900 (1) a", "Structural Concrete, Class A, 28 days", "Cubic Meter", "Concrete", "Concrete"),
    ("900 (1) c", "Structural Concrete, Class C, 28 days", "Cubic Meter", "Concrete", "Concrete"),
    ("902 (1) a1", "Reinforcing Steel (Deformed), Grade 40", "Kilogram", "Reinforcing Steel", "Rebar"),
    ("902 (1) a2", "Reinforcing Steel (Deformed), Grade 60", "Kilogram", "Reinforcing Steel", "Rebar"),
    ("902 (1) a3", "Reinforcing Steel (Deformed), Grade 80", "Kilogram", "Reinforcing Steel", "Rebar"),
    ("902 (2) a1", "Reinforcing Steel (Epoxy Coated), Grade 40", "Kilogram", "Reinforcing Steel", "Rebar"),
    ("902 (2) a2", "Reinforcing Steel (Epoxy Coated), Grade 60", "Kilogram", "Reinforcing Steel", "Rebar"),
    ("902 (2) a3", "Reinforcing Steel (Epoxy Coated), Grade 80", "Kilogram", "Reinforcing Steel", "Rebar"),
    ("903 (1)", "Formworks and Falseworks", "Square Meter", "Formworks", "Formwork"),
    # Finishes
    ("1018 (1)", "Ceramic Tile Floor Finish", "Square Meter", "Floor Finishes", "Finishes"),
    ("1019 (1)", "Granite Tile Floor Finish", "Square Meter", "Floor Finishes", "Finishes"),
    ("1021 (1)", "Cement Floor Finish", "Square Meter", "Floor Finishes", "Finishes"),
    ("1027 (1)", "Cement Plaster Finish", "Square Meter", "Wall Finishes", "Finishes"),
    ("1032 (1) a", "Painting Works, Masonry/Concrete", "Square Meter", "Painting", "Finishes"),
    ("1032 (1) b", "Painting Works, Wood", "Square Meter", "Painting", "Finishes"),
    ("1003 (1) a", "Ceiling, Fiber Cement Board on Metal Furring", "Square Meter", "Ceiling", "Finishes"),
    ("1003 (1) b", "Ceiling, Gypsum Board on Metal Furring", "Square Meter", "Ceiling", "Finishes"),
    # Roofing and structural steel
    ("1013 (1)", "Corrugated Metal Roofing, Pre-painted", "Square Meter", "Roofing", "Roofing"),
    ("1013 (2) a", "Fabricated Metal Roofing Accessory, Ridge Roll", "Linear Meter", "Roofing", "Roofing"),
    ("1047 (4) b", "Turnbuckle with Sag Rod Bracing", "Each", "Structural Steel", "Structural Steel"),
    ("1047 (5) a", "Anchor Bolts", "Kilogram", "Structural Steel", "Structural Steel"),
    ("1047 (5) b", "Sag Rods", "Kilogram", "Structural Steel", "Structural Steel"),
    ("1047 (5) d", "Steel Plates", "Kilogram", "Structural Steel", "Structural Steel"),
    ("1047 (8) a", "Structural Steel Truss", "Kilogram", "Structural Steel", "Structural Steel"),
    ("1047 (8) b", "Structural Steel Purlins", "Kilogram", "Structural Steel", "Structural Steel"),
    # Doors, windows, plumbing, carpentry
    ("1008 (1)", "Aluminum Glass Windows, Sliding", "Square Meter", "Windows", "Doors & Windows"),
    ("1010 (2) a", "Wooden Panel Door", "Each", "Doors", "Doors & Windows"),
    ("1006 (1)", "Steel Door", "Each", "Doors", "Doors & Windows"),
    ("1001 (1)", "Storm Drainage and Downspout", "Linear Meter", "Plumbing", "Plumbing"),
    ("1002 (1)", "Plumbing Fixtures", "Each", "Plumbing", "Plumbing"),
    ("1002 (2)", "Sanitary Sewer Line", "Linear Meter", "Plumbing", "Plumbing"),
    ("1004 (1)", "Rough Carpentry", "Board Foot", "Carpentry", "Carpentry"),
    ("1005 (1)", "Insulation, Roof", "Square Meter", "Insulation", "Insulation"),
    ("1015 (1)", "Termite Control", "Square Meter", "Termite Control", "Termite Control"),
    ("1016 (1)", "Waterproofing, Membrane", "Square Meter", "Waterproofing", "Waterproofing"),
    ("1014 (1)", "Finishing Hardware", "Set", "Hardware", "Hardware"),
]
