# Geodesy
EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = EARTH_RADIUS_KM * 1000.0

# Default corridor options
DEFAULT_SIMPLIFY_TOLERANCE = 0.00005  # degrees, roughly 5 m
DEFAULT_CONNECTION_THRESHOLD_M = 1.0
DEFAULT_MITER_LIMIT = 3.0
DEFAULT_COUNTER_CLOCKWISE = False

# Output
CORRIDOR_FEATURE_TYPE = 'geofence_corridor'
DEFAULT_OUTPUT_FILE = 'corridors.geojson'
LOG_FILE = 'corridor.log'

# Configuration sections
SOURCE_SECTION_NAME = 'Source'
DESTINATION_SECTION_NAME = 'Destination'
CORRIDOR_SECTION_NAME = 'Corridor'
