"""Internal constants shared across the library."""

import math

TWO_PI = 2 * math.pi

#: Mean Earth radius used by the haversine formula.
EARTH_RADIUS_KM = 6371.0

#: Two points closer than this are treated as coincident.
DISTANCE_TOLERANCE_KM = 1e-9

# ------------------------------------------------------------------
# Default target: Hell, Michigan
# ------------------------------------------------------------------

HELL_NAME = "Hell"
HELL_REGION = "Michigan"
HELL_NATION = "United States"
HELL_URL = "https://en.wikipedia.org/wiki/Hell,_Michigan"
HELL_LATITUDE_DEG = 42.4338
HELL_LONGITUDE_DEG = -83.9845
HELL_ALTITUDE_M = 270.0

# ------------------------------------------------------------------
# Alignment feedback
# ------------------------------------------------------------------

#: Heading within 10 degrees of the bearing counts as "aligned".
ALIGNMENT_THRESHOLD_RAD = math.pi / 18

#: Morse code for "go to hell", alternating on/off durations in milliseconds.
VIBRATION_PATTERN_MS: tuple[int, ...] = (
    300, 100, 300, 100, 100, 300, 300, 100, 300, 100,
    300, 700, 300, 300, 300, 100, 300, 100, 300, 700,
    100, 100, 100, 100, 100, 100, 100, 300, 100, 300,
    100, 100, 300, 100, 100, 100, 100, 300, 100, 100,
    300, 100, 100, 100, 100, 100, 700,
)  # fmt: skip

# ------------------------------------------------------------------
# Tilt correction
# ------------------------------------------------------------------

#: Pitch window (exclusive lower, inclusive upper) in which the device is
#: considered tipped past vertical and the indicator gets a half-turn.
FLIP_PITCH_LOWER_RAD = math.pi / 4
FLIP_PITCH_UPPER_RAD = 7 * math.pi / 4

#: Acceleration vectors shorter than this carry no usable direction.
MIN_GRAVITY_NORM = 1e-6

#: Delay between frames of the async driver.
DEFAULT_FRAME_INTERVAL_S = 0.05
