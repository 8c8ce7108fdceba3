"""Library-wide constants and defaults."""

LIBRARY_PACKAGE_NAME = "sports_library"
DATA_DIR_ENV_VAR = "SPORTS_LIBRARY_DATA_DIR"
LOG_FILE_NAME = "sports_library.log"

# Template resources shipped with the package
MOVEMENT_TYPES_JSON = "movement-types.json"
TRAINING_TYPES_JSON = "training-types.json"
RUNNING_PLAN_TEMPLATE_INDEX_JSON = "index-of-templates.json"

DEFAULT_MOVEMENT_TYPE_COLOR = "blue"
UNDEFINED_MOVEMENT_TYPE_KEY = "N"
TRAINING_DEFAULT_IMAGE_NAME = "training-default"

MOVEMENT_TYPE_NAMES = {
    "N": "Undefined",
    "P": "Pause",
    "LG": "Slow walking",
    "ZG": "Brisk walking",
    "L": "Running",
    "R": "Sprint",
    "DL": "Endurance run",
    "FL": "Brisk running",
    "EL": "Warm-up run",
    "AL": "Cool-down run",
    "TP": "Trot pause",
    "IV": "Intervals",
    "WK": "Competition",
    "ST": "Stretching",
}

GENDER_VALUES = {
    0: "gender_undefined",
    1: "gender_diverse",
    2: "gender_female",
    3: "gender_male",
}

TRAINING_LEVELS = {
    0: "training_beginner",
    1: "training_amateur",
    2: "training_profi",
}

# Base values for the max pulse formula (base - age), keyed by gender
MAX_PULSE_BASE_VALUES = {2: 226, 3: 220}

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


class ICALPattern:
    """Text markers used in running plan calendars."""

    WEEK = "Lauftraining: Woche"
    DAY = "- Lauf Nummer:"
    TYPE_OF_RUNNING = "Lauf #"
    DURATION = "Dauer:"
    PULSE = "Puls:"
    PULSE_SEPARATOR = "bis"
    PACE = "Tempo"
    PACE_UNIT = "min|km"
    DISTANCE = "Distanz:"
