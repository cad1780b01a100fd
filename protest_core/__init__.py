"""
PROTEST CORE — FROZEN CONSTANTS
===============================
Range labels, thresholds, keyword sets, action column prefixes.
Every stage reads these; none of them mutates them.
If core changes → tests fail.
"""

CORE_VERSION = "1.0.0"
CORE_LOCKED = True

# Ordered: downstream sorting relies on this order
PARTICIPANT_RANGES = (
    "Missing",
    "1-99",
    "100-999",
    "1000-1999",
    "2000-4999",
    "5000-10000",
    ">10000",
)
MISSING_RANGE = "Missing"

# (label, lower bound inclusive, upper bound inclusive); None = unbounded
RANGE_THRESHOLDS = (
    ("1-99", 1, 99),
    ("100-999", 100, 999),
    ("1000-1999", 1000, 1999),
    ("2000-4999", 2000, 4999),
    ("5000-10000", 5000, 10000),
    (">10000", 10000, None),
)

# The only collision between raw labels and derived buckets
CATEGORY_REPAIRS = {"50-99": "1-99"}

PEOPLE_KEYWORDS = (
    "people",
    "protesters",
    "drivers",
    "residents",
    "supporters",
    "members",
    "participants",
    "former",
    "demonstrators",
)
QUALIFIER_KEYWORDS = ("about", "around", "more than", "almost", "over", ">", "<")

DEMAND_PREFIX = "protesterdemand"
RESPONSE_PREFIX = "stateresponse"
ACTION_SOURCES = {
    DEMAND_PREFIX: "protester_demand",
    RESPONSE_PREFIX: "state_response",
}

# Dissolved states the continent lookup cannot resolve
EUROPE_OVERRIDES = (
    "Yugoslavia",
    "Serbia and Montenegro",
    "Kosovo",
    "Germany East",
    "Czechoslovakia",
)

DATE_BOUNDARIES = {
    "start_date": ("startyear", "startmonth", "startday"),
    "end_date": ("endyear", "endmonth", "endday"),
}

PROTEST_COLUMNS = [
    "id",
    "country",
    "continent",
    "year",
    "start_date",
    "end_date",
    "participants",
    "participants_range",
    "protesterviolence",
]
ACTION_COLUMNS = ["action_source", "action", "occurred"]
OUTPUT_COLUMNS = PROTEST_COLUMNS + ACTION_COLUMNS


class DateParseError(ValueError):
    """Year/month/day components that do not form a calendar date."""

    def __init__(self, message: str, ids=None):
        super().__init__(message)
        self.ids = list(ids or [])


class DensificationError(AssertionError):
    """Dense action table with missing or duplicate (id, source, action) cells."""
