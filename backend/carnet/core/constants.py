"""Shared application constants.

Centralizes values used by the store, the service and the tracker so the
week shape and reflection fields are defined in one place.
"""

# A weekly entry always owns one day record per day of the week
DAYS_IN_WEEK = 7

# Free-text reflection fields of a weekly entry (wire names)
TEXT_FIELDS = (
    "charityActs",
    "comments",
    "difficulties",
    "improvements",
    "successes",
)

# Wire name -> ORM attribute
TEXT_FIELD_COLUMNS = {
    "charityActs": "charity_acts",
    "comments": "comments",
    "difficulties": "difficulties",
    "improvements": "improvements",
    "successes": "successes",
}

# Weekday labels, Monday first
DAY_LABELS = (
    "lundi",
    "mardi",
    "mercredi",
    "jeudi",
    "vendredi",
    "samedi",
    "dimanche",
)
