"""Application constants."""

# Brzycki denominator (37 - reps) is only meaningful below this rep count
BRZYCKI_REP_LIMIT = 37
EPLEY_DIVISOR = 30

# New sets when there is no history for the machine
DEFAULT_REPS = 10
DEFAULT_WEIGHT = 0.0

# Completed-workouts listing
DEFAULT_PAGE_SIZE = 10

# Separator between machine and attachment in planned exercise labels
LABEL_SEPARATOR = " — "
