# Persisted document layout
USERS = "users"
GROUPS = "groups"

# Hangout responses
GOING = "going"
MAYBE = "maybe"
NOT_GOING = "notGoing"
RESPONSES = (GOING, MAYBE, NOT_GOING)

# Derived hangout status
STATUS_CONFIRMED = "confirmed"
STATUS_CANCELLED = "cancelled"
STATUS_PENDING = "pending"

# Hangout list filters
FILTER_ALL = "all"
FILTER_UPCOMING = "upcoming"
FILTER_PAST = "past"
HANGOUT_FILTERS = (FILTER_ALL, FILTER_UPCOMING, FILTER_PAST)

# Identifiers
ID_LENGTH = 7
GROUP_CODE_LETTERS = 3
GROUP_CODE_DIGITS = 4
GROUP_CODE_PATTERN = r"^[A-Z]{3}-\d{4}$"

# Client-local cache keys
CACHE_USER = "user"
CACHE_DARK_MODE = "darkMode"
CACHE_GROUPS = "groups"
