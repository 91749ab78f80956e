"""
Domain constants - sports, form options, colors and limits.
Centralized here for easy modification.
"""

# Sports shown on the site and in the bot
SPORTS = {
    "kickball": {"emoji": "🟠", "label": "Kickball"},
    "dodgeball": {"emoji": "🔴", "label": "Dodgeball"},
}

# Registration form options
SHIRT_SIZES = ["XS", "S", "M", "L", "XL", "XXL"]

EXPERIENCE_LEVELS = {
    "beginner": "Beginner - New to the sport",
    "intermediate": "Intermediate - Some experience",
    "advanced": "Advanced - Very experienced",
}

HEAR_ABOUT_OPTIONS = [
    "Friend/Word of mouth",
    "Social Media",
    "Website",
    "Event/Flyer",
    "Other",
]

# === Team colors ===
TEAM_GRADIENTS = [
    "orange", "green", "blue", "pink", "white", "black",
    "gray", "brown", "purple", "yellow", "red", "cyan",
]
DEFAULT_GRADIENT = "blue"

# Stored rows from before the palette change
LEGACY_GRADIENTS = {
    "teal": "green",
    "purple": "pink",
}


def convert_legacy_gradient(gradient: str) -> str:
    """Map a stored gradient to a supported palette color"""
    if not gradient:
        return DEFAULT_GRADIENT
    value = gradient.strip().lower()
    if value in LEGACY_GRADIENTS:
        return LEGACY_GRADIENTS[value]
    if value in TEAM_GRADIENTS:
        return value
    return DEFAULT_GRADIENT


# Limits
MIN_NAME_LENGTH = 1
MAX_NAME_LENGTH = 50
PHONE_DIGITS = 10
MIN_PARTICIPANT_AGE = 18
MAX_JERSEY_NUMBER = 999

# === Registration wizard ===
REGISTRATION_TOTAL_STEPS = 4
REGISTRATION_STEPS = {
    1: ["first_name", "last_name", "email", "phone"],
    2: ["emergency_contact_name", "emergency_contact_phone", "shirt_size"],
    3: ["experience_level", "how_did_you_hear", "dietary_restrictions", "medical_conditions"],
    4: ["agree_to_terms", "agree_to_email_updates"],
}
SUBSTITUTE_NOTES = "General substitute registration"
SUBSTITUTE_DEFAULT_AGE = 18

# === Waivers ===
WAIVER_VERSION = "1.0"
CONFIRMATION_PREFIX = "OSL"
CONFIRMATION_ID_CHARS = 6

# === Schedule ===
DEFAULT_SEASON = "Summer 2025"
WEEK_SPAN_DAYS = 6
SEASON_NAMES = ["Spring", "Summer", "Fall", "Winter"]
MIN_SEASON_YEAR = 2020
MAX_SEASON_YEAR = 2030

# === Notifications ===
ANNOUNCEMENT_TITLE_PREFIX = "📢 "
ANNOUNCEMENT_PRIORITY_ORDER = {"urgent": 0, "high": 1, "normal": 2, "low": 3}
URGENT_SOUND = "urgent_sound"
DEFAULT_SOUND = "default"

# === Feedback ===
FEEDBACK_DEFAULT_PRIORITY = "medium"

# === Rate limiting ===
RATE_LIMITED_ACTIONS = ["registration", "substitute", "waiver", "feedback"]

# === Bot throttling ===
RATE_LIMIT_COMMANDS = 30  # per interval
RATE_LIMIT_SUBMISSIONS = 5
RATE_LIMIT_INTERVAL_SECONDS = 60

# === Telegram ===
TELEGRAM_MESSAGE_LIMIT = 4096
