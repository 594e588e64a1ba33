"""Application-wide constants and configuration values.

This module centralizes all magic numbers and lookup tables used throughout
the game, making them easier to maintain and adjust.
"""

# Operand Ranges
ADDITION_MAX_OPERAND = 30
"""Largest operand drawn for addition and subtraction questions (inclusive)."""

MULTIPLICATION_MAX_OPERAND = 10
"""Largest operand drawn for multiplication questions (inclusive)."""

DIVISION_MAX_DIVISOR = 10
"""Largest divisor drawn for division questions. Smallest is always 1."""

DIVISION_MAX_QUOTIENT = 10
"""Largest quotient for division questions. Smallest is always 1."""

# Answer Checking
ANSWER_TOLERANCE = 1e-4
"""Absolute tolerance when comparing a submitted answer to the correct value."""

# Difficulty Classification
ADDITION_THRESHOLDS = (5, 8, 12, 16, 20, 25)
"""Inclusive upper bounds on max(a, b) for the first six difficulty categories."""

SUBTRACTION_THRESHOLDS = (5, 8, 12, 16, 20, 25)
"""Inclusive upper bounds on a - b for the first six difficulty categories."""

MULTIPLICATION_THRESHOLDS = (10, 20, 30, 40, 50, 60)
"""Inclusive upper bounds on a * b for the first six difficulty categories."""

DIVISION_THRESHOLDS = (2, 3, 4, 5, 6, 7)
"""Inclusive upper bounds on the divisor for the first six difficulty categories."""

DEFAULT_POINTS = 1
"""Points awarded for a category missing from the scoring table."""

# Ranks and Stages
POINTS_PER_RANK = 10
"""Accumulated points needed for one rank."""

STAGE_COUNT = 100
"""Number of stages a player can reach."""

INITIAL_STAGE_DELTAS = (3, 5, 10, 15, 22, 28)
"""Ranks needed for each of the first six stages."""

STAGE_DELTA_BASE_INCREMENT = 6
"""Base growth between consecutive stage deltas after the initial ones."""

STAGE_DELTA_INDEX_DIVISOR = 5
"""Every this many stages, the delta growth increases by one more rank."""

MAX_RANK_STARS = 10
"""Maximum number of star slots drawn for rank progress within a stage."""

FILLED_STAR = "⭐"
EMPTY_STAR = "☆"

STAGE_ANIMALS = (
    "Worm", "Snail", "Caterpillar", "Ant", "Bee", "Butterfly", "Ladybug",
    "Dragonfly", "Grasshopper", "Frog", "Fish", "Turtle", "Mouse", "Rabbit",
    "Squirrel", "Cat", "Dog", "Pig", "Goat", "Sheep", "Cow", "Horse",
    "Deer", "Fox", "Raccoon", "Kangaroo", "Leopard", "Tiger", "Lion",
    "Zebra", "Giraffe", "Rhino", "Hippo", "Panda", "Elephant", "Gorilla",
    "Orangutan", "Baboon", "Meerkat", "Wolf", "Bear", "Eagle", "Hawk",
    "Owl", "Crow", "Raven", "Parrot", "Octopus", "Dolphin", "Whale",
)
"""Base creatures, roughly ordered from simplest to cleverest."""

EARLY_STAGE_ADJECTIVES = (
    "Tiny", "Slow", "Wiggly", "Busy", "Buzzing", "Fluttering", "Chirping",
    "Quacking", "Happy", "Leaping", "Friendly", "Curious", "Cheerful",
    "Squeaky", "Playful", "Loyal", "Sniffing", "Bleating", "Woolly",
    "Mooing", "Trotting", "Clever", "Cunning", "Graceful", "Bounding",
    "Spotted", "Roaring", "Purring", "Striped", "Tall", "Massive",
    "Chubby", "Gentle", "Strong", "Swinging", "Sneaky", "Alert", "Brave",
    "Bold", "Soaring", "Swift", "Wise", "Intelligent", "Astute", "Crafty",
    "Smart", "Giant", "Gigantic", "Soft", "Splendid",
)
"""Modest adjectives for stages 1-50."""

LATE_STAGE_ADJECTIVES = (
    "Thoughtful", "Brilliant", "Genius", "Mastermind", "Legendary",
    "Mythical", "Majestic", "Spectacular", "Incredible", "Wondrous",
    "Amazing", "Fantastic", "Remarkable", "Exceptional", "Extraordinary",
    "Magnificent", "Marvelous", "Stupendous", "Phenomenal", "Astounding",
    "Astonishing", "Impressive", "Awesome", "Outstanding", "Supreme",
    "Ultimate", "Dynamic", "Fabulous", "Superb", "Terrific", "Wonderful",
    "Radiant", "Sparkling", "Dazzling", "Illustrious", "Noble", "Virtuous",
    "Honorable", "Eminent", "Prestigious", "Renowned", "Acclaimed",
    "Celebrated", "Famous", "Respected", "Esteemed", "Distinguished",
    "Visionary", "Sage", "Omniscient",
)
"""Grand adjectives for stages 51-100."""

EARLY_STAGE_OVERRIDES = {"Owl": "Wise Owl"}
"""Fixed names for first-half stages, keyed by creature."""

LATE_STAGE_OVERRIDES = {"Elephant": "Thoughtful Elephant"}
"""Fixed names for second-half stages, keyed by creature."""

# Question Illustration
EMOJI_LIST = (
    "🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼", "🐨", "🐯",
    "🦁", "🐮", "🐷", "🐸", "🐵", "🐔", "🐧", "🐤", "🦆", "🦅",
    "🦉", "🦇", "🐺", "🐗", "🐴", "🦓", "🦒", "🐢", "🐍", "🐊",
    "🐙", "🦑", "🦀", "🐠", "🐟", "🐬", "🐳", "🦈", "🦭", "🐋",
    "🐌", "🐛", "🦋", "🐞", "🐜", "🪲", "🐝", "🦗", "🕷️",
    "🍎", "🍌", "🍇", "🍓", "🍒", "🍍", "🥝", "🥕", "🍉", "🍊",
    "🍪", "🍩", "🍰", "🍦", "🍫", "🍬", "🍿", "🍔", "🍟", "🍕",
)
"""Emoji used to draw operand groups in the front-end."""

# Scoring Modes
SCORING_MODE_DIFFICULTY = "difficulty"
"""Award 1-4 points depending on the question's difficulty."""

SCORING_MODE_FLAT = "flat"
"""Award 1 point for every correct answer."""

# Cookie Configuration
COOKIE_NAME = "ems_uid"
"""Name of the cookie used to store the player UUID."""

PLAYER_ID_PREFIX = "ems_"
"""Prefix prepended to generated player ids."""

# Rate Limiting
ANSWER_SUBMISSION_RATE_LIMIT = "120/minute"
"""Maximum number of answer submissions allowed per minute per client."""

DEFAULT_RATE_LIMIT = "300/minute"
"""Default request budget per client for all other endpoints."""

# History
STAGE_HISTORY_LIMIT = 20
"""Number of most recent stage advances returned by the history endpoint."""

# Logging
DEFAULT_LOG_LEVEL = "INFO"
"""Default logging level for the application."""
