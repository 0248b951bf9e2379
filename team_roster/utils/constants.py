"""
Constants used across the team roster store.
"""

# Mock store latency (seconds) applied before every mutation
DEFAULT_STORE_LATENCY_SECONDS = 0.3

# Calendar months (1-12) that belong to the spring season; everything else is fall
SPRING_MONTHS = range(2, 8)

# Lineup shape
SINGLES_SLOTS = 6
DOUBLES_SLOTS = 3

# Identifier prefixes for generated ids
PLAYER_ID_PREFIX = "p"
MATCH_ID_PREFIX = "m"

UNKNOWN_PLAYER_NAME = "Unknown Player"
DASHBOARD_UPCOMING_LIMIT = 3
