"""
Hypixel Resolver Global Constants

Centralized location for system-wide constants: remote endpoints,
default cache times, and input format patterns.
"""

import re

# Application Constants
APP_VERSION = "3.0.0"

# Remote endpoints
HYPIXEL_API_URL = "https://api.hypixel.net/"
MOJANG_PROFILE_URL = "https://api.mojang.com/users/profiles/minecraft/{username}"
API_KEY_HEADER = "API-Key"

# Reserved TTL meaning "never refetch"
MAX_CACHE_TIME = 999999999999

# Default cache times in seconds, keyed by cache type name
DEFAULT_CACHE_TIMES = {
    "overall": 600,
    "uuid": 864000,
    "uuid_not_found": 600,
    "player": 600,
    "session": 600,
    "key_info": 600,
    "guild": 600,
    "guild_not_found": 600,
    "friends": 600,
    "boosters": 300,
    "leaderboards": 300,
    "watchdog": 300,
}

# Input patterns
UUID_PATTERN = re.compile(r"^[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{1,16}$")
GUILD_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
