"""Shared constants (cache keys, history formatting)."""

# Cache key prefixes and separator
CACHE_PREFIX_PERMISSION = "permission"
CACHE_KEY_SEP = ":"

# History entries quote at most this many characters of a comment
COMMENT_PREVIEW_LENGTH = 50
