"""Internal constants shared across the package."""

USER_AGENT = "roulette/1.0"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_SYNC_TIMEOUT = 30.0

#: Per-position exponent for recency-biased selection.
BIAS_DECAY = 0.05

EMBEDDED_IMAGE_MAP = "image-map.json"

ROBOTS_TXT = "User-agent: *\nDisallow: /\n"

# ------------------------------------------------------------------
# Cache duration suffixes  (unit → seconds)
# ------------------------------------------------------------------

DURATION_UNITS: dict[str, int] = {
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
}
