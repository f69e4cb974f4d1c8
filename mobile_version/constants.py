"""Constants and configuration for Mobile Version Lookup."""

# Version
__version__ = "1.0.0"

# Storefront endpoints
ITUNES_LOOKUP_URL = "http://itunes.apple.com/lookup"
GOOGLE_PLAY_DETAILS_URL = "https://play.google.com/store/apps/details"

# Defaults
DEFAULT_COUNTRY = "br"
DEFAULT_CACHE_PERIOD = 600

# Timeouts (seconds)
DEFAULT_HTTP_TIMEOUT = 10.0

# Cache file
CACHE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CACHE_FILE_ENV_VAR = "MOBILE_VERSION_CACHE_FILE"

# Play Store version patterns, tried in order. Each must capture the version in group 1.
PLAY_STORE_VERSION_PATTERNS = [
    r'\[\[\["(\d+\.\d+\.\d+)',
    r'Current Version</div><span[^>]*><div[^>]*><span[^>]*>([^<]+)</span>',
]

# HTTP Headers
DEFAULT_USER_AGENT = "Mobile-Version-Lookup/{}".format(__version__)
