"""Package-wide constants."""

SDK_VERSION = "0.4.0"
SDK_LANGUAGE = "python"

BASE_PATH = "https://api.cdp.coinbase.com/platform"
DEFAULT_SOURCE = "sdk"

DEFAULT_PAGE_LIMIT = 100
MAX_PAGE_LIMIT = 100

DEFAULT_POLL_INTERVAL_SECONDS = 0.2
