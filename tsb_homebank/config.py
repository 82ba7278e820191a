"""Configuration constants for the TSB homebank client."""

import os

BASE_URL = os.environ.get("TSB_BASE_URL", "https://homebank.tsbbank.co.nz/online/")
# Cookies are only sent back when their domain ends with this suffix
COOKIE_BASE = os.environ.get("TSB_COOKIE_DOMAIN", "tsbbank.co.nz")
# Two-line file: username, then password
DEFAULT_CREDENTIALS_FILE = os.environ.get("TSB_CREDENTIALS", "creds.txt")

REQUEST_TIMEOUT     = 15    # seconds per HTTP request
MAX_CONNECT_RETRIES = 3     # connection-level retries inside urllib3 only
MAX_REDIRECTS       = 10    # Location hops followed by SessionClient per exchange

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Markup conventions of the homebank pages
SIGNON_FORM_ID       = "signonForm"
USERNAME_FIELD       = "card"
PASSWORD_FIELD       = "password"
SEQUENCE_ID_MARKER   = "nextSequenceID"
DASHBOARD_TAG        = "dashboard"
CUSTOMER_NUMBER_ATTR = "customer-number"

HTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
