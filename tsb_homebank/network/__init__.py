"""
Network operations: cookie storage and cookie-carrying HTTP exchanges.
"""

from tsb_homebank.network.client import SessionClient, build_session
from tsb_homebank.network.cookies import Cookie, CookieJar, parse_set_cookie

__all__ = [
    "SessionClient",
    "build_session",
    "Cookie",
    "CookieJar",
    "parse_set_cookie",
]
