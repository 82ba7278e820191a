"""
tsb_homebank
============
Sign-on client for TSB Bank's server-rendered homebank portal.

The portal has no API: the client fetches the page, fills in the sign-on
form, and reads the session tokens the dashboard embeds as HTML attributes.

Package structure
-----------------
tsb_homebank/
├── __init__.py        – package init and public API
├── config.py          – configuration constants
├── errors.py          – exception hierarchy
├── logging_setup.py   – "tsb-homebank" logger
├── cli.py             – argparse CLI (``python -m tsb_homebank``)
├── parser/            – document parsing, BFS traversal, form extraction
├── network/           – cookie jar and the cookie-carrying HTTP client
├── auth/              – credentials and the sign-on protocol
└── utils/             – response dumps for debugging

Quick start
-----------
    from tsb_homebank import load_credentials, login

    session = login(load_credentials("creds.txt"))
    print(session.customer_number, session.next_sequence_id)
"""

from .auth import Credentials, LoginOrchestrator, Session, load_credentials, login
from .errors import HomebankError
from .network import CookieJar, SessionClient, build_session
from .parser import TreeIterator, attr, find_forms, find_inputs, parse_document, tag_name

__all__ = [
    "Credentials",
    "LoginOrchestrator",
    "Session",
    "load_credentials",
    "login",
    "HomebankError",
    "CookieJar",
    "SessionClient",
    "build_session",
    "TreeIterator",
    "attr",
    "find_forms",
    "find_inputs",
    "parse_document",
    "tag_name",
]
