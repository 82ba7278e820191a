"""
Sign-on protocol for the homebank portal.

    GET  base URL  → portal page carrying <form id="signonForm">
    POST base URL  → the form's fields, with card/password filled in
    GET  base URL  → dashboard carrying the session tokens

Each step depends on cookies set by the previous response, so the steps
run strictly in sequence and the first failure ends the attempt.
"""

import enum
from dataclasses import dataclass
from pathlib import Path

from ..config import (
    BASE_URL,
    COOKIE_BASE,
    CUSTOMER_NUMBER_ATTR,
    DASHBOARD_TAG,
    PASSWORD_FIELD,
    SEQUENCE_ID_MARKER,
    SIGNON_FORM_ID,
    USERNAME_FIELD,
)
from ..errors import (
    BadCredentials,
    HomebankError,
    InvalidDom,
    MissingCustomerNumber,
    MissingSequenceID,
)
from ..logging_setup import log
from ..network.client import SessionClient, build_session
from ..network.cookies import Cookie, CookieJar
from ..parser.document import parse_document
from ..parser.forms import find_form_by_id, find_inputs, form_fields
from ..parser.tree import attr, first_element
from ..utils.trace import DebugTrace
from .credentials import Credentials


class LoginState(enum.Enum):
    START = "start"
    HOME_FETCHED = "home-fetched"
    FORM_LOCATED = "form-located"
    CREDENTIALS_SUBMITTED = "credentials-submitted"
    POST_LOGIN_FETCHED = "post-login-fetched"
    TOKENS_EXTRACTED = "tokens-extracted"
    FAILED = "failed"


@dataclass(frozen=True)
class Session:
    """An authenticated homebank session."""
    cookies: tuple[Cookie, ...]
    next_sequence_id: str
    customer_number: str


def find_next_sequence_id(doc) -> str:
    """Value of the first input named (or with id) ``nextSequenceID``."""
    for control in find_inputs(doc):
        if control.matches(SEQUENCE_ID_MARKER) and control.value is not None:
            return control.value
    raise MissingSequenceID("Missing a sequence id needed to continue")


def find_customer_number(doc) -> str:
    """``customer-number`` of the first ``<dashboard>`` element carrying one."""
    dashboard = first_element(doc, DASHBOARD_TAG, attribute=CUSTOMER_NUMBER_ATTR)
    if dashboard is None:
        raise MissingCustomerNumber("Missing a customer number needed to continue")
    return attr(dashboard, CUSTOMER_NUMBER_ATTR)


class LoginOrchestrator:
    """
    Runs one sign-on attempt.

    ``state`` follows the protocol as it advances; on any failure it is set
    to ``LoginState.FAILED`` and the error is re-raised unchanged.
    """

    def __init__(
        self,
        credentials: Credentials,
        client: SessionClient,
        base_url: str = BASE_URL,
        detect_rejected_credentials: bool = True,
    ) -> None:
        self.credentials = credentials
        self.client = client
        self.base_url = base_url
        self.detect_rejected_credentials = detect_rejected_credentials
        self.state = LoginState.START

    def do_login(self) -> Session:
        try:
            return self._run()
        except HomebankError as exc:
            log.debug("Login failed in state %s: %s", self.state.value, exc)
            self.state = LoginState.FAILED
            raise

    def _run(self) -> Session:
        self.state = LoginState.START
        doc = self._fetch("home")
        self.state = LoginState.HOME_FETCHED

        form = find_form_by_id(doc, SIGNON_FORM_ID)
        if form is None:
            raise InvalidDom(f"Portal page has no form with id '{SIGNON_FORM_ID}'")
        self.state = LoginState.FORM_LOCATED

        fields = form_fields(form, {
            USERNAME_FIELD: self.credentials.username,
            PASSWORD_FIELD: self.credentials.password,
        })
        log.info("[SIGNON] Submitting sign-on form (%d fields)", len(fields))
        self.client.post_form(self.base_url, fields, name="signon")
        self.state = LoginState.CREDENTIALS_SUBMITTED

        doc = self._fetch("dashboard")
        self.state = LoginState.POST_LOGIN_FETCHED

        if self.detect_rejected_credentials and find_form_by_id(doc, SIGNON_FORM_ID) is not None:
            raise BadCredentials("Server returned the sign-on form again; check the credentials")

        session = Session(
            cookies=self.client.jar.snapshot(),
            next_sequence_id=find_next_sequence_id(doc),
            customer_number=find_customer_number(doc),
        )
        self.state = LoginState.TOKENS_EXTRACTED
        log.info("[DASHBOARD] Login successful. Active cookies: %s", [c.name for c in session.cookies])
        return session

    def _fetch(self, name: str):
        log.info("[%s] Fetching %s", name.upper(), self.base_url)
        return parse_document(self.client.get(self.base_url, name=name))


def login(
    credentials: Credentials,
    *,
    base_url: str = BASE_URL,
    base_domain: str = COOKIE_BASE,
    verify_ssl: bool = True,
    dump_dir: Path | None = None,
) -> Session:
    """Sign on with a fresh HTTP session and cookie jar."""
    client = SessionClient(
        build_session(verify_ssl=verify_ssl),
        CookieJar(),
        base_domain=base_domain,
        trace=DebugTrace(dump_dir),
    )
    return LoginOrchestrator(credentials, client, base_url=base_url).do_login()
