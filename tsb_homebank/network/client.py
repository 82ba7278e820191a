"""
HTTP exchanges with the homebank server.

``SessionClient`` is the only place where cookies are read from or written
to the ``CookieJar``: outgoing cookies are chosen just before a request is
sent, and ``Set-Cookie`` headers are stored only after the response came
back with a success status.
"""

import http.cookiejar
import urllib.parse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    COOKIE_BASE,
    MAX_CONNECT_RETRIES,
    MAX_REDIRECTS,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from ..errors import TransportError
from ..logging_setup import log
from ..utils.trace import DebugTrace
from .cookies import CookieJar


def build_session(verify_ssl: bool = True) -> requests.Session:
    """
    Return a requests.Session with keep-alive and a browser User-Agent.

    Only failed connection attempts are retried (nothing was sent yet);
    read errors and HTTP statuses are never retried.  The session's own
    cookie store refuses every cookie so that ``CookieJar`` stays the single
    source of cookies.
    """
    session = requests.Session()
    retry = Retry(
        total=MAX_CONNECT_RETRIES,
        connect=MAX_CONNECT_RETRIES,
        read=0,
        status=0,
        backoff_factor=0.5,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.cookies.set_policy(http.cookiejar.DefaultCookiePolicy(allowed_domains=[]))
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Connection": "keep-alive",
    })
    return session


def _set_cookie_values(resp: requests.Response) -> list[str]:
    """Every ``Set-Cookie`` header of *resp*, unjoined."""
    raw_headers = getattr(resp.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return raw_headers.getlist("Set-Cookie")
    value = resp.headers.get("Set-Cookie")
    return [value] if value else []


class SessionClient:
    """One cookie-carrying HTTP exchange at a time against the homebank server."""

    def __init__(
        self,
        session: requests.Session,
        jar: CookieJar,
        base_domain: str = COOKIE_BASE,
        timeout: float = REQUEST_TIMEOUT,
        trace: DebugTrace | None = None,
    ) -> None:
        self.session = session
        self.jar = jar
        self.base_domain = base_domain
        self.timeout = timeout
        self.trace = trace or DebugTrace()

    def exchange(self, method: str, url: str, name: str = "page", **request_kwargs) -> str:
        """
        Send one request and return the final response body as text.

        *request_kwargs* are passed to ``requests.Session.request`` (e.g.
        ``data=`` for a form POST).  Redirects are followed here rather than
        by requests: every hop has its status checked and its ``Set-Cookie``
        headers stored, and the cookies for the next hop are chosen from the
        jar again.  Hosts outside ``base_domain`` receive no cookies.

        Connection failures, timeouts, 4xx/5xx statuses and redirect loops
        raise ``TransportError``; cookies from the failing hop are not stored.
        """
        request_kwargs.setdefault("timeout", self.timeout)
        request_kwargs["allow_redirects"] = False

        for _ in range(MAX_REDIRECTS + 1):
            resp = self._send(method, url, **request_kwargs)

            stored = self.jar.ingest(_set_cookie_values(resp))
            if stored:
                log.debug("[COOKIE] Stored %d cookie(s) from %s", stored, url)

            if not resp.is_redirect:
                break

            next_url = urllib.parse.urljoin(url, resp.headers["Location"])
            log.debug("%s %s → HTTP %s, following to %s", method, url, resp.status_code, next_url)
            # 303 always becomes GET; 301/302 after a POST do too, as browsers do.
            if resp.status_code == 303 or (resp.status_code in (301, 302) and method == "POST"):
                method = "GET"
                request_kwargs.pop("data", None)
            url = next_url
        else:
            raise TransportError(f"{method} {url}: more than {MAX_REDIRECTS} redirects")

        text = resp.text
        self.trace.record(name, text)
        log.debug("%s %s → HTTP %s (%d chars)", method, url, resp.status_code, len(text))
        return text

    def _send(self, method: str, url: str, **request_kwargs) -> requests.Response:
        cookies = dict(self._cookies_for(url))
        log.debug("%s %s (sending cookies: %s)", method, url, sorted(cookies))

        try:
            resp = self.session.request(method, url, cookies=cookies, **request_kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise TransportError(
                f"{method} {url} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            ) from exc
        return resp

    def _cookies_for(self, url: str) -> list[tuple[str, str]]:
        """Jar cookies for *url*; nothing when its host is outside ``base_domain``."""
        host = (urllib.parse.urlparse(url).hostname or "").lower()
        base = self.base_domain.lower()
        if host != base and not host.endswith("." + base):
            return []
        return self.jar.outgoing(base)

    def get(self, url: str, name: str = "page", **request_kwargs) -> str:
        return self.exchange("GET", url, name, **request_kwargs)

    def post_form(self, url: str, fields: list[tuple[str, str]], name: str = "form",
                  **request_kwargs) -> str:
        """POST *fields* form-encoded to *url*."""
        return self.exchange("POST", url, name, data=fields, **request_kwargs)
