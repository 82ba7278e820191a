"""
Session cookie storage.

The jar is keyed by cookie name: storing a cookie whose name is already
present replaces the earlier one.  Only name, value, domain and the secure
flag are tracked; path and expiry are ignored because the jar lives exactly
as long as one login attempt.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

from ..logging_setup import log


@dataclass(frozen=True)
class Cookie:
    """A cookie as received from the server."""
    name: str
    value: str
    domain: str | None = None
    # None when the server did not say; treated as secure when sending
    secure: bool | None = None


def parse_set_cookie(header: str) -> Cookie | None:
    """
    Parse one ``Set-Cookie`` header value.

    Returns ``None`` for malformed values (no ``=`` in the first pair, or an
    empty name).  ``Domain`` is lowercased with any leading dot removed;
    a bare ``Secure`` attribute sets ``secure=True``.
    """
    pair, _, attributes = header.partition(";")
    name, sep, value = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        return None

    domain = None
    secure = None
    for part in attributes.split(";"):
        key, _, val = part.partition("=")
        key = key.strip().lower()
        if key == "domain":
            val = val.strip().lstrip(".").lower()
            domain = val or None
        elif key == "secure":
            secure = True

    return Cookie(name=name, value=value.strip(), domain=domain, secure=secure)


class CookieJar:
    """Cookies of one homebank session, in insertion order."""

    def __init__(self, cookies: Iterable[Cookie] = ()) -> None:
        self._cookies: dict[str, Cookie] = {}
        for cookie in cookies:
            self.add(cookie)

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def get(self, name: str) -> Cookie | None:
        return self._cookies.get(name)

    def add(self, cookie: Cookie) -> None:
        # Re-inserting keeps the original position; the value is replaced.
        self._cookies[cookie.name] = cookie

    def ingest(self, set_cookie_values: Iterable[str]) -> int:
        """
        Store every parseable ``Set-Cookie`` value.

        Malformed values are skipped so that one bad header cannot abort the
        session.  Returns how many cookies were stored.
        """
        stored = 0
        for raw in set_cookie_values:
            cookie = parse_set_cookie(raw)
            if cookie is None:
                log.debug("[COOKIE] Ignoring malformed Set-Cookie header")
                continue
            self.add(cookie)
            stored += 1
        return stored

    def outgoing(self, base_domain: str) -> list[tuple[str, str]]:
        """
        Return ``(name, value)`` pairs that may be sent to *base_domain*.

        A cookie qualifies when it is not explicitly non-secure and its
        domain (or *base_domain* when it carries none) ends with
        *base_domain*.  Domains compare case-insensitively.
        """
        base_domain = base_domain.lower()
        return [
            (c.name, c.value)
            for c in self._cookies.values()
            if c.secure is not False
            and (c.domain or base_domain).lower().endswith(base_domain)
        ]

    def header_value(self, base_domain: str) -> str:
        """The outgoing cookies rendered as a ``Cookie`` header value."""
        return "; ".join(f"{n}={v}" for n, v in self.outgoing(base_domain))

    def snapshot(self) -> tuple[Cookie, ...]:
        return tuple(self._cookies.values())
