"""Loading the homebank username and password."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import CredentialsFileError, CredentialsFormatError


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


def load_credentials(path: str | Path) -> Credentials:
    """
    Read a two-line credentials file: username on line 1, password on
    line 2.  Anything after the second line is ignored.
    """
    try:
        contents = Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CredentialsFileError(f"Cannot read credentials from {path}: {exc}") from exc

    # Lines end at "\n" only, with a trailing "\r" dropped; \x0c, \u2028 and
    # friends stay part of the password.
    lines = [line.removesuffix("\r") for line in contents.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    if len(lines) < 2:
        raise CredentialsFormatError(
            f"Credentials file {path} must contain a username line and a password line"
        )
    return Credentials(username=lines[0], password=lines[1])


def credentials_from_env() -> Credentials | None:
    """Credentials from TSB_USER / TSB_PASSWORD, or None unless both are set."""
    user = os.environ.get("TSB_USER")
    password = os.environ.get("TSB_PASSWORD")
    if user and password:
        return Credentials(username=user, password=password)
    return None
