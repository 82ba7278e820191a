"""
Exception hierarchy for the TSB homebank client.

Every failure is terminal for the login attempt that raised it: nothing in
the package catches these, they surface unchanged to the caller.
"""


class HomebankError(Exception):
    """Base exception for the homebank client"""
    pass


class CredentialsError(HomebankError):
    """Username/password could not be obtained"""
    pass


class CredentialsFileError(CredentialsError):
    """The credentials file could not be read"""
    pass


class CredentialsFormatError(CredentialsError):
    """The credentials file has fewer than two lines"""
    pass


class TransportError(HomebankError):
    """Connection failure, timeout, or a non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(HomebankError):
    """The server returned content that could not be parsed into a document"""
    pass


class ProtocolError(HomebankError):
    """A page did not carry the markup the login protocol expects"""
    pass


class InvalidDom(ProtocolError):
    """The sign-on form is missing from the portal page"""
    pass


class MissingSequenceID(ProtocolError):
    """The dashboard carries no nextSequenceID input"""
    pass


class MissingCustomerNumber(ProtocolError):
    """The dashboard carries no customer-number attribute"""
    pass


class BadCredentials(ProtocolError):
    """The server answered the sign-on POST with the sign-on form again"""
    pass
