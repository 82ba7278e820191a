"""Authentication submodule – credentials and the sign-on protocol."""

from tsb_homebank.auth.credentials import (
    Credentials,
    credentials_from_env,
    load_credentials,
)
from tsb_homebank.auth.login import (
    LoginOrchestrator,
    LoginState,
    Session,
    find_customer_number,
    find_next_sequence_id,
    login,
)

__all__ = [
    "Credentials",
    "credentials_from_env",
    "load_credentials",
    "LoginOrchestrator",
    "LoginState",
    "Session",
    "find_customer_number",
    "find_next_sequence_id",
    "login",
]
