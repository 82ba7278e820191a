"""
Command-line interface for the TSB homebank client.

Loads credentials, signs on, and reports the resulting session.
"""

import argparse
import sys
from pathlib import Path

from tsb_homebank.auth.credentials import credentials_from_env, load_credentials
from tsb_homebank.auth.login import login
from tsb_homebank.config import BASE_URL, COOKIE_BASE, DEFAULT_CREDENTIALS_FILE
from tsb_homebank.errors import HomebankError
from tsb_homebank.logging_setup import log, setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sign on to TSB homebank and report the session tokens.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials are taken from TSB_USER / TSB_PASSWORD when both are set,\n"
            "otherwise from a two-line file (username, then password)."
        ),
    )
    parser.add_argument(
        "--credentials", default=DEFAULT_CREDENTIALS_FILE,
        help=f"Credentials file (default: {DEFAULT_CREDENTIALS_FILE})",
    )
    parser.add_argument(
        "--base-url", default=BASE_URL,
        help=f"Portal URL (default: {BASE_URL})",
    )
    parser.add_argument(
        "--cookie-domain", default=COOKIE_BASE,
        help=f"Only send cookies for this domain suffix (default: {COOKIE_BASE})",
    )
    parser.add_argument(
        "--dump-dir", default=None,
        help="Write every response body to this directory for inspection",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Also write full debug logs to this file",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    try:
        credentials = credentials_from_env() or load_credentials(args.credentials)
        session = login(
            credentials,
            base_url=args.base_url,
            base_domain=args.cookie_domain,
            verify_ssl=args.verify_ssl,
            dump_dir=Path(args.dump_dir) if args.dump_dir else None,
        )
    except HomebankError as exc:
        log.error("[ERR] %s: %s", type(exc).__name__, exc)
        return 1

    log.info("[DASHBOARD] Signed on as customer %s", session.customer_number)
    log.debug("Next sequence id: %s", session.next_sequence_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
