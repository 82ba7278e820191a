"""
Tests for the HTTP session factory and the cookie-carrying SessionClient.
"""

import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import requests
from requests.structures import CaseInsensitiveDict
from urllib3 import HTTPHeaderDict

from tsb_homebank.config import BASE_URL, MAX_REDIRECTS, REQUEST_TIMEOUT
from tsb_homebank.errors import TransportError
from tsb_homebank.network.client import SessionClient, build_session
from tsb_homebank.network.cookies import Cookie, CookieJar
from tsb_homebank.utils.trace import DebugTrace


def _make_response(body="", status_code=200, set_cookies=(), url=BASE_URL, location=None):
    headers = HTTPHeaderDict({"Content-Type": "text/html; charset=utf-8"})
    if location is not None:
        headers["Location"] = location
    for value in set_cookies:
        headers.add("Set-Cookie", value)
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    resp.headers = CaseInsensitiveDict(headers)
    resp.raw = SimpleNamespace(headers=headers)
    resp.history = []
    resp.encoding = "utf-8"
    resp._content = body.encode("utf-8")
    return resp


class TestBuildSession(unittest.TestCase):
    def test_session_has_keep_alive(self):
        session = build_session()
        self.assertEqual(session.headers["Connection"], "keep-alive")

    def test_session_has_user_agent(self):
        session = build_session()
        self.assertIn("Mozilla", session.headers["User-Agent"])

    def test_session_cookie_store_refuses_everything(self):
        session = build_session()
        self.assertEqual(session.cookies.get_policy().allowed_domains(), ())

    def test_verify_flag(self):
        self.assertFalse(build_session(verify_ssl=False).verify)


class TestExchange(unittest.TestCase):
    def setUp(self):
        self.session = build_session()
        self.jar = CookieJar()
        self.client = SessionClient(self.session, self.jar)

    def test_returns_body_text(self):
        with patch.object(self.session, "request", return_value=_make_response("<p>hi</p>")):
            self.assertEqual(self.client.get(BASE_URL), "<p>hi</p>")

    def test_sends_filtered_cookies(self):
        self.jar.add(Cookie("sid", "1", domain="homebank.tsbbank.co.nz"))
        self.jar.add(Cookie("tracker", "2", domain="evil.com"))
        with patch.object(self.session, "request", return_value=_make_response()) as req:
            self.client.get(BASE_URL)
        args, kwargs = req.call_args
        self.assertEqual(args, ("GET", BASE_URL))
        self.assertEqual(kwargs["cookies"], {"sid": "1"})
        self.assertEqual(kwargs["timeout"], REQUEST_TIMEOUT)

    def test_stores_set_cookie_after_success(self):
        resp = _make_response(set_cookies=[
            "sid=abc; Domain=tsbbank.co.nz; Secure",
            "lang=en; Expires=Wed, 21 Oct 2026 07:28:00 GMT",
        ])
        with patch.object(self.session, "request", return_value=resp):
            self.client.get(BASE_URL)
        self.assertEqual(self.jar.outgoing("tsbbank.co.nz"), [("sid", "abc"), ("lang", "en")])

    def test_redirect_cookies_are_stored(self):
        responses = [
            _make_response(status_code=302, set_cookies=["early=1"], location="/online/home"),
            _make_response(set_cookies=["late=2"]),
        ]
        with patch.object(self.session, "request", side_effect=responses) as req:
            self.client.get(BASE_URL)
        self.assertEqual([c.name for c in self.jar], ["early", "late"])
        # The hop's cookie goes out on the next request via the jar
        second = req.call_args_list[1]
        self.assertEqual(second.args, ("GET", "https://homebank.tsbbank.co.nz/online/home"))
        self.assertEqual(second.kwargs["cookies"], {"early": "1"})
        self.assertFalse(second.kwargs["allow_redirects"])

    def test_cross_host_redirect_gets_no_cookies(self):
        self.jar.add(Cookie("sid", "SECRET", domain="tsbbank.co.nz"))
        responses = [
            _make_response(status_code=302, location="http://elsewhere.example/landing"),
            _make_response("landed"),
        ]
        with patch.object(self.session, "request", side_effect=responses) as req:
            self.assertEqual(self.client.get(BASE_URL), "landed")
        first, second = req.call_args_list
        self.assertEqual(first.kwargs["cookies"], {"sid": "SECRET"})
        self.assertEqual(second.args, ("GET", "http://elsewhere.example/landing"))
        self.assertEqual(second.kwargs["cookies"], {})

    def test_lookalike_host_gets_no_cookies(self):
        self.jar.add(Cookie("sid", "SECRET"))
        with patch.object(self.session, "request", return_value=_make_response()) as req:
            self.client.get("https://nottsbbank.co.nz/online/")
        self.assertEqual(req.call_args.kwargs["cookies"], {})

    def test_post_redirect_becomes_get(self):
        responses = [
            _make_response(status_code=302, location=BASE_URL),
            _make_response("dashboard"),
        ]
        with patch.object(self.session, "request", side_effect=responses) as req:
            self.client.post_form(BASE_URL, [("card", "alice")])
        first, second = req.call_args_list
        self.assertEqual(first.args[0], "POST")
        self.assertEqual(second.args[0], "GET")
        self.assertNotIn("data", second.kwargs)

    def test_temporary_redirect_keeps_post(self):
        responses = [
            _make_response(status_code=307, location="/online/signon"),
            _make_response(),
        ]
        with patch.object(self.session, "request", side_effect=responses) as req:
            self.client.post_form(BASE_URL, [("card", "alice")])
        second = req.call_args_list[1]
        self.assertEqual(second.args[0], "POST")
        self.assertEqual(second.kwargs["data"], [("card", "alice")])

    def test_failing_redirect_target(self):
        responses = [
            _make_response(status_code=302, set_cookies=["early=1"], location="/online/x"),
            _make_response(status_code=404, set_cookies=["late=2"]),
        ]
        with patch.object(self.session, "request", side_effect=responses):
            with self.assertRaises(TransportError) as ctx:
                self.client.get(BASE_URL)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual([c.name for c in self.jar], ["early"])

    def test_redirect_loop(self):
        loop = lambda *args, **kwargs: _make_response(status_code=302, location=BASE_URL)
        with patch.object(self.session, "request", side_effect=loop) as req:
            with self.assertRaises(TransportError):
                self.client.get(BASE_URL)
        self.assertEqual(req.call_count, MAX_REDIRECTS + 1)

    def test_mixed_case_cookie_domain(self):
        client = SessionClient(self.session, self.jar, base_domain="TSBBank.co.nz")
        self.jar.add(Cookie("sid", "1", domain="tsbbank.co.nz"))
        with patch.object(self.session, "request", return_value=_make_response()) as req:
            client.get(BASE_URL)
        self.assertEqual(req.call_args.kwargs["cookies"], {"sid": "1"})

    def test_post_form_sends_fields(self):
        fields = [("card", "alice"), ("op", "signon")]
        with patch.object(self.session, "request", return_value=_make_response()) as req:
            self.client.post_form(BASE_URL, fields)
        args, kwargs = req.call_args
        self.assertEqual(args, ("POST", BASE_URL))
        self.assertEqual(kwargs["data"], fields)

    def test_http_error_status(self):
        resp = _make_response(status_code=503, set_cookies=["sid=new"])
        with patch.object(self.session, "request", return_value=resp):
            with self.assertRaises(TransportError) as ctx:
                self.client.get(BASE_URL)
        self.assertEqual(ctx.exception.status_code, 503)
        # Nothing from a failed exchange reaches the jar
        self.assertEqual(len(self.jar), 0)

    def test_connection_failure(self):
        with patch.object(self.session, "request",
                          side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(TransportError) as ctx:
                self.client.get(BASE_URL)
        self.assertIsNone(ctx.exception.status_code)
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_timeout_is_transport_error(self):
        with patch.object(self.session, "request", side_effect=requests.Timeout("slow")):
            with self.assertRaises(TransportError):
                self.client.get(BASE_URL)

    def test_trace_records_bodies(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            client = SessionClient(self.session, self.jar, trace=DebugTrace(Path(tmpdir)))
            with patch.object(self.session, "request",
                              side_effect=[_make_response("one"), _make_response("two")]):
                client.get(BASE_URL, name="home")
                client.get(BASE_URL, name="dashboard")
            self.assertEqual((Path(tmpdir) / "text-home-0.txt").read_text(), "one")
            self.assertEqual((Path(tmpdir) / "text-dashboard-1.txt").read_text(), "two")


class TestDebugTrace(unittest.TestCase):
    def test_disabled_trace_writes_nothing(self):
        trace = DebugTrace()
        self.assertFalse(trace.enabled)
        self.assertIsNone(trace.record("home", "body"))
        self.assertEqual(trace.count, 0)

    def test_counters_are_per_instance(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            first = DebugTrace(Path(tmpdir) / "a")
            second = DebugTrace(Path(tmpdir) / "b")
            first.record("home", "x")
            path = second.record("home", "y")
            self.assertEqual(path.name, "text-home-0.txt")


if __name__ == "__main__":
    unittest.main()
