"""Tests for single best-effort fetching."""

import os
import shutil
import tempfile
import unittest
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from artboard.content import SerialQueue
from artboard.exceptions import FetchError
from artboard.fetch import BackgroundFetcher, fetch_bytes


class FetchBytesTest(unittest.TestCase):
    def test_http_success(self):
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=200, content=b"img")
        self.assertEqual(fetch_bytes("https://cdn.test/a.png", session=session), b"img")
        self.assertEqual(session.get.call_count, 1)
        self.assertIn("timeout", session.get.call_args.kwargs)

    def test_http_error_is_not_retried(self):
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=503, content=b"")
        with self.assertRaises(FetchError) as cm:
            fetch_bytes("https://cdn.test/a.png", session=session)
        self.assertEqual(cm.exception.url, "https://cdn.test/a.png")
        self.assertEqual(session.get.call_count, 1)

    def test_transport_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(FetchError):
            fetch_bytes("https://cdn.test/a.png", session=session)

    def test_file_url(self):
        tmp = tempfile.mkdtemp()
        try:
            path = os.path.join(tmp, "a b.png")
            with open(path, "wb") as f:
                f.write(b"local")
            self.assertEqual(fetch_bytes(Path(path).as_uri()), b"local")
            with self.assertRaises(FetchError):
                fetch_bytes(Path(tmp, "missing.png").as_uri())
        finally:
            shutil.rmtree(tmp, ignore_errors=True)

    def test_unsupported_scheme(self):
        with self.assertRaises(FetchError):
            fetch_bytes("ftp://cdn.test/a.png")

    def test_own_session_is_closed(self):
        with patch("artboard.fetch.requests.Session") as session_cls:
            owned = session_cls.return_value
            http = owned.__enter__.return_value
            http.get.return_value = MagicMock(status_code=200, content=b"img")
            self.assertEqual(fetch_bytes("https://cdn.test/a.png"), b"img")
        http.get.assert_called_once()
        owned.__exit__.assert_called_once()

    def test_own_session_is_closed_on_failure(self):
        with patch("artboard.fetch.requests.Session") as session_cls:
            owned = session_cls.return_value
            owned.__enter__.return_value.get.side_effect = requests.ConnectionError("refused")
            with self.assertRaises(FetchError):
                fetch_bytes("https://cdn.test/a.png")
        owned.__exit__.assert_called_once()

    def test_injected_session_is_left_open(self):
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=200, content=b"img")
        fetch_bytes("https://cdn.test/a.png", session=session)
        session.close.assert_not_called()
        session.__exit__.assert_not_called()



class BackgroundFetcherTest(unittest.TestCase):
    def setUp(self):
        self.queue = SerialQueue()
        self.executor = ThreadPoolExecutor(max_workers=1)

    def tearDown(self):
        self.executor.shutdown()

    def test_reports_on_context(self):
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=200, content=b"img")
        fetcher = BackgroundFetcher(self.executor, self.queue, session=session)
        results = []
        fetcher.fetch(
            "https://cdn.test/a.png",
            lambda url, data: results.append((url, data, self.queue.in_context())),
        )
        self.assertTrue(self.queue.run_until(lambda: bool(results), 5.0))
        self.assertEqual(results, [("https://cdn.test/a.png", b"img", True)])

    def test_failure_reports_none(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout("slow")
        fetcher = BackgroundFetcher(self.executor, self.queue, session=session)
        results = []
        fetcher.fetch("https://cdn.test/a.png", lambda url, data: results.append(data))
        self.assertTrue(self.queue.run_until(lambda: bool(results), 5.0))
        self.assertEqual(results, [None])


if __name__ == "__main__":
    unittest.main()
