"""Tests for the artboard CLI."""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from artboard.cli.main import app

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


class CliTest(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_canonicalize_alias(self):
        result = self.runner.invoke(
            app,
            ["canonicalize", "https://x.test/page?imgurl=https%3A%2F%2Fcdn.test%2Fa.png&w=200"],
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "https://cdn.test/a.png")

    def test_canonicalize_file_url_with_root(self):
        result = self.runner.invoke(
            app, ["canonicalize", "--root", "file:///new/root", "file:///old/root/pic.jpg"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "file:///new/root/pic.jpg")

    def test_canonicalize_malformed_url(self):
        result = self.runner.invoke(app, ["canonicalize", "http://[::1/pic.png"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "http://[::1/pic.png")


    def test_uniquify(self):
        result = self.runner.invoke(
            app, ["uniquify", "-e", "Set 3", "-e", "Set 4", "Set 3"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "Set 5")

    def test_store(self):
        source = os.path.join(self.tmp, "pic.png")
        with open(source, "wb") as f:
            f.write(PNG)
        store_dir = os.path.join(self.tmp, "store")
        with patch.dict(os.environ, {"ARTBOARD_STORAGE_DIR": store_dir}):
            result = self.runner.invoke(app, ["store", "--name", "kept.png", source])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Persist as: kept.png", result.output)
        self.assertEqual(Path(store_dir, "kept.png").read_bytes(), PNG)

    def test_store_missing_file(self):
        result = self.runner.invoke(app, ["store", os.path.join(self.tmp, "nope.png")])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error", result.output)

    def test_resolve_emoji_as_element(self):
        result = self.runner.invoke(app, ["resolve", "--timeout", "5", "🎨"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Background.blank()", result.output)
        self.assertIn("🎨", result.output)

    def test_resolve_plain_text_is_unused(self):
        result = self.runner.invoke(app, ["resolve", "--timeout", "5", "hello"])
        self.assertEqual(result.exit_code, 1, result.output)
        self.assertIn("Nothing in the drop can be used", result.output)


    def test_resolve_image_file(self):
        source = os.path.join(self.tmp, "pic.png")
        with open(source, "wb") as f:
            f.write(PNG)
        result = self.runner.invoke(app, ["resolve", "--timeout", "5", "words", source])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(f"Background.inline(<{len(PNG)} bytes>)", result.output)

    def test_resolve_single_type(self):
        result = self.runner.invoke(
            app, ["resolve", "--type", "url", "--timeout", "5", "plain", "https://cdn.test/a"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "https://cdn.test/a")

    def test_resolve_unavailable_type(self):
        result = self.runner.invoke(app, ["resolve", "--type", "image", "just text"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No item can provide", result.output)

    def test_resolve_unknown_type(self):
        result = self.runner.invoke(app, ["resolve", "--type", "video", "x"])
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
