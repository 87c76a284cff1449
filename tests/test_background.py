"""Tests for the Background source reference."""

import unittest

from pydantic import ValidationError

from artboard.models import Background, BackgroundKind


class BackgroundTest(unittest.TestCase):
    def test_blank(self):
        bg = Background.blank()
        self.assertIs(bg.kind, BackgroundKind.BLANK)
        self.assertTrue(bg.is_blank)
        self.assertIsNone(bg.url)
        self.assertIsNone(bg.image_data)
        self.assertEqual(Background.empty(), bg)

    def test_remote_projections(self):
        bg = Background.remote("https://cdn.test/a.png")
        self.assertTrue(bg.is_remote)
        self.assertEqual(bg.as_url(), "https://cdn.test/a.png")
        self.assertIsNone(bg.as_bytes())

    def test_inline_projections(self):
        bg = Background.inline(bytearray(b"\x89PNG"))
        self.assertTrue(bg.is_inline)
        self.assertEqual(bg.as_bytes(), b"\x89PNG")
        self.assertIsNone(bg.as_url())

    def test_structural_equality(self):
        self.assertEqual(Background.remote("https://a"), Background.remote("https://a"))
        self.assertNotEqual(Background.remote("https://a"), Background.remote("https://b"))
        self.assertEqual(Background.inline(b"xy"), Background.inline(b"xy"))
        self.assertNotEqual(Background.inline(b"xy"), Background.blank())
        self.assertEqual(
            len({Background.inline(b"xy"), Background.inline(b"xy"), Background.blank()}),
            2,
        )

    def test_immutable(self):
        bg = Background.remote("https://a")
        with self.assertRaises(ValidationError):
            bg.value = "https://b"

    def test_rejects_mismatched_payload(self):
        with self.assertRaises(ValidationError):
            Background(kind=BackgroundKind.BLANK, value="https://a")
        with self.assertRaises(ValidationError):
            Background(kind=BackgroundKind.URL, value=b"bytes")
        with self.assertRaises(ValidationError):
            Background(kind=BackgroundKind.URL)
        with self.assertRaises(ValidationError):
            Background(kind=BackgroundKind.IMAGE_DATA)

    def test_rejects_unknown_field(self):
        with self.assertRaises(ValidationError):
            Background(kind=BackgroundKind.URL, value="https://a", caption="x")

    def test_json_round_trip(self):

        for bg in (
            Background.blank(),
            Background.remote("https://cdn.test/a.png"),
            Background.inline(b"\xff\xd8\xff\x00"),
        ):
            restored = Background.model_validate_json(bg.model_dump_json())
            self.assertEqual(restored, bg)

    def test_json_bytes_are_base64(self):
        dumped = Background.inline(b"abc").model_dump(mode="json")
        self.assertEqual(dumped, {"kind": "image_data", "value": "YWJj"})

    def test_repr(self):
        self.assertEqual(repr(Background.inline(b"abc")), "Background.inline(<3 bytes>)")
        self.assertEqual(repr(Background.blank()), "Background.blank()")


if __name__ == "__main__":
    unittest.main()
