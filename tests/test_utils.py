"""Unit tests for identity and timestamp helpers."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone
from types import SimpleNamespace

from econbot.utils import EPOCH, entity_id, from_unix


class TestEntityId(unittest.TestCase):
    def test_plain_string(self):
        self.assertEqual(entity_id("1234"), "1234")

    def test_integer(self):
        self.assertEqual(entity_id(987654321), "987654321")

    def test_object_with_id(self):
        user = SimpleNamespace(id=42, username="alice")
        self.assertEqual(entity_id(user), "42")


class TestFromUnix(unittest.TestCase):
    def test_zero_and_none_are_epoch(self):
        self.assertEqual(from_unix(0), EPOCH)
        self.assertEqual(from_unix(None), EPOCH)
        self.assertEqual(EPOCH.timestamp(), 0)

    def test_seconds_to_aware_utc(self):
        dt = from_unix(1_700_000_000)
        self.assertEqual(dt, datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))
