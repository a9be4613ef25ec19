"""Unit tests for the command line."""

import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from quotebox.cli import app, tweet_intent_url
from quotebox.config import AppConfig
from quotebox.models import Acquisition, Quote


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.config = AppConfig(
            relay_prefixes=[],
            cache_path=os.path.join(self.tmp.name, "cache.json"),
            favorites_path=os.path.join(self.tmp.name, "favorites.json"),
        )
        self.acquirer = MagicMock()
        self.runner = CliRunner()
        self.patches = [
            patch("quotebox.cli.AppConfig", **{"load.return_value": self.config}),
            patch("quotebox.cli.build_acquirer", return_value=self.acquirer),
        ]
        for p in self.patches:
            p.start()

    def tearDown(self):
        for p in self.patches:
            p.stop()
        self.tmp.cleanup()

    def test_prints_quote(self):
        self.acquirer.get_quote.return_value = Acquisition(quote=Quote(text="Hi.", author="Me"), origin="network")
        result = self.runner.invoke(app, ["quote"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn('"Hi." - Me', result.output)
        self.acquirer.get_quote.assert_called_once_with("en")

    def test_degraded_source_is_noted(self):
        self.acquirer.get_quote.return_value = Acquisition(quote=Quote(text="Old.", author="Me"), origin="cache")
        result = self.runner.invoke(app, ["quote"])
        self.assertIn("served from cache", result.output)

    def test_total_failure_message_is_localized(self):
        self.acquirer.get_quote.return_value = Acquisition.failed()
        result = self.runner.invoke(app, ["quote", "--lang", "tr"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Alinti yuklenemedi", result.output)

    def test_share_and_favorite(self):
        quote = Quote(text="Share me & keep me.", author="A")
        self.acquirer.get_quote.return_value = Acquisition(quote=quote, origin="network")
        result = self.runner.invoke(app, ["quote", "--share", "--favorite"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(tweet_intent_url(quote), result.output)
        self.assertIn("[favorite] added", result.output)

        listed = self.runner.invoke(app, ["favorites"])
        self.assertIn("Share me & keep me.", listed.output)

    def test_saved_favorite_is_marked_without_toggling(self):
        quote = Quote(text="Keep me.", author="A")
        self.acquirer.get_quote.return_value = Acquisition(quote=quote, origin="network")
        self.runner.invoke(app, ["quote", "--favorite"])

        again = self.runner.invoke(app, ["quote"])

        self.assertIn("[favorite] already in favorites", again.output)
        listed = self.runner.invoke(app, ["favorites"])
        self.assertIn("Keep me.", listed.output)

    def test_cache_command(self):
        result = self.runner.invoke(app, ["cache"])
        self.assertIn("cache: 0/100", result.output)
        cleared = self.runner.invoke(app, ["cache", "--clear"])
        self.assertIn("cleared", cleared.output)

    def test_tweet_intent_url_encodes_text(self):
        url = tweet_intent_url(Quote(text="a & b", author="C"))
        self.assertEqual(url, "https://twitter.com/intent/tweet?text=%22a%20%26%20b%22%20-%20C")


if __name__ == "__main__":
    unittest.main()
