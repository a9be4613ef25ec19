"""Unit tests for the bundled fallback dataset."""

import json
import os
import tempfile
import unittest

from quotebox.dataset import DatasetSource, FallbackDataset


class TestFallbackDataset(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "quotes.json")

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, content):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(content if isinstance(content, str) else json.dumps(content))

    def test_bundled_dataset_loads(self):
        quotes = FallbackDataset().load()
        self.assertGreater(len(quotes), 0)
        self.assertTrue(all(q.text and q.author for q in quotes))

    def test_maps_q_a_fields(self):
        self._write({"quotes": [{"q": "Hello.", "a": "World"}, {"q": "No author."}, {"q": "Filler.", "a": "type.fit"}]})
        quotes = FallbackDataset(self.path).load()
        self.assertEqual([(q.text, q.author) for q in quotes], [("Hello.", "World"), ("No author.", "Unknown"), ("Filler.", "Unknown")])

    def test_missing_file_is_empty(self):
        dataset = FallbackDataset(os.path.join(self.tmp.name, "nope.json"))
        self.assertEqual(dataset.load(), [])
        self.assertIsNone(dataset.sample_one())

    def test_invalid_json_is_empty(self):
        self._write("[[[")
        self.assertEqual(FallbackDataset(self.path).load(), [])

    def test_wrong_shape_is_empty(self):
        self._write([{"q": "top-level list, not an object"}])
        self.assertEqual(FallbackDataset(self.path).load(), [])
        self._write({"quotes": []})
        self.assertIsNone(FallbackDataset(self.path).sample_one())

    def test_source_samples_from_file(self):
        self._write({"quotes": [{"q": "Only one.", "a": "Solo"}]})
        quote = DatasetSource(FallbackDataset(self.path)).try_acquire()
        self.assertEqual((quote.text, quote.author), ("Only one.", "Solo"))


if __name__ == "__main__":
    unittest.main()
