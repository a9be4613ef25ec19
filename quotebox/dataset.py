from __future__ import annotations

from typing import Iterable, List, Optional

import json
import random

from .config import BUNDLED_QUOTES_PATH
from .models import PLACEHOLDER_AUTHORS, Quote, normalize_author
from .sources import QuoteSource


class FallbackDataset:
	"""Read-only bundled quotes ({"quotes": [{"q": ..., "a": ...}]}), used as the last resort."""

	def __init__(self, path: Optional[str] = None, placeholder_authors: Iterable[str] = PLACEHOLDER_AUTHORS):
		self.path = path or BUNDLED_QUOTES_PATH
		self.placeholder_authors = tuple(placeholder_authors)

	def load(self) -> List[Quote]:
		try:
			with open(self.path, "r", encoding="utf-8") as f:
				data = json.load(f)
		except Exception as e:
			print(f"[fallback-fail] Failed to load fallback quotes from {self.path}: {type(e).__name__}: {e}")
			return []
		records = data.get("quotes") if isinstance(data, dict) else None
		if not isinstance(records, list):
			print(f"[fallback-fail] {self.path} has no 'quotes' array")
			return []
		quotes: List[Quote] = []
		for rec in records:
			if not isinstance(rec, dict):
				continue
			text = rec.get("q")
			if not isinstance(text, str) or not text.strip():
				continue
			quotes.append(Quote(text=text, author=normalize_author(rec.get("a"), self.placeholder_authors)))
		return quotes

	def sample_one(self) -> Optional[Quote]:
		quotes = self.load()
		if not quotes:
			return None
		return random.choice(quotes)


class DatasetSource(QuoteSource):
	name = "dataset"

	def __init__(self, dataset: FallbackDataset):
		self.dataset = dataset

	def try_acquire(self) -> Optional[Quote]:
		return self.dataset.sample_one()
