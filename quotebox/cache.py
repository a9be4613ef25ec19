from __future__ import annotations

from typing import Dict, List, Optional

import json
import os
import random

from filelock import FileLock

from .models import Quote, UNKNOWN_AUTHOR
from .sources import QuoteSource


class QuoteCache:
	"""Bounded, text-deduplicated store of quotes that were fetched successfully.

	Entries are kept oldest first in a single JSON array. Read problems make the
	cache look empty and write problems are reported but never raised, so the
	cache can only ever degrade to a no-op.
	"""

	def __init__(self, path: Optional[str] = None, max_size: int = 100):
		self.path = path or os.getenv("QUOTE_CACHE_PATH", "quote_cache.json")
		self.max_size = max(1, int(max_size))

	def _lock(self) -> FileLock:
		return FileLock(self.path + ".lock")

	def _read(self) -> List[Dict[str, str]]:
		if not os.path.exists(self.path):
			return []
		try:
			with self._lock(), open(self.path, "r", encoding="utf-8") as f:
				data = json.load(f)
		except Exception as e:
			print(f"[cache-warn] Failed to read cache: {type(e).__name__}: {e}")
			return []
		if not isinstance(data, list):
			print("[cache-warn] Cache file is not a list; ignoring it")
			return []
		items: List[Dict[str, str]] = []
		for row in data:
			if not isinstance(row, dict):
				continue
			text = row.get("text")
			if not isinstance(text, str) or not text:
				continue
			author = row.get("author")
			items.append({"text": text, "author": author if isinstance(author, str) and author else UNKNOWN_AUTHOR})
		return items

	def _write(self, items: List[Dict[str, str]]) -> bool:
		# Write to a temp file and replace
		tmp_path = self.path + ".tmp"
		try:
			with self._lock():
				with open(tmp_path, "w", encoding="utf-8") as f:
					json.dump(items, f, ensure_ascii=False)
				os.replace(tmp_path, self.path)
			return True
		except Exception as e:
			print(f"[cache-warn] Failed to persist cache: {type(e).__name__}: {e}")
			return False

	def entries(self) -> List[Quote]:
		return [Quote(**row) for row in self._read()]

	def count(self) -> int:
		return len(self._read())

	def record(self, quote: Quote) -> bool:
		"""Add quote unless its text is already cached. Returns True if it was stored."""
		items = self._read()
		if any(row["text"] == quote.text for row in items):
			return False
		items.append({"text": quote.text, "author": quote.author})
		while len(items) > self.max_size:
			items.pop(0)
		if not self._write(items):
			return False
		print(f"[cache] Quote cached. Total cached: {len(items)}")
		return True

	def sample_one(self) -> Optional[Quote]:
		items = self._read()
		if not items:
			return None
		return Quote(**random.choice(items))

	def clear(self) -> None:
		self._write([])


class CacheSource(QuoteSource):
	name = "cache"

	def __init__(self, cache: QuoteCache):
		self.cache = cache

	def try_acquire(self) -> Optional[Quote]:
		return self.cache.sample_one()
