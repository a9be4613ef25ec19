from __future__ import annotations

from typing import List, Optional

import json
import os

from filelock import FileLock

from .models import FavoriteQuote, Quote


class FavoritesStore:
	"""User-curated quotes, newest first. Identity is the quote text; nothing is auto-evicted."""

	def __init__(self, path: Optional[str] = None):
		self.path = path or os.getenv("FAVORITES_PATH", "favorites.json")

	def _read(self) -> List[FavoriteQuote]:
		if not os.path.exists(self.path):
			return []
		try:
			lock = FileLock(self.path + ".lock")
			with lock, open(self.path, "r", encoding="utf-8") as f:
				data = json.load(f)
			if isinstance(data, list):
				return [FavoriteQuote(**row) for row in data if isinstance(row, dict) and row.get("text")]
		except Exception as e:
			print(f"[favorites-warn] Failed to read favorites: {type(e).__name__}: {e}")
		return []

	def _write(self, items: List[FavoriteQuote]) -> None:
		tmp_path = self.path + ".tmp"
		try:
			lock = FileLock(self.path + ".lock")
			with lock:
				with open(tmp_path, "w", encoding="utf-8") as f:
					json.dump([item.model_dump() for item in items], f, ensure_ascii=False)
				os.replace(tmp_path, self.path)
		except Exception as e:
			print(f"[favorites-warn] Failed to persist favorites: {type(e).__name__}: {e}")

	def list(self) -> List[FavoriteQuote]:
		return self._read()

	def is_favorite(self, text: str) -> bool:
		return any(item.text == text for item in self._read())

	def remove(self, text: str) -> bool:
		items = self._read()
		kept = [item for item in items if item.text != text]
		if len(kept) == len(items):
			return False
		self._write(kept)
		return True

	def toggle(self, quote: Quote) -> bool:
		"""Add quote if absent, remove it if present. Returns True when it is now a favorite."""
		if self.remove(quote.text):
			return False
		items = self._read()
		items.insert(0, FavoriteQuote.from_quote(quote))
		self._write(items)
		return True
