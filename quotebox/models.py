from __future__ import annotations

from typing import Iterable, Optional
from datetime import datetime, timezone

from pydantic import BaseModel


UNKNOWN_AUTHOR = "Unknown"

# Filler values some sources put in the author slot
PLACEHOLDER_AUTHORS = ("zenquotes.io", "type.fit")


def _utc_now_iso() -> str:
	return datetime.now(timezone.utc).isoformat()


def normalize_author(raw: Optional[object], denylist: Iterable[str] = PLACEHOLDER_AUTHORS) -> str:
	"""Return a display-safe author, substituting the sentinel for missing or placeholder values."""
	if raw is None:
		return UNKNOWN_AUTHOR
	author = raw if isinstance(raw, str) else str(raw)
	if author == "" or author in set(denylist):
		return UNKNOWN_AUTHOR
	return author


class Quote(BaseModel):
	text: str
	author: str = UNKNOWN_AUTHOR

	def formatted(self) -> str:
		return f"\"{self.text}\" - {self.author}"


class FavoriteQuote(Quote):
	added_at: str = ""

	@classmethod
	def from_quote(cls, quote: Quote) -> "FavoriteQuote":
		return cls(text=quote.text, author=quote.author, added_at=_utc_now_iso())


class Acquisition(BaseModel):
	"""Outcome of one acquisition: a displayable quote and where it came from.

	origin is one of "network", "cache", "dataset" or "none". "none" is the
	explicit nothing-available outcome and never carries a quote.
	"""

	quote: Optional[Quote] = None
	origin: str = "none"

	@property
	def ok(self) -> bool:
		return self.quote is not None

	@property
	def degraded(self) -> bool:
		return self.origin in {"cache", "dataset"}

	@classmethod
	def failed(cls) -> "Acquisition":
		return cls(quote=None, origin="none")
