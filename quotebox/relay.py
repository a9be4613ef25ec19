from __future__ import annotations

from typing import Iterable, List, Optional, Sequence
from urllib.parse import quote as url_quote

import json
import time

import requests

from .models import PLACEHOLDER_AUTHORS, Quote, normalize_author
from .sources import QuoteSource, RateLimitedError, RelayError, RelayExhaustedError, first_success


RATE_LIMIT_PATTERNS = ("too many requests",)

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_relay_url(prefix: str, target: str) -> str:
	return prefix + url_quote(target, safe=_URI_COMPONENT_SAFE)


def is_rate_limited(text: str, patterns: Iterable[str] = RATE_LIMIT_PATTERNS) -> bool:
	lc = (text or "").lower()
	return any(p.lower() in lc for p in patterns if p)


def parse_quote_payload(data: object, denylist: Iterable[str] = PLACEHOLDER_AUTHORS) -> Quote:
	"""Turn a ZenQuotes-style payload ([{q, a, h}] or {q, a}) into a Quote."""
	item = data
	if isinstance(data, list):
		if not data:
			raise RelayError("empty quote array")
		item = data[0]
	if not isinstance(item, dict):
		raise RelayError(f"unexpected payload type {type(item).__name__}")
	text = item.get("q")
	if not isinstance(text, str) or not text.strip():
		raise RelayError("payload has no quote text")
	return Quote(text=text, author=normalize_author(item.get("a"), denylist))


class RelaySource(QuoteSource):
	"""One bounded attempt at the quote API through a single relay prefix."""

	def __init__(
		self,
		prefix: str,
		target_url: str,
		session: requests.Session,
		timeout_seconds: float = 10.0,
		rate_limit_patterns: Sequence[str] = RATE_LIMIT_PATTERNS,
		placeholder_authors: Sequence[str] = PLACEHOLDER_AUTHORS,
	):
		self.prefix = prefix
		self.name = prefix
		self.target_url = target_url
		self.session = session
		self.timeout_seconds = timeout_seconds
		self.rate_limit_patterns = rate_limit_patterns
		self.placeholder_authors = placeholder_authors

	def try_acquire(self) -> Optional[Quote]:
		url = build_relay_url(self.prefix, self.target_url)
		deadline = time.monotonic() + self.timeout_seconds
		try:
			# The response context closes the connection on every exit path
			with self.session.get(url, timeout=self.timeout_seconds, stream=True) as resp:
				resp.raise_for_status()
				body = self._read_body(resp, deadline)
			data = json.loads(body)
		except requests.Timeout as e:
			raise RelayError(f"timed out after {self.timeout_seconds}s") from e
		except requests.RequestException as e:
			raise RelayError(f"{type(e).__name__}: {e}") from e
		except ValueError as e:
			raise RelayError(f"invalid JSON: {e}") from e
		quote = parse_quote_payload(data, self.placeholder_authors)
		if is_rate_limited(quote.text, self.rate_limit_patterns):
			raise RateLimitedError("quote API rate limit exceeded")
		return quote

	def _read_body(self, resp: requests.Response, deadline: float) -> bytes:
		# One-byte reads return as soon as any data arrives
		chunks: List[bytes] = []
		for chunk in resp.iter_content(chunk_size=1):
			if time.monotonic() > deadline:
				raise RelayError(f"timed out after {self.timeout_seconds}s")
			chunks.append(chunk)
		return b"".join(chunks)


class RelayFetcher:
	"""Fetch one fresh quote, trying each relay prefix strictly in order."""

	def __init__(
		self,
		api_url: str,
		relay_prefixes: Sequence[str],
		timeout_seconds: float = 10.0,
		rate_limit_patterns: Sequence[str] = RATE_LIMIT_PATTERNS,
		placeholder_authors: Sequence[str] = PLACEHOLDER_AUTHORS,
		session: Optional[requests.Session] = None,
	):
		self.api_url = api_url
		self.relay_prefixes: List[str] = list(relay_prefixes)
		self.timeout_seconds = max(0.001, float(timeout_seconds))
		self.rate_limit_patterns = tuple(rate_limit_patterns)
		self.placeholder_authors = tuple(placeholder_authors)
		self._session = session or requests.Session()

	def sources(self) -> List[RelaySource]:
		return [
			RelaySource(
				prefix,
				self.api_url,
				self._session,
				timeout_seconds=self.timeout_seconds,
				rate_limit_patterns=self.rate_limit_patterns,
				placeholder_authors=self.placeholder_authors,
			)
			for prefix in self.relay_prefixes
		]

	def fetch(self) -> Quote:
		result = first_success(self.sources())
		if result.quote is None:
			raise RelayExhaustedError(result.attempts, result.last_error)
		print(f"[relay-ok] {result.source.name}")
		return result.quote
