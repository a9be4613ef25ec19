from __future__ import annotations

from typing import Iterable, Optional

from .models import Quote


class QuoteSourceError(Exception):
	"""A source failed to produce a quote."""


class RelayError(QuoteSourceError):
	pass


class RateLimitedError(RelayError):
	pass


class RelayExhaustedError(QuoteSourceError):
	def __init__(self, attempts: int, last_error: Optional[Exception] = None):
		self.attempts = attempts
		self.last_error = last_error
		detail = f": {last_error}" if last_error else ""
		super().__init__(f"all {attempts} relay(s) failed{detail}")


class QuoteSource:
	name = "source"

	def try_acquire(self) -> Optional[Quote]:
		"""Return a quote, None when the source is empty, or raise QuoteSourceError."""
		raise NotImplementedError


class ChainResult:
	def __init__(self, quote: Optional[Quote], source: Optional[QuoteSource], attempts: int, last_error: Optional[Exception]):
		self.quote = quote
		self.source = source
		self.attempts = attempts
		self.last_error = last_error


def first_success(sources: Iterable[QuoteSource]) -> ChainResult:
	"""Try each source once, in order; the first quote wins."""
	attempts = 0
	last_error: Optional[Exception] = None
	for src in sources:
		attempts += 1
		try:
			q = src.try_acquire()
		except QuoteSourceError as e:
			print(f"[source-fail] {src.name}: {e}")
			last_error = e
			continue
		if q is not None:
			return ChainResult(q, src, attempts, last_error)
	return ChainResult(None, None, attempts, last_error)
