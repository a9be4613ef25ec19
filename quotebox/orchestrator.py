from __future__ import annotations

from typing import Optional

import threading

from .cache import CacheSource, QuoteCache
from .config import AppConfig
from .dataset import DatasetSource, FallbackDataset
from .models import Acquisition, Quote
from .relay import RelayFetcher
from .sources import RelayExhaustedError, first_success
from .translator import Translator


class QuoteAcquirer:
	"""Produce the next quote to show: network first, then cache, then the bundled dataset.

	Only one acquisition runs at a time; a call made while another is in flight
	is dropped and returns None. Translation, when the active language differs
	from the source language, is applied last and only to the text.
	"""

	def __init__(
		self,
		fetcher: RelayFetcher,
		cache: QuoteCache,
		dataset: FallbackDataset,
		translator: Translator,
		source_lang: str = "en",
		display_lang: str = "en",
	):
		self.fetcher = fetcher
		self.cache = cache
		self.dataset = dataset
		self.translator = translator
		self.source_lang = source_lang
		self.language = display_lang
		self._in_flight = threading.Lock()

	@property
	def busy(self) -> bool:
		return self._in_flight.locked()

	def get_quote(self, lang: Optional[str] = None) -> Optional[Acquisition]:
		if not self._in_flight.acquire(blocking=False):
			print("[skip] Quote acquisition already in progress")
			return None
		try:
			result = self._acquire()
			if result.ok:
				result = self._translate(result, lang or self.language)
			else:
				print("[error] All quote sources failed")
			return result
		finally:
			self._in_flight.release()

	def _acquire(self) -> Acquisition:
		try:
			quote = self.fetcher.fetch()
		except RelayExhaustedError as e:
			print(f"[fetch-fail] {e}")
		else:
			self.cache.record(quote)
			return Acquisition(quote=quote, origin="network")

		chain = first_success([CacheSource(self.cache), DatasetSource(self.dataset)])
		if chain.quote is None:
			return Acquisition.failed()
		print(f"[fallback] Quote served from {chain.source.name}")
		return Acquisition(quote=chain.quote, origin=chain.source.name)

	def _translate(self, result: Acquisition, lang: str) -> Acquisition:
		if lang == self.source_lang:
			return result
		text = self.translator.translate(result.quote.text, self.source_lang, lang)
		return Acquisition(quote=Quote(text=text, author=result.quote.author), origin=result.origin)


def build_acquirer(config: AppConfig) -> QuoteAcquirer:
	fetcher = RelayFetcher(
		config.api_url,
		config.relay_prefixes,
		timeout_seconds=config.request_timeout_s,
		rate_limit_patterns=config.rate_limit_patterns,
		placeholder_authors=config.placeholder_authors,
	)
	return QuoteAcquirer(
		fetcher,
		QuoteCache(config.cache_path, max_size=config.cache_max_size),
		FallbackDataset(config.fallback_path, placeholder_authors=config.placeholder_authors),
		Translator(config.translate_api_url, timeout_seconds=config.request_timeout_s),
		source_lang=config.source_lang,
		display_lang=config.display_lang,
	)
