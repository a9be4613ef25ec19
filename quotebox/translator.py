from __future__ import annotations

from typing import Optional

import requests


class Translator:
	"""Best-effort text translation via the MyMemory API.

	Docs: https://mymemory.translated.net/doc/spec.php
	Any failure returns the input text unchanged, so callers never see an error.
	"""

	def __init__(
		self,
		api_url: str = "https://api.mymemory.translated.net/get",
		timeout_seconds: float = 10.0,
		session: Optional[requests.Session] = None,
	):
		self.api_url = api_url
		self.timeout_seconds = max(0.001, float(timeout_seconds))
		self._session = session or requests.Session()

	def translate(self, text: str, source_lang: str, target_lang: str) -> str:
		if not text or source_lang == target_lang:
			return text
		try:
			params = {"q": text, "langpair": f"{source_lang}|{target_lang}"}
			with self._session.get(self.api_url, params=params, timeout=self.timeout_seconds) as resp:
				resp.raise_for_status()
				data = resp.json()
			translated = self._parse(data)
			if translated is None:
				print("[translate-fail] Translation failed, using original text")
				return text
			return translated
		except Exception as e:
			print(f"[translate-fail] {type(e).__name__}: {e}")
			return text

	def _parse(self, data: object) -> Optional[str]:
		# { responseStatus: 200, responseData: { translatedText: "..." } }
		if not isinstance(data, dict):
			return None
		try:
			status = int(data.get("responseStatus"))
		except (TypeError, ValueError):
			return None
		if status != 200:
			return None
		payload = data.get("responseData")
		if not isinstance(payload, dict):
			return None
		translated = payload.get("translatedText")
		if not isinstance(translated, str) or not translated:
			return None
		return translated
