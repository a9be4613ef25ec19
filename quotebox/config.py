from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel
from dotenv import load_dotenv


DEFAULT_RELAYS = [
	"https://api.codetabs.com/v1/proxy?quest=",
	"https://thingproxy.freeboard.io/fetch/",
]

BUNDLED_QUOTES_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "quotes.json")


def _csv_env(name: str, default: List[str]) -> List[str]:
	raw = os.getenv(name)
	if raw is None:
		return list(default)
	return [part.strip() for part in raw.split(",") if part.strip()]


class AppConfig(BaseModel):
	# Remote quote source (reached through relays)
	api_url: str = "https://zenquotes.io/api/random"
	relay_prefixes: List[str] = list(DEFAULT_RELAYS)
	request_timeout_s: float = 10.0
	rate_limit_patterns: List[str] = ["too many requests"]
	placeholder_authors: List[str] = ["zenquotes.io", "type.fit"]

	# Local storage
	cache_path: str = "quote_cache.json"
	cache_max_size: int = 100
	fallback_path: str = BUNDLED_QUOTES_PATH
	favorites_path: str = "favorites.json"

	# Translation (MyMemory)
	translate_api_url: str = "https://api.mymemory.translated.net/get"
	source_lang: str = "en"
	display_lang: str = "en"

	@classmethod
	def load(cls) -> "AppConfig":
		# Load .env if present
		load_dotenv(override=False)

		return cls(
			api_url=os.getenv("QUOTE_API_URL", "https://zenquotes.io/api/random"),
			relay_prefixes=_csv_env("QUOTE_RELAYS", DEFAULT_RELAYS),
			request_timeout_s=float(os.getenv("QUOTE_TIMEOUT_S", "10")),
			rate_limit_patterns=_csv_env("RATE_LIMIT_PATTERNS", ["too many requests"]),
			placeholder_authors=_csv_env("PLACEHOLDER_AUTHORS", ["zenquotes.io", "type.fit"]),
			cache_path=os.getenv("QUOTE_CACHE_PATH", "quote_cache.json"),
			cache_max_size=max(1, int(os.getenv("QUOTE_CACHE_MAX", "100"))),
			fallback_path=os.getenv("FALLBACK_QUOTES_PATH", BUNDLED_QUOTES_PATH),
			favorites_path=os.getenv("FAVORITES_PATH", "favorites.json"),
			translate_api_url=os.getenv("TRANSLATE_API_URL", "https://api.mymemory.translated.net/get"),
			source_lang=os.getenv("SOURCE_LANG", "en").strip().lower() or "en",
			display_lang=os.getenv("DISPLAY_LANG", "en").strip().lower() or "en",
		)
