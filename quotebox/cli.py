from __future__ import annotations

from typing import Optional
from urllib.parse import quote as url_quote

import typer

from .cache import QuoteCache
from .config import AppConfig
from .dataset import FallbackDataset
from .favorites import FavoritesStore
from .models import Quote
from .orchestrator import QuoteAcquirer, build_acquirer


FAILURE_MESSAGES = {
    "en": "Failed to load quote. Please try again.",
    "tr": "Alinti yuklenemedi. Lutfen tekrar deneyin.",
}

app = typer.Typer(help="Quote of the moment, with offline fallback and translation")


def _load_components() -> tuple[AppConfig, QuoteAcquirer, FavoritesStore]:
    config = AppConfig.load()
    acquirer = build_acquirer(config)
    favorites = FavoritesStore(config.favorites_path)
    return config, acquirer, favorites


def _failure_message(lang: str) -> str:
    return FAILURE_MESSAGES.get(lang, FAILURE_MESSAGES["en"])


def tweet_intent_url(quote: Quote) -> str:
    # The intent URL still lives on the twitter.com domain
    return "https://twitter.com/intent/tweet?text=" + url_quote(quote.formatted(), safe="")


@app.command()
def quote(
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="Display language (e.g. en, tr); defaults to DISPLAY_LANG"),
    share: bool = typer.Option(False, "--share/--no-share", help="Also print a share link for X/Twitter"),
    favorite: bool = typer.Option(False, "--favorite", help="Toggle the shown quote in favorites"),
):
    """Fetch and print the next quote."""
    config, acquirer, favorites = _load_components()
    display_lang = (lang or config.display_lang).strip().lower()
    result = acquirer.get_quote(display_lang)
    if result is None or not result.ok:
        print(_failure_message(display_lang))
        raise typer.Exit(code=1)
    print(result.quote.formatted())
    if result.degraded:
        print(f"[offline] served from {result.origin}")
    if share:
        print(tweet_intent_url(result.quote))
    if favorite:
        added = favorites.toggle(result.quote)
        print("[favorite] added" if added else "[favorite] removed")
    elif favorites.is_favorite(result.quote.text):
        print("[favorite] already in favorites")


@app.command("favorites")
def list_favorites():
    """List favorite quotes, newest first."""
    _, _, favorites = _load_components()
    items = favorites.list()
    if not items:
        print("No favorites yet.")
        return
    for item in items:
        print(f"{item.added_at}  {item.formatted()}")


@app.command("cache")
def cache_cmd(
    clear: bool = typer.Option(False, "--clear", help="Remove every cached quote"),
):
    """Show or clear the local quote cache."""
    config = AppConfig.load()
    cache = QuoteCache(config.cache_path, max_size=config.cache_max_size)
    if clear:
        cache.clear()
        print("cache: cleared")
        return
    print(f"cache: {cache.count()}/{cache.max_size} quotes at {cache.path}")


@app.command()
def health():
    """Check basic configuration and local sources."""
    config = AppConfig.load()
    cache = QuoteCache(config.cache_path, max_size=config.cache_max_size)
    dataset = FallbackDataset(config.fallback_path)
    relays = ", ".join(config.relay_prefixes) or "none"
    print(f"api: {config.api_url}")
    print(f"relays: {relays}")
    print(f"cache: {cache.count()}/{cache.max_size}")
    print(f"fallback dataset: {len(dataset.load())} quotes")
    print(f"languages: {config.source_lang} -> {config.display_lang}")


def run():
    app()


if __name__ == "__main__":
    run()
