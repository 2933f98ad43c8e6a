"""Run one group of URLs through the heuristics and the modifier pipeline."""

import logging
from dataclasses import dataclass
from typing import Iterator

from .config import ModifierConfig
from .errors import UrlToolError, wrap_error
from .hacks import normalize
from .pipeline import apply_modifiers
from .url import URL, parse_url_reference

logger = logging.getLogger(__name__)


@dataclass
class BatchItem:
    """The outcome for one input URL: its serialized result or the error that stopped it."""
    source: str
    url: str | None = None
    error: UrlToolError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_urls(raw_urls: list[str]) -> list[URL]:
    """Parse every argument before any is modified.

    Raises URLParseError for the first argument that is not a URL-reference.
    """
    urls = []
    for raw in raw_urls:
        try:
            urls.append(parse_url_reference(raw))
        except ValueError as e:
            raise wrap_error(e, f"parse URL {raw!r}", {"url": raw}) from e
    return urls


def process_url(url: URL, config: ModifierConfig) -> URL:
    if not config.disable_hacks:
        normalize(url)
    return apply_modifiers(url, config)


def iter_batch(raw_urls: list[str], config: ModifierConfig) -> Iterator[BatchItem]:
    """Yield one BatchItem per input URL, in order, as each one completes.

    A parse error in any argument is raised before anything is yielded. A
    failure while modifying one URL is recorded on its item and the rest
    of the batch still runs.
    """
    urls = parse_urls(raw_urls)
    for raw, url in zip(raw_urls, urls):
        try:
            result = process_url(url, config)
        except UrlToolError as e:
            logger.info(f"Skipping {raw!r}: {e}")
            yield BatchItem(source=raw, error=e)
            continue
        yield BatchItem(source=raw, url=result.serialize())


def process_batch(raw_urls: list[str], config: ModifierConfig) -> list[BatchItem]:
    return list(iter_batch(raw_urls, config))
