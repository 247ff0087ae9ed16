"""Document contents and previous results, over HTTP or from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from evo import __version__
from evo.core.schema import EvolutionMetadata, Proposal
from evo.sources.base import SourceError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def is_url(locator: str) -> bool:
    return locator.startswith(("https://", "http://"))


def make_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """HTTP client shared by all fetches of one run."""
    return httpx.Client(
        follow_redirects=True,
        timeout=timeout,
        headers={"User-Agent": f"evolution-metadata-extractor/{__version__}"},
    )


def fetch_text(locator: str, client: httpx.Client | None = None) -> str:
    """Return the text behind a locator: an http(s) URL or a file path."""
    if not is_url(locator):
        try:
            return Path(locator).read_text(encoding="utf-8")
        except OSError as e:
            raise SourceError(f"Cannot read {locator}: {e}") from e

    owns_client = client is None
    if client is None:
        client = make_client()
    try:
        response = client.get(locator)
        response.raise_for_status()
        return response.text
    except httpx.HTTPError as e:
        raise SourceError(f"Cannot fetch {locator}: {e}") from e
    finally:
        if owns_client:
            client.close()


def parse_previous_results(raw: str) -> list[Proposal]:
    """Accept either a full metadata document or a bare list of proposals."""
    try:
        data = json.loads(raw)
        if isinstance(data, list):
            return [Proposal.model_validate(item) for item in data]
        return EvolutionMetadata.model_validate(data).proposals
    except (json.JSONDecodeError, ValidationError) as e:
        raise SourceError(f"Invalid previous results: {e}") from e


def load_previous_results(location: str, client: httpx.Client | None = None) -> list[Proposal]:
    logger.info("Loading previous results from %s", location)
    return parse_previous_results(fetch_text(location, client))
