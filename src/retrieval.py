# src/retrieval.py
"""
Word sources. Each one answers "what is the Wordle for this date?"
with an uppercase 5-letter word or raises FetchError.
"""

import logging
from datetime import date

import requests

from parse import (
    extract_answer_list,
    extract_bundle_urls,
    extract_scraped_answer,
    normalize_word,
    parse_api_payload,
)
from sources import (
    API_URL,
    EPOCH,
    HEADERS,
    MAX_REDIRECTS,
    SCRAPE_URLS,
    TIMEOUT,
    WORDLE_PAGE_URL,
)

log = logging.getLogger(__name__)


class FetchError(Exception):
    """The day's word could not be retrieved. Never fatal."""


def puzzle_number(target_date: date) -> int:
    return (target_date - EPOCH).days


def make_session() -> requests.Session:
    s = requests.Session()
    s.headers.update(HEADERS)
    s.max_redirects = MAX_REDIRECTS
    return s


class WordSource:
    name = "base"

    def __init__(self, session=None, timeout=TIMEOUT):
        self.session = session or make_session()
        self.timeout = timeout

    def fetch(self, target_date: date) -> str:
        raise NotImplementedError

    def get_text(self, url: str) -> str:
        # NYT sometimes serves the full page with a 404; only 5xx is an error
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"{url}: {e}") from e
        if r.status_code >= 500:
            raise FetchError(f"{url}: HTTP {r.status_code}")
        return r.text


class BundleSource(WordSource):
    """Index into the answer list embedded in the game's JS bundle."""

    name = "bundle"

    def __init__(self, session=None, timeout=TIMEOUT, page_url=WORDLE_PAGE_URL):
        super().__init__(session, timeout)
        self.page_url = page_url

    def answers(self) -> list:
        log.info("Fetching Wordle page to find JS bundle ...")
        html = self.get_text(self.page_url)
        urls = extract_bundle_urls(html)
        log.info("Found %d JS files", len(urls))
        for url in urls:
            try:
                js = self.get_text(url)
            except FetchError as e:
                log.warning("bundle fetch failed: %s", e)
                continue
            answers = extract_answer_list(js)
            if answers:
                log.info("Found answer array: %d answers in %s", len(answers), url)
                return answers
        raise FetchError("answer array not found in any JS bundle")

    def fetch(self, target_date: date) -> str:
        number = puzzle_number(target_date)
        log.info("Puzzle number = %d", number)
        answers = self.answers()
        if number < 0 or number >= len(answers):
            raise FetchError(f"puzzle #{number} exceeds known answers ({len(answers)})")
        word = normalize_word(answers[number])
        if not word:
            raise FetchError(f"puzzle #{number} entry is not a 5-letter word: {answers[number]!r}")
        log.info("Puzzle #%d = %s", number, word)
        return word


class ApiSource(WordSource):
    """Official per-day JSON endpoint."""

    name = "api"

    def __init__(self, session=None, timeout=TIMEOUT, url_template=API_URL):
        super().__init__(session, timeout)
        self.url_template = url_template

    def fetch(self, target_date: date) -> str:
        url = self.url_template.format(date=target_date.isoformat())
        log.info("Fetching %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
            payload = r.json()
        except requests.RequestException as e:
            raise FetchError(f"{url}: {e}") from e
        except ValueError as e:
            raise FetchError(f"{url}: bad JSON: {e}") from e
        word = parse_api_payload(payload)
        if not word:
            raise FetchError(f"{url}: no usable 'solution' field")
        return word


class ScrapeSource(WordSource):
    """Try answer pages in priority order until one mentions the word."""

    name = "scrape"

    def __init__(self, session=None, timeout=TIMEOUT, urls=None):
        super().__init__(session, timeout)
        self.urls = list(SCRAPE_URLS if urls is None else urls)

    def fetch(self, target_date: date) -> str:
        number = puzzle_number(target_date)
        for template in self.urls:
            url = template.format(date=target_date.isoformat(), number=number)
            try:
                html = self.get_text(url)
            except FetchError as e:
                log.warning("scrape fetch failed: %s", e)
                continue
            word = extract_scraped_answer(html, number)
            if word:
                log.info("Scraped %s from %s", word, url)
                return word
            log.warning("no answer found on %s", url)
        raise FetchError(f"no answer found on any of {len(self.urls)} pages")


class ChainSource(WordSource):
    """First source that succeeds wins."""

    name = "chain"

    def __init__(self, sources):
        self.sources = list(sources)
        if not self.sources:
            raise ValueError("ChainSource needs at least one source")

    def fetch(self, target_date: date) -> str:
        errors = []
        for source in self.sources:
            try:
                return source.fetch(target_date)
            except FetchError as e:
                log.warning("%s source failed: %s", source.name, e)
                errors.append(f"{source.name}: {e}")
        raise FetchError("; ".join(errors))


STRATEGIES = {
    BundleSource.name: BundleSource,
    ApiSource.name: ApiSource,
    ScrapeSource.name: ScrapeSource,
}


def build_source(names, session=None, timeout=TIMEOUT) -> WordSource:
    if isinstance(names, str):
        names = [n.strip() for n in names.split(",") if n.strip()]
    if not names:
        raise ValueError("no word source configured")
    session = session or make_session()
    sources = []
    for name in names:
        try:
            cls = STRATEGIES[name.lower()]
        except KeyError:
            raise ValueError(
                f"unknown word source {name!r} (choose from {', '.join(STRATEGIES)})"
            ) from None
        sources.append(cls(session=session, timeout=timeout))
    if len(sources) == 1:
        return sources[0]
    return ChainSource(sources)
