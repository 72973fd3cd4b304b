from datetime import date

import pytest
import requests

from conftest import FakeResponse, FakeSession
from retrieval import (
    ApiSource,
    BundleSource,
    ChainSource,
    FetchError,
    ScrapeSource,
    build_source,
    make_session,
    puzzle_number,
)
from sources import API_URL, MAX_REDIRECTS, WORDLE_PAGE_URL

PAGE = (
    '<script src="/games-assets/v2/vendor.js"></script>'
    '<script src="/games-assets/v2/wordle.js"></script>'
)
BUNDLE = 'var x=1;var Ma=["aback","cigar","rebut","sissy","humph"];'


def bundle_session(**overrides):
    routes = {
        WORDLE_PAGE_URL: FakeResponse(text=PAGE),
        "https://www.nytimes.com/games-assets/v2/vendor.js": FakeResponse(text="var nothing;"),
        "https://www.nytimes.com/games-assets/v2/wordle.js": FakeResponse(text=BUNDLE),
    }
    routes.update(overrides)
    return FakeSession(routes)


class StaticSource:
    def __init__(self, name, word=None):
        self.name = name
        self.word = word
        self.calls = 0

    def fetch(self, target_date):
        self.calls += 1
        if self.word is None:
            raise FetchError(f"{self.name} down")
        return self.word


def test_puzzle_number():
    assert puzzle_number(date(2021, 6, 19)) == 0
    assert puzzle_number(date(2021, 6, 20)) == 1
    assert puzzle_number(date(2022, 6, 19)) == 365


def test_make_session():
    s = make_session()
    assert s.max_redirects == MAX_REDIRECTS
    assert "Mozilla" in s.headers["User-Agent"]


def test_bundle_source_indexes_by_puzzle_number():
    source = BundleSource(session=bundle_session())
    assert source.fetch(date(2021, 6, 21)) == "SISSY"


def test_bundle_source_accepts_404_body():
    session = bundle_session(**{WORDLE_PAGE_URL: FakeResponse(status_code=404, text=PAGE)})
    assert BundleSource(session=session).fetch(date(2021, 6, 19)) == "CIGAR"


def test_bundle_source_skips_broken_bundle():
    session = bundle_session(
        **{"https://www.nytimes.com/games-assets/v2/vendor.js": requests.Timeout("slow")}
    )
    assert BundleSource(session=session).fetch(date(2021, 6, 20)) == "REBUT"


def test_bundle_source_out_of_range():
    with pytest.raises(FetchError, match="exceeds known answers"):
        BundleSource(session=bundle_session()).fetch(date(2021, 6, 25))


def test_bundle_source_server_error():
    session = bundle_session(**{WORDLE_PAGE_URL: FakeResponse(status_code=503)})
    with pytest.raises(FetchError, match="HTTP 503"):
        BundleSource(session=session).fetch(date(2021, 6, 20))


def test_bundle_source_no_array():
    session = bundle_session(
        **{"https://www.nytimes.com/games-assets/v2/wordle.js": FakeResponse(text="var y;")}
    )
    with pytest.raises(FetchError, match="not found"):
        BundleSource(session=session).fetch(date(2021, 6, 20))


def test_api_source():
    url = API_URL.format(date="2026-10-18")
    session = FakeSession({url: FakeResponse(payload={"solution": "house", "print_date": "2026-10-18"})})
    assert ApiSource(session=session).fetch(date(2026, 10, 18)) == "HOUSE"
    assert session.requested == [url]


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(status_code=404, payload={"status": "ERROR"}),
        FakeResponse(text="<html>not json</html>"),
        FakeResponse(payload={"solution": "toolong"}),
        requests.ConnectionError("down"),
    ],
)
def test_api_source_failures(response):
    session = FakeSession({API_URL.format(date="2026-10-18"): response})
    with pytest.raises(FetchError):
        ApiSource(session=session).fetch(date(2026, 10, 18))


def test_scrape_source_tries_pages_in_order():
    session = FakeSession(
        {
            f"https://a.example/wordle-{puzzle_number(date(2026, 10, 18))}": FakeResponse(text="<p>The answer is below.</p>"),
            "https://b.example/2026-10-18": FakeResponse(text="<p>Today's Wordle answer is HOUSE.</p>"),
            "https://c.example/": FakeResponse(text="<p>Today's word is CRANE.</p>"),
        }
    )
    source = ScrapeSource(
        session=session,
        urls=[
            "https://down.example/",
            "https://a.example/wordle-{number}",
            "https://b.example/{date}",
            "https://c.example/",
        ],
    )
    assert source.fetch(date(2026, 10, 18)) == "HOUSE"
    assert "https://c.example/" not in session.requested


def test_scrape_source_all_fail():
    source = ScrapeSource(session=FakeSession(), urls=["https://down.example/"])
    with pytest.raises(FetchError):
        source.fetch(date(2026, 10, 18))


def test_chain_source_first_success_wins():
    first, second, third = StaticSource("api"), StaticSource("bundle", "HOUSE"), StaticSource("scrape", "CRANE")
    assert ChainSource([first, second, third]).fetch(date(2026, 10, 18)) == "HOUSE"
    assert (first.calls, second.calls, third.calls) == (1, 1, 0)


def test_chain_source_all_fail():
    with pytest.raises(FetchError, match="api: api down; bundle: bundle down"):
        ChainSource([StaticSource("api"), StaticSource("bundle")]).fetch(date(2026, 10, 18))


def test_build_source():
    session = FakeSession()
    assert isinstance(build_source("bundle", session), BundleSource)
    assert isinstance(build_source(["API"], session), ApiSource)
    chain = build_source("api, bundle,scrape", session)
    assert isinstance(chain, ChainSource)
    assert [s.name for s in chain.sources] == ["api", "bundle", "scrape"]
    assert all(s.session is session for s in chain.sources)


@pytest.mark.parametrize("names", ["", "carrier-pigeon", "api,nope"])
def test_build_source_rejects_bad_config(names):
    with pytest.raises(ValueError):
        build_source(names, FakeSession())


def test_scrape_source_rejects_stale_puzzle():
    day = date(2026, 10, 18)
    stale = puzzle_number(day) - 1
    session = FakeSession(
        {
            "https://a.example/": FakeResponse(text=f"<p>The answer to Wordle #{stale} is crane.</p>"),
            "https://b.example/": FakeResponse(text=f"<p>The answer to Wordle #{stale + 1} is house.</p>"),
        }
    )
    source = ScrapeSource(session=session, urls=["https://a.example/", "https://b.example/"])
    assert source.fetch(day) == "HOUSE"


def test_scrape_source_only_stale_pages_fails():
    day = date(2026, 10, 18)
    session = FakeSession(
        {"https://a.example/": FakeResponse(text=f"<p>The answer to Wordle #{puzzle_number(day) - 1} is crane.</p>")}
    )
    with pytest.raises(FetchError):
        ScrapeSource(session=session, urls=["https://a.example/"]).fetch(day)
