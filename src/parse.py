# src/parse.py
import json
import re
from bs4 import BeautifulSoup

from sources import ANCHOR_WORD, ANSWER_PATTERNS, ASSET_BASE_URL

W5 = re.compile(r"^[a-z]{5}$")
BUNDLE_SRC = re.compile(r"src=\"(/games-assets/[^\"]+\.js)\"")
ANSWER_ARRAY = re.compile(
    r"\[(?:\"[a-z]{5}\",)*?\"%s\"(?:,\"[a-z]{5}\")+\]" % ANCHOR_WORD
)


def normalize_word(word):
    """Return the uppercase form of a 5-letter alphabetic word, or None."""
    w = (word or "").strip().lower()
    if W5.match(w):
        return w.upper()
    return None


def extract_bundle_urls(html: str) -> list:
    """Absolute URLs of the game's JS bundles, in page order."""
    urls = []
    for m in BUNDLE_SRC.finditer(html or ""):
        url = ASSET_BASE_URL + m.group(1)
        if url not in urls:
            urls.append(url)
    return urls


def extract_answer_list(js: str):
    """
    Find the answer sequence embedded in a JS bundle.
    The returned list starts at the anchor word, so index == puzzle number.
    None if this bundle doesn't carry it.
    """
    m = ANSWER_ARRAY.search(js or "")
    if not m:
        return None
    try:
        words = json.loads(m.group(0))
    except ValueError:
        return None
    return words[words.index(ANCHOR_WORD):]


def parse_api_payload(payload):
    """Pull the solution out of the official per-day JSON."""
    if not isinstance(payload, dict):
        return None
    solution = payload.get("solution")
    if not isinstance(solution, str):
        return None
    return normalize_word(solution)


def page_text(html: str) -> str:
    soup = BeautifulSoup(html or "", "lxml")
    for el in soup(["script", "style", "noscript"]):
        el.decompose()
    return soup.get_text(" ", strip=True)


def extract_scraped_answer(html: str, number=None):
    """
    Best-effort: find the day's answer in an article page.
    Patterns are tried in order against the visible text; first hit wins.
    A hit that names a different puzzle number than `number` is skipped.
    """
    text = page_text(html)
    for pattern in ANSWER_PATTERNS:
        for m in re.finditer(pattern, text, re.IGNORECASE):
            found = m.groupdict().get("number")
            if number is not None and found and int(found.replace(",", "")) != number:
                continue
            word = normalize_word(m.group("word"))
            if word:
                return word
    return None
