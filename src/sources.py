# src/sources.py
# Centralized endpoints and constants

from datetime import date

# Wordle game page; the answer list is embedded in one of its JS bundles
WORDLE_PAGE_URL = "https://www.nytimes.com/games/wordle/index.html"
ASSET_BASE_URL = "https://www.nytimes.com"

# Official per-day endpoint, keyed by YYYY-MM-DD
API_URL = "https://www.nytimes.com/svc/wordle/v2/{date}.json"

# Pages that publish "today's answer", in priority order.
# {date} is the target date (YYYY-MM-DD), {number} the puzzle number.
SCRAPE_URLS = [
    "https://www.techradar.com/news/wordle-today",
    "https://wordfinder.yourdictionary.com/wordle/answers/",
]

# Puzzle #0 ("cigar") was played on this date
EPOCH = date(2021, 6, 19)
ANCHOR_WORD = "cigar"

# The first timezone to reach a new calendar day
REFERENCE_OFFSET_HOURS = 14

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/javascript,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

TIMEOUT = 15
MAX_REDIRECTS = 5

# On-disk file names inside the published repo
ARCHIVE_FILE = "words.txt"
CURRENT_FILE = "current.txt"
META_FILE = "meta.json"
# Pending slots, newest first; deeper slots fall back to pending_<n>.txt
PENDING_FILES = ["prior.txt", "safe.txt"]

# Phrases that introduce the answer on the scraped pages, tried in order.
# A captured puzzle number must match the target puzzle.
ANSWER_PATTERNS = [
    r"today.?s\s+wordle\s+answer\s+is\W+(?P<word>[a-z]{5})\b",
    r"answer\s+to\s+wordle\s+#?(?P<number>\d[\d,]*)\s+is\W+(?P<word>[a-z]{5})\b",
    r"wordle\s+#?(?P<number>\d[\d,]*)\s+answer\W+(?P<word>[a-z]{5})\b",
    r"today.?s\s+word\s+is\W+(?P<word>[a-z]{5})\b",
]
