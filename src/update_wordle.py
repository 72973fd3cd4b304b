# src/update_wordle.py
"""
Daily Wordle word list updater.

Scheduled for 10:00 UTC, which is midnight in UTC+14, the first timezone
to see a new puzzle. Each run:
- git pull
- moves the oldest pending word into words.txt (sorted, no dupes)
- shifts current.txt into the pending slot(s)
- fetches the new answer into current.txt
- writes meta.json with the UTC+14 date
- commits and pushes

If the fetch fails, everything except current.txt is still published and
the site keeps showing the previous word.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from archive import ArchiveState, apply_fetch, load_state, normalize, rotate, save_state
from config import Config
from publish import GitPublisher, NullPublisher, PublishError
from retrieval import FetchError, build_source, make_session
from sources import REFERENCE_OFFSET_HOURS

log = logging.getLogger("update_wordle")

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"


@dataclass
class RunResult:
    wordle_date: str
    word: str | None
    state: ArchiveState
    changed: list
    published: bool

    @property
    def fetched(self) -> bool:
        return self.word is not None


def setup_logging(log_file=None, verbose=False):
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def target_date(now=None) -> date:
    """The puzzle date: wall clock shifted into UTC+14, truncated to a day."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now.astimezone(timezone.utc) + timedelta(hours=REFERENCE_OFFSET_HOURS)).date()


def commit_label(wordle_date: str, word) -> str:
    if word:
        return f"Daily update: {wordle_date} ({word})"
    return f"Daily update: {wordle_date} (word fetch failed)"


def fetch_word(source, day: date):
    try:
        return normalize(source.fetch(day)) or None
    except FetchError as e:
        log.warning("Word fetch FAILED (%s). current.txt unchanged; site keeps the previous word.", e)
        return None


def run(config: Config, source, publisher, now=None, write=True) -> RunResult:
    publisher.pull()

    state = load_state(config.repo_dir, config)
    log.info(
        "State -> pending: %s | current: %s | archive: %d words",
        ", ".join(w or "-" for w in state.pending),
        state.current or "-",
        len(state.archive),
    )

    state = rotate(state)

    now = now or datetime.now(timezone.utc)
    day = target_date(now)
    wordle_date = day.isoformat()
    log.info("wordle_date = %s", wordle_date)

    word = fetch_word(source, day)
    state = apply_fetch(state, word)
    if word:
        log.info("current = %s", state.current)

    state = replace(state, meta={"wordle_date": wordle_date, "ran_at": now.isoformat()})

    changed = save_state(config.repo_dir, state, config, write=write)
    log.info("%s files: %s", "Changed" if write else "Would change", ", ".join(p.name for p in changed) or "none")

    published = False
    if changed:
        published = publisher.publish(changed, commit_label(wordle_date, word))
    else:
        log.info("Nothing to publish")

    return RunResult(wordle_date, word, state, changed, published)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rotate and publish the daily Wordle word list.")
    parser.add_argument("--repo-dir", type=Path, default=None, help="checkout of the published repo")
    parser.add_argument("--source", default=None, help="word source(s): bundle, api, scrape (comma-separated)")
    parser.add_argument("--pending-slots", type=int, default=None, help="days a word waits before archiving")
    parser.add_argument("--log-file", type=Path, default=None, help="append log path")
    parser.add_argument("--dry-run", action="store_true", help="log the new state without writing files or touching git")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def build_config(args) -> Config:
    config = Config.from_env()
    overrides = {
        "repo_dir": args.repo_dir,
        "source": args.source,
        "pending_slots": args.pending_slots,
        "log_file": args.log_file,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as e:
        print(f"config error: {e}", file=sys.stderr)
        return 1
    setup_logging(config.log_file, args.verbose)

    log.info("=== Wordle updater START ===")
    try:
        source = build_source(config.source_names, make_session(), config.timeout)
        publisher = NullPublisher() if args.dry_run else GitPublisher.from_config(config)
        result = run(config, source, publisher, write=not args.dry_run)
    except (PublishError, ValueError, OSError) as e:
        log.exception("FATAL: %s", e)
        return 1
    except Exception as e:
        log.exception("FATAL: unexpected error: %s", e)
        return 1

    log.info(
        "OK. wordle_date=%s word=%s archive=%d published=%s",
        result.wordle_date,
        result.word or "(unchanged)",
        len(result.state.archive),
        result.published,
    )
    log.info("=== Wordle updater DONE ===")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
