# src/archive.py
"""
On-disk state of the published word list and the pure rotation step.

Everything here works on an in-memory ArchiveState; only load_state and
save_state touch the filesystem.
"""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveState:
    archive: list[str]
    # newest first; "" marks an empty slot
    pending: list[str]
    current: str
    meta: dict = field(default_factory=dict)


def normalize(word) -> str:
    return (word or "").strip().upper()


def sorted_archive(words) -> list[str]:
    """Normalized, deduplicated, sorted, no blanks."""
    return sorted({normalize(w) for w in words if normalize(w)})


def add_to_archive(words, word):
    """
    Insert word keeping the list sorted.
    Returns (new_list, added). A word already present, in any case, is a no-op.
    """
    word = normalize(word)
    archive = sorted_archive(words)
    if not word:
        return archive, False
    if word in archive:
        log.info('"%s" already in archive', word)
        return archive, False
    archive.append(word)
    archive.sort()
    log.info('Added "%s" to archive (%d words)', word, len(archive))
    return archive, True


def rotate(state: ArchiveState) -> ArchiveState:
    """Archive the oldest pending word, then shift current into the slots."""
    archive, _ = add_to_archive(state.archive, state.pending[-1])
    pending = [normalize(state.current)] + [normalize(w) for w in state.pending[:-1]]
    log.info("Rotated pending slots: %s", " <- ".join(w or "-" for w in pending))
    return replace(state, archive=archive, pending=pending)


def apply_fetch(state: ArchiveState, word) -> ArchiveState:
    """Use the fetched word as current; None leaves current untouched."""
    if word is None:
        return state
    return replace(state, current=normalize(word))


def _read_word(path: Path) -> str:
    if not path.exists():
        return ""
    return normalize(path.read_text(encoding="utf-8"))


def load_state(root, config) -> ArchiveState:
    root = Path(root)
    archive_path = root / config.archive_file
    words = []
    if archive_path.exists():
        words = archive_path.read_text(encoding="utf-8").splitlines()

    meta = {}
    meta_path = root / config.meta_file
    if meta_path.exists():
        try:
            with meta_path.open("r", encoding="utf-8") as f:
                meta = json.load(f)
        except ValueError as e:
            log.warning("Ignoring unreadable %s: %s", meta_path.name, e)

    return ArchiveState(
        archive=sorted_archive(words),
        pending=[_read_word(root / name) for name in config.pending_files],
        current=_read_word(root / config.current_file),
        meta=meta,
    )


def render_word(word: str) -> str:
    return word + "\n" if word else ""


def render_archive(words) -> str:
    return "".join(w + "\n" for w in words)


def render_meta(meta: dict) -> str:
    return json.dumps(meta, indent=2) + "\n"


def write_text(path: Path, text: str):
    """Write via a temp file so readers never see a partial file."""
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
    os.replace(tmp, path)


def save_state(root, state: ArchiveState, config, write=True) -> list[Path]:
    """
    Write every file whose content differs; return the changed paths.
    Word files are compared by value, so an unchanged word keeps its bytes
    and an empty slot is never created. write=False only reports.
    """
    root = Path(root)
    words = dict(zip(config.pending_files, state.pending))
    words[config.current_file] = state.current
    rendered = {config.archive_file: render_archive(state.archive)}
    for name, word in words.items():
        rendered[name] = render_word(word)
    rendered[config.meta_file] = render_meta(state.meta)

    changed = []
    for name, text in rendered.items():
        path = root / name
        if name in words:
            if _read_word(path) == normalize(words[name]):
                continue
        elif path.exists() and path.read_text(encoding="utf-8") == text:
            continue
        changed.append(path)

    if write and changed:
        root.mkdir(parents=True, exist_ok=True)
        for path in changed:
            write_text(path, rendered[path.name])
    return changed
