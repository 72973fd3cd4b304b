# src/config.py
"""
Configuration for the daily updater.

Defaults match the production cron box; every field can be overridden
through the environment (see Config.from_env) or the command line.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from sources import ARCHIVE_FILE, CURRENT_FILE, META_FILE, PENDING_FILES, TIMEOUT


@dataclass
class Config:
    """Updater configuration."""

    # local checkout of the published repo
    repo_dir: Path = Path("/tmp/wordlelist")

    # append-only run log
    log_file: Path = Path("/tmp/wordlelist_update.log")

    # comma-separated strategy names, tried in order: bundle, api, scrape
    source: str = "bundle"

    # how many days a word waits before it is archived
    pending_slots: int = 1

    # git
    remote: str = "origin"
    branch: str = "main"
    clone_url: str = ""
    token: str = ""
    author_name: str = "Wordle Bot"
    author_email: str = "wordle-bot@users.noreply.github.com"

    # seconds per HTTP request
    timeout: float = TIMEOUT

    def __post_init__(self):
        self.repo_dir = Path(self.repo_dir)
        self.log_file = Path(self.log_file)
        if self.pending_slots < 1:
            raise ValueError(f"pending_slots must be >= 1, got {self.pending_slots}")

    @classmethod
    def from_env(cls, environ=None) -> "Config":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            repo_dir=Path(env.get("WORDLE_REPO_DIR", defaults.repo_dir)),
            log_file=Path(env.get("WORDLE_LOG_FILE", defaults.log_file)),
            source=env.get("WORDLE_SOURCE", defaults.source),
            pending_slots=int(env.get("WORDLE_PENDING_SLOTS", defaults.pending_slots)),
            remote=env.get("WORDLE_REMOTE", defaults.remote),
            branch=env.get("WORDLE_BRANCH", defaults.branch),
            clone_url=env.get("WORDLE_CLONE_URL", defaults.clone_url),
            token=env.get("GITHUB_TOKEN", defaults.token),
            author_name=env.get("WORDLE_GIT_NAME", defaults.author_name),
            author_email=env.get("WORDLE_GIT_EMAIL", defaults.author_email),
            timeout=float(env.get("WORDLE_TIMEOUT", defaults.timeout)),
        )

    @property
    def source_names(self) -> list[str]:
        return [s.strip().lower() for s in self.source.split(",") if s.strip()]

    @property
    def pending_files(self) -> list[str]:
        """Pending slot file names, newest first."""
        names = []
        for i in range(self.pending_slots):
            if i < len(PENDING_FILES):
                names.append(PENDING_FILES[i])
            else:
                names.append(f"pending_{i + 1}.txt")
        return names

    @property
    def archive_file(self) -> str:
        return ARCHIVE_FILE

    @property
    def current_file(self) -> str:
        return CURRENT_FILE

    @property
    def meta_file(self) -> str:
        return META_FILE
