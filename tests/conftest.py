import json

import pytest
import requests

from config import Config


class FakeResponse:
    def __init__(self, status_code=200, text="", payload=None):
        self.status_code = status_code
        self.text = text
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self._payload is None:
            raise ValueError("not JSON")
        return self._payload


class FakeSession:
    """Maps URL -> FakeResponse (or an exception to raise)."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        result = self.routes.get(url)
        if result is None:
            raise requests.ConnectionError(f"no route for {url}")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def config(tmp_path):
    return Config(repo_dir=tmp_path / "repo", log_file=tmp_path / "update.log")


@pytest.fixture
def make_repo(config):
    """Lay out repo files the way the published repo has them."""

    def make(archive=(), pending=(), current="", meta=None, cfg=None):
        cfg = cfg or config
        root = cfg.repo_dir
        root.mkdir(parents=True, exist_ok=True)
        (root / "words.txt").write_text("".join(w + "\n" for w in archive), encoding="utf-8")
        for name, word in zip(cfg.pending_files, pending):
            (root / name).write_text(word + "\n", encoding="utf-8")
        (root / "current.txt").write_text(current + "\n", encoding="utf-8")
        if meta is not None:
            (root / "meta.json").write_text(json.dumps(meta), encoding="utf-8")
        return root

    return make
