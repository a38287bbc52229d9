"""Tests for the repository cache."""

import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from srclink.config.settings import Settings
from srclink.core.models.source import RepoRecord
from srclink.git import cache as cache_module
from srclink.git.cache import RepoCache


@pytest.fixture
def probe_counter(monkeypatch: pytest.MonkeyPatch) -> Counter:
    """Count repository root probes and fail on a repeated probe."""
    probes: Counter = Counter()
    real_is_repo_root = cache_module.is_repo_root

    def _is_repo_root(directory):
        key = str(directory)
        if probes[key]:
            raise AssertionError(f"Directory probed twice: {key}")
        probes[key] += 1
        return real_is_repo_root(directory)

    monkeypatch.setattr(cache_module, "is_repo_root", _is_repo_root)
    return probes


@pytest.mark.unit
class TestRepoCache:
    """Tests for RepoCache."""

    def test_resolve_root(self, make_repo, settings: Settings) -> None:
        root = make_repo()
        record = RepoCache(settings).resolve(root)
        assert record == RepoRecord(
            root_path=str(root),
            remote_url="git@github.com:acme/docs.git",
            branch="main",
        )

    def test_resolve_nested_directory(self, make_repo, settings: Settings) -> None:
        root = make_repo()
        nested = root / "docs" / "guide"
        nested.mkdir(parents=True)

        cache = RepoCache(settings)
        record = cache.resolve(nested)
        assert record is not None
        assert record.root_path == str(root)
        assert nested in cache
        assert root / "docs" in cache
        assert root in cache

    def test_prefers_origin_remote(self, make_repo, settings: Settings) -> None:
        root = make_repo(
            remotes=[
                ("upstream", "https://github.com/upstream/docs"),
                ("origin", "https://github.com/acme/docs"),
            ]
        )
        record = RepoCache(settings).resolve(root)
        assert record is not None
        assert record.remote_url == "https://github.com/acme/docs"

    def test_no_remote(self, make_repo, settings: Settings) -> None:
        root = make_repo(remotes=[])
        assert RepoCache(settings).resolve(root) is None

    def test_root_without_remote_does_not_continue_upward(
        self, make_repo, settings: Settings
    ) -> None:
        outer = make_repo("outer")
        inner = make_repo("inner", remotes=[], parent=outer)
        assert RepoCache(settings).resolve(inner / "src") is None

    def test_no_branch(self, make_repo, settings: Settings) -> None:
        root = make_repo(head=None)
        assert RepoCache(settings).resolve(root) is None

    def test_environment_branch_overrides_head(
        self, make_repo, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_REF_NAME", "release/2.0")
        root = make_repo(head="ref: refs/heads/main")
        record = RepoCache(Settings(_env_file=None)).resolve(root)
        assert record is not None
        assert record.branch == "release/2.0"

    def test_relative_directory(
        self, make_repo, settings: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        root = make_repo()
        (root / "docs").mkdir()
        monkeypatch.chdir(root)
        record = RepoCache(settings).resolve("docs")
        assert record is not None
        assert Path(record.root_path).resolve() == root.resolve()

    def test_negative_result_is_cached(
        self, tmp_path: Path, settings: Settings, probe_counter: Counter
    ) -> None:
        outside = tmp_path / "plain" / "dir"
        outside.mkdir(parents=True)

        cache = RepoCache(settings)
        first = cache.resolve(outside)
        second = cache.resolve(outside)
        assert first is second
        assert outside in cache
        assert probe_counter[str(outside)] == 1

    def test_siblings_reuse_parent(
        self, make_repo, settings: Settings, probe_counter: Counter
    ) -> None:
        root = make_repo()
        for name in ("a", "b", "c"):
            (root / "docs" / name).mkdir(parents=True)

        cache = RepoCache(settings)
        records = {cache.resolve(root / "docs" / name) for name in ("a", "b", "c")}
        assert len(records) == 1
        assert probe_counter[str(root)] == 1
        assert probe_counter[str(root / "docs")] == 1

    def test_locks_released_after_resolution(self, make_repo, settings: Settings) -> None:
        root = make_repo()
        (root / "docs").mkdir()
        cache = RepoCache(settings)
        cache.resolve(root / "docs")
        cache.resolve(root / "docs")
        assert len(cache) == 2
        assert cache._locks == {}

    def test_clear(self, make_repo, settings: Settings) -> None:
        root = make_repo()
        cache = RepoCache(settings)
        cache.resolve(root)
        assert len(cache) == 1
        cache.clear()
        assert len(cache) == 0
        assert root not in cache

    def test_contains_ignores_other_types(self, settings: Settings) -> None:
        assert 42 not in RepoCache(settings)

    def test_concurrent_resolution_converges(
        self, make_repo, settings: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        root = make_repo()
        nested = root / "docs" / "guide"
        nested.mkdir(parents=True)

        loads = Counter()
        barrier = threading.Barrier(8)
        real_load = RepoCache._load_record

        def _slow_load(self, directory):
            loads[directory] += 1
            return real_load(self, directory)

        monkeypatch.setattr(RepoCache, "_load_record", _slow_load)
        cache = RepoCache(settings)

        def _resolve(_):
            barrier.wait()
            return cache.resolve(nested)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(_resolve, range(8)))

        assert all(result is results[0] for result in results)
        assert results[0] is not None
        assert results[0].root_path == str(root)
        assert loads[str(root)] == 1
