"""Tests for routica.scanner.file_scanner — language detection and discovery policy."""

import os
from pathlib import Path
from typing import List

import pytest

from routica.config import DiscoveryPolicy
from routica.scanner.file_scanner import find_candidate_files, is_typescript_project


def relative(root: Path, paths: List[str]) -> List[str]:
    return [os.path.relpath(p, root).replace(os.sep, "/") for p in paths]


class TestIsTypescriptProject:
    def test_plain_javascript(self, make_project) -> None:
        root = make_project({"index.js": "", "lib.js": ""})
        assert is_typescript_project(str(root)) is False

    def test_ts_file_at_top_level(self, make_project) -> None:
        root = make_project({"index.js": "", "lib.js": "", "types.d.ts": ""})
        assert is_typescript_project(str(root)) is True

    def test_tsx_file_at_top_level(self, make_project) -> None:
        root = make_project({"App.tsx": ""})
        assert is_typescript_project(str(root)) is True

    def test_nested_ts_files_do_not_count(self, make_project) -> None:
        root = make_project({"index.js": "", "src/server.ts": ""})
        assert is_typescript_project(str(root)) is False

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            is_typescript_project(str(tmp_path / "nope"))


class TestFindCandidateFiles:
    def test_routes_subtree_and_entry_points(self, make_project) -> None:
        root = make_project({
            "index.js": "",
            "app.js": "",
            "server.js": "",
            "src/utils/helper.js": "",
            "routes/users.js": "",
            "routes/admin/panel.js": "",
            "routes/README.md": "",
        })
        found = find_candidate_files(str(root), False)
        assert relative(root, found) == [
            "app.js",
            "index.js",
            "routes/admin/panel.js",
            "routes/users.js",
        ]

    def test_unmatched_directories_are_not_entered(self, make_project) -> None:
        root = make_project({
            "src/index.js": "",
            "src/routes/users.js": "",
            "lib/app.js": "",
        })
        assert find_candidate_files(str(root), False) == []

    def test_entry_point_names_must_match_exactly(self, make_project) -> None:
        root = make_project({"myindex.js": "", "app.jsx": "", "index.js": ""})
        assert relative(root, find_candidate_files(str(root), False)) == ["index.js"]

    def test_ts_files_only_for_typescript_projects(self, make_project) -> None:
        root = make_project({
            "index.ts": "",
            "app.ts": "",
            "routes/items.ts": "",
            "routes/legacy.js": "",
            "routes/view.tsx": "",
        })
        assert relative(root, find_candidate_files(str(root), False)) == ["routes/legacy.js"]
        assert relative(root, find_candidate_files(str(root), True)) == [
            "app.ts",
            "index.ts",
            "routes/items.ts",
            "routes/legacy.js",
        ]

    def test_ignored_fragments(self, make_project) -> None:
        root = make_project({
            "routes/users.js": "",
            "routes/node_modules/dep/index.js": "",
            "routes/dist/bundle.js": "",
            "routes/.git/hooks.js": "",
        })
        assert relative(root, find_candidate_files(str(root), False)) == ["routes/users.js"]

    def test_custom_policy(self, make_project) -> None:
        root = make_project({
            "api/users.js": "",
            "routes/users.js": "",
            "server.js": "",
            "api/generated/client.js": "",
        })
        policy = DiscoveryPolicy(
            ignore_paths=frozenset({"generated"}),
            include_names=frozenset({"server.js"}),
            routes_dir_name="api",
        )
        assert relative(root, find_candidate_files(str(root), False, policy)) == [
            "api/users.js",
            "server.js",
        ]

    def test_routes_dir_must_be_directly_under_root(self, make_project) -> None:
        root = make_project({"routes-old/users.js": "", "routes/ok.js": ""})
        assert relative(root, find_candidate_files(str(root), False)) == ["routes/ok.js"]

    def test_directory_contents_before_later_siblings(self, make_project) -> None:
        root = make_project({
            "routes/c/three.js": "",
            "routes/b.js": "",
            "routes/a/two.js": "",
            "routes/aa.js": "",
            "routes/a/one.js": "",
        })
        assert relative(root, find_candidate_files(str(root), False)) == [
            "routes/a/one.js",
            "routes/a/two.js",
            "routes/aa.js",
            "routes/b.js",
            "routes/c/three.js",
        ]

    def test_entries_in_sorted_order(self, make_project) -> None:
        names = ["zeta", "alpha", "mid", "k", "beta", "omega", "c", "gamma", "Upper", "_under"]
        root = make_project({f"routes/{n}.js": "" for n in names})
        found = relative(root, find_candidate_files(str(root), False))
        assert found == [f"routes/{n}.js" for n in sorted(names)]

    def test_same_order_every_run(self, make_project) -> None:
        root = make_project({f"routes/r{i}/f{i}.js": "" for i in range(12)})
        first = find_candidate_files(str(root), False)
        assert find_candidate_files(str(root), False) == first

    def test_empty_project(self, make_project) -> None:
        root = make_project({})
        assert find_candidate_files(str(root), False) == []

    def test_symlink_cycle_visited_once(self, make_project) -> None:
        root = make_project({"routes/users.js": ""})
        os.symlink(root / "routes", root / "routes" / "loop")
        found = relative(root, find_candidate_files(str(root), False))
        assert found == ["routes/users.js"]

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            find_candidate_files(str(tmp_path / "missing"), False)


class TestListingErrors:
    @pytest.fixture
    def locked(self, make_project, monkeypatch: pytest.MonkeyPatch) -> Path:
        root = make_project({"routes/open/a.js": "", "routes/locked/b.js": ""})
        real_listdir = os.listdir
        locked_dir = str(root / "routes" / "locked")

        def fake_listdir(path):
            if str(path) == locked_dir:
                raise PermissionError(13, "Permission denied", locked_dir)
            return real_listdir(path)

        monkeypatch.setattr(os, "listdir", fake_listdir)
        return root

    def test_onerror_skips_directory(self, locked: Path) -> None:
        errors = []
        found = find_candidate_files(str(locked), False, onerror=errors.append)
        assert relative(locked, found) == ["routes/open/a.js"]
        assert len(errors) == 1
        assert isinstance(errors[0], PermissionError)

    def test_without_onerror_propagates(self, locked: Path) -> None:
        with pytest.raises(PermissionError):
            find_candidate_files(str(locked), False)
