"""Tests for source directory scanning."""

from pathlib import Path

import pytest

from archboard_cli.errors import DirectoryNotFoundError
from archboard_cli.scanner import load_modules, matched_suffix, read_source, scan_directory


def test_scan_counts_recognized_files(write_sources):
    root = write_sources({"a.ts": "", "b.js": "", "c.ts": ""})

    assert sorted(scan_directory(root)) == ["a.ts", "b.js", "c.ts"]


def test_scan_excludes_other_suffixes(write_sources):
    root = write_sources({
        "a.ts": "",
        "notes.md": "",
        "style.css": "",
        "types.tsx": "",
        "data.json": "",
    })

    assert scan_directory(root) == ["a.ts"]


def test_scan_skips_directories_and_is_not_recursive(write_sources):
    root = write_sources({"main.ts": ""})
    (root / "lib.ts").mkdir()
    (root / "nested").mkdir()
    (root / "nested" / "inner.ts").write_text("")

    assert scan_directory(root) == ["main.ts"]


def test_scan_missing_directory(temp_dir: Path):
    with pytest.raises(DirectoryNotFoundError) as exc_info:
        scan_directory(temp_dir / "nope")

    assert "nope" in str(exc_info.value)


def test_scan_file_instead_of_directory(write_sources):
    root = write_sources({"a.ts": ""})

    with pytest.raises(DirectoryNotFoundError):
        scan_directory(root / "a.ts")


def test_matched_suffix_priority():
    assert matched_suffix("server.ts") == ".ts"
    assert matched_suffix("server.js") == ".js"
    assert matched_suffix("server.d.ts") == ".ts"
    assert matched_suffix("server.py") is None


def test_read_source_tolerates_bad_bytes(temp_dir: Path):
    (temp_dir / "bin.ts").write_bytes(b"export const A = 1;\n\xff\xfe")

    text = read_source(temp_dir, "bin.ts")

    assert text.startswith("export const A")


def test_load_modules_sample_project(sample_project_path: Path):
    records = {r.module_name: r for r in load_modules(sample_project_path)}

    assert set(records) == {"server", "routes", "auth"}
    assert records["server"].imported_names == ("auth", "routes")
    assert records["routes"].exported_symbols == ("registerRoutes",)
    assert records["auth"].exported_symbols == ("authMiddleware",)
