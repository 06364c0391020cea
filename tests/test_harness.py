"""Pattern-file harness: parsing, per-generation checks and the CLI."""

from __future__ import annotations

import pathlib

import pytest

from game_of_life import Model, ModelNP, PatternFileError
from game_of_life.harness import (
    collect_files,
    main,
    parse_pattern_file,
    run_file,
    run_files,
)

DATA_DIR = pathlib.Path(__file__).resolve().parent / "data"

BLINKER_WRONG_STATE = """\
0 0 0 0 0
0 0 0 0 0
0 1 1 1 0
0 0 0 0 0
0 0 0 0 0

0 0 0 0 0
0 0 1 0 0
0 0 1 0 0
0 0 1 0 0
0 0 0 0 0

0 0 0 0 0
0 0 1 0 0
0 0 1 0 0
0 0 1 0 0
0 0 0 0 0
"""


def write(tmp_path: pathlib.Path, name: str, text: str) -> pathlib.Path:
    path = tmp_path / name
    path.write_text(text)
    return path


@pytest.mark.parametrize("factory", [Model, ModelNP], ids=["python", "numpy"])
@pytest.mark.parametrize("name", ["blinker.txt", "blinker_edge.txt", "block.txt", "glider.txt"])
def test_bundled_patterns_pass(factory, name: str) -> None:
    result = run_file(DATA_DIR / name, factory)
    assert result.passed, result.message
    assert result.generations >= 1


def test_parse_blocks() -> None:
    blocks = parse_pattern_file(DATA_DIR / "block.txt")
    assert len(blocks) == 3
    assert blocks[0] == [[0, 0, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0]]


def test_parse_tolerates_extra_blank_lines(tmp_path) -> None:
    path = write(tmp_path, "p.txt", "\n\n1 1\n1 1\n\n\n\n1 1\n1 1\n\n")
    assert parse_pattern_file(path) == [[[1, 1], [1, 1]], [[1, 1], [1, 1]]]


@pytest.mark.parametrize(
    "text",
    [
        "0 1\n0 0\n",  # only one block
        "0 1\n0 0\n\n0 1 0\n0 0 0\n",  # block shapes differ
        "0 1\n0\n\n0 0\n0 0\n",  # ragged rows
        "0 2\n0 0\n\n0 0\n0 0\n",  # not 0/1
        "",
    ],
)
def test_parse_rejects_malformed_files(tmp_path, text: str) -> None:
    with pytest.raises(PatternFileError):
        parse_pattern_file(write(tmp_path, "bad.txt", text))


def test_state_mismatch_stops_at_first_failure(tmp_path) -> None:
    # Generation 2 expects the vertical line to persist; it flips back instead.
    path = write(tmp_path, "wrong.txt", BLINKER_WRONG_STATE)
    result = run_file(path, Model)
    assert not result.passed
    assert result.generations == 1
    assert "generation 2: change set mismatch" in result.message
    assert "born: expected [], got [11, 13]" in result.message


def test_state_diff_when_changes_match(tmp_path) -> None:
    class LyingModel(Model):
        """Reports correct changes but leaves one cell set after next()."""

        def next(self):
            changes = super().next()
            self._cells[0] = 1
            return changes

    path = DATA_DIR / "blinker.txt"
    result = run_file(path, LyingModel)
    assert not result.passed
    assert "generation 1: state mismatch" in result.message
    assert "expected" in result.message and "got" in result.message


def test_malformed_file_is_a_failure_not_a_crash(tmp_path) -> None:
    result = run_file(write(tmp_path, "bad.txt", "0 1\n"), Model)
    assert not result.passed
    assert "at least one generation" in result.message


def test_undecodable_file_does_not_stop_the_run(tmp_path, capsys) -> None:
    bad = tmp_path / "a_binary.txt"
    bad.write_bytes(b"0 1\xff\n0 0\n\n0 0\n0 0\n")
    with pytest.raises(PatternFileError):
        parse_pattern_file(bad)

    assert not run_files([bad, DATA_DIR / "block.txt"], Model)
    out = capsys.readouterr().out
    assert "1 passed, 1 failed" in out


def test_missing_file_is_a_failure(tmp_path) -> None:
    result = run_file(tmp_path / "nope.txt", Model)
    assert not result.passed


def test_run_files_continues_after_failure(tmp_path, capsys) -> None:
    bad = write(tmp_path, "a_wrong.txt", BLINKER_WRONG_STATE)
    assert not run_files([bad, DATA_DIR / "block.txt"], Model)
    out = capsys.readouterr().out
    assert "✗" in out and "✓" in out
    assert "1 passed, 1 failed" in out


def test_collect_files_globs_directories(tmp_path) -> None:
    write(tmp_path, "b.txt", "")
    write(tmp_path, "a.txt", "")
    write(tmp_path, "notes.md", "")
    extra = tmp_path / "single.dat"
    assert collect_files([tmp_path, extra]) == [tmp_path / "a.txt", tmp_path / "b.txt", extra]


def test_main_exit_codes(tmp_path) -> None:
    with pytest.raises(SystemExit) as ok:
        main([str(DATA_DIR), "--impl", "numpy", "--log-level", "WARNING"])
    assert ok.value.code == 0

    bad = write(tmp_path, "wrong.txt", BLINKER_WRONG_STATE)
    with pytest.raises(SystemExit) as failed:
        main([str(bad), "--log-level", "WARNING"])
    assert failed.value.code == 1


def test_main_unknown_implementation(tmp_path) -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(DATA_DIR), "--impl", "fortran"])
    assert exc.value.code == 2


def test_main_bad_log_level() -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(DATA_DIR), "--log-level", "LOUD"])
    assert exc.value.code == 2
