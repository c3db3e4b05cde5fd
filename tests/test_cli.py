import io
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from advsearch.cli import main

SRC = Path(__file__).resolve().parents[1] / "src"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("ADVSEARCH_DEPTH", "ADVSEARCH_STRICT", "ADVSEARCH_ITERATIVE"):
        monkeypatch.delenv(var, raising=False)


def test_evaluate_winning_position(caplog):
    caplog.set_level(logging.INFO)
    assert main(["evaluate", "--board", "xx./oo./...", "--depth", "10"]) == 0
    assert "value=inf" in caplog.text
    assert "best=(0, 2)" in caplog.text


def test_evaluate_with_explicit_side_and_iterative_engine(caplog):
    caplog.set_level(logging.INFO)
    assert main(["evaluate", "--board", "xx.oo.x..", "--to-move", "o", "--iterative"]) == 0
    assert "value=-inf" in caplog.text


def test_moves_lists_every_legal_move(caplog):
    caplog.set_level(logging.INFO)
    assert main(["moves", "--board", "xx.oo.x..", "--depth", "4"]) == 0
    move_lines = [r.getMessage() for r in caplog.records if r.getMessage().startswith("move=")]
    assert len(move_lines) == 4
    assert "move=(1, 2) score=-inf" in move_lines


@pytest.mark.parametrize("bad", ["abc", "xx.oo...", "xx.oo...z", "xxxxxxxxx", "xxxooo..."])
def test_invalid_boards_exit_with_error(bad, caplog):
    assert main(["evaluate", "--board", bad]) == 2
    assert main(["moves", "--board", bad]) == 2
    assert "Invalid board" in caplog.text


def test_missing_board_is_an_error():
    assert main(["evaluate"]) == 2


def test_negative_depth_is_an_error():
    assert main(["evaluate", "--board", ".........", "--depth", "-1"]) == 2


def test_bad_depth_in_environment_is_an_error(monkeypatch, caplog):
    monkeypatch.setenv("ADVSEARCH_DEPTH", "deep")
    assert main(["evaluate", "--board", "........."]) == 2
    assert "ADVSEARCH_DEPTH" in caplog.text


def test_environment_depth_is_used(monkeypatch, caplog):
    caplog.set_level(logging.INFO)
    monkeypatch.setenv("ADVSEARCH_DEPTH", "0")
    assert main(["moves", "--board", "xx./oo./..."]) == 0
    assert "depth=0" in caplog.text
    assert not [r for r in caplog.records if r.getMessage().startswith("move=")]


def test_evaluate_stdin_streams_csv(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("xx.oo....\nnot-a-board\n\nxxxoo....\n"))
    assert main(["evaluate", "--stdin", "--depth", "10"]) == 0
    rows = capsys.readouterr().out.splitlines()
    assert rows[0] == "board,value,optimal_moves"
    assert len(rows) == 3
    assert rows[1].startswith("xx.oo....,inf,02")
    assert rows[2] == "xxxoo....,inf,"


def test_play_reads_moves_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("u\nh\ni\nj\no\n"))
    assert main(["play", "--depth", "2"]) == 0
    out = capsys.readouterr().out
    assert "result: x wins" in out


def test_version_flag(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_cli_help_smoke(tmp_path: Path):
    exe = [sys.executable, "-m", "advsearch.cli"]
    env = dict(os.environ, PYTHONPATH=os.pathsep.join([str(SRC), os.environ.get("PYTHONPATH", "")]))
    for args in (["--help"], ["evaluate", "--help"], ["moves", "--help"], ["play", "--help"]):
        r = subprocess.run(exe + args, cwd=tmp_path, capture_output=True, text=True, env=env)
        assert r.returncode == 0
        assert r.stdout or r.stderr
