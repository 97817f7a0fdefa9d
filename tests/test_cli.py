"""
Interactive flow tests: prompts are fed from StringIO streams and the rich
console writes into a StringIO buffer.
"""

from __future__ import annotations

import io
import re

import pytest
from rich.console import Console

from sortlab import cli
from sortlab.config import Settings


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=200), buf


def test_method_name_is_case_insensitive() -> None:
    console, _ = _console()
    spec = cli.read_method(console, io.StringIO("BUBBLE\n"))
    assert spec.name == "bubble"
    assert spec.label == "Bubble"


def test_unknown_method_reprompts() -> None:
    console, buf = _console()
    spec = cli.read_method(console, io.StringIO("bogus\n  Quick  \n"))
    assert spec.name == "quick"
    out = buf.getvalue()
    assert cli.INVALID_METHOD_MSG in out
    assert out.count(cli.METHOD_PROMPT) == 2


def test_help_lists_methods_without_dispatching() -> None:
    console, buf = _console()
    spec = cli.read_method(console, io.StringIO("help\nmerge\n"))
    assert spec.name == "merge"
    out = buf.getvalue()
    for label in ("Bubble", "Selection", "Insertion", "Merge", "Quick"):
        assert f"{label}\n" in out


def test_end_of_input_raises_eof() -> None:
    console, _ = _console()
    with pytest.raises(EOFError):
        cli.read_method(console, io.StringIO("bogus\n"))


@pytest.mark.parametrize("bad", ["abc", "0", "-3", "2.5"])
def test_invalid_size_reprompts(bad: str) -> None:
    console, buf = _console()
    n = cli.read_size(console, io.StringIO(f"{bad}\n7\n"))
    assert n == 7
    assert cli.INVALID_SIZE_MSG in buf.getvalue()


def test_format_sequence() -> None:
    assert cli.format_sequence([3, 1, 2]) == "3 1 2"
    assert cli.format_sequence([]) == ""
    assert cli.format_sequence(list(range(10)), max_print=3) == "0 1 2 ... (7 more)"


def test_session_end_to_end() -> None:
    console, buf = _console()
    seq, report = cli.run_session(Settings(seed=0), console=console, stream=io.StringIO("5\nhelp\nSelection\n"))

    assert seq == [1, 2, 3, 4, 5]
    assert report.method == "Selection"
    assert report.steps == 14

    # prompts are not echoed, so output follows them on the same line
    out = buf.getvalue()
    initial = out.split("Initial Array: ", 1)[1].splitlines()[0]
    assert sorted(int(x) for x in initial.split()) == [1, 2, 3, 4, 5]
    assert "Selection Sort: 14 iterations\n" in out
    assert re.search(r"\nSorted in [0-9.e+-]+ms\.\n", out)
    assert out.index("iterations") < out.index("Sorted in ") < out.index("Sorted Array: ")
    assert out.rstrip("\n").endswith("Sorted Array: 1 2 3 4 5")


def test_session_uses_preset_size_and_method() -> None:
    console, buf = _console()
    seq, report = cli.run_session(
        Settings(seed=3, size=8, method="insertion"),
        console=console,
        stream=io.StringIO(""),
    )
    assert seq == list(range(1, 9))
    assert report.method == "Insertion"
    assert cli.SIZE_PROMPT not in buf.getvalue()
    assert cli.METHOD_PROMPT not in buf.getvalue()


def test_same_seed_gives_same_initial_array() -> None:
    outs = []
    for _ in range(2):
        console, buf = _console()
        cli.run_session(Settings(seed=11, size=12, method="bubble"), console=console, stream=io.StringIO(""))
        outs.append(buf.getvalue().splitlines()[0])
    assert outs[0] == outs[1]


def test_main_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("6\nbogus\nQUICK\n"))
    assert cli.main(["--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert cli.INVALID_METHOD_MSG in out
    assert "Quick Sort: " in out
    assert "Sorted Array: 1 2 3 4 5 6" in out


def test_main_returns_1_when_input_ends(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("4\n"))
    assert cli.main([]) == 1


def test_main_rejects_unknown_method_option(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["--method", "bogo"])
    assert exc.value.code == 2


def test_main_reports_bad_config_file(tmp_path, capsys) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("colour: blue\n", encoding="utf-8")
    assert cli.main(["--config", str(path), "--size", "3", "--method", "merge"]) == 2
    assert "Unknown config keys" in capsys.readouterr().err


def test_main_few_uniques_from_flags_alone(capsys) -> None:
    assert cli.main(["--dist", "few_uniques", "--size", "6", "--method", "merge"]) == 0
    out = capsys.readouterr().out
    sorted_line = out.split("Sorted Array: ", 1)[1].splitlines()[0]
    values = [int(x) for x in sorted_line.split()]
    assert values == sorted(values)
    assert set(values) <= {1, 2, 3, 4, 5}


@pytest.mark.parametrize(
    "yaml_text",
    [
        "dataset:\n  dist: few_uniques\n  params: {k: 0}\n",
        "dataset:\n  dist: nearly_sorted\n  params: {swap_frac: 3}\n",
    ],
)
def test_main_reports_bad_dataset_params(tmp_path, capsys, yaml_text: str) -> None:
    path = tmp_path / "bad_params.yaml"
    path.write_text(yaml_text, encoding="utf-8")
    assert cli.main(["--config", str(path), "--size", "5", "--method", "bubble"]) == 2
    captured = capsys.readouterr()
    assert "Invalid configuration" in captured.err
    assert "params" in captured.err
    assert "Initial Array" not in captured.out


def test_dist_flag_replaces_file_dataset(tmp_path, capsys) -> None:
    path = tmp_path / "demo.yaml"
    path.write_text("dataset:\n  dist: nearly_sorted\n  params: {swap_frac: 0.5}\n", encoding="utf-8")
    assert cli.main(["--config", str(path), "--dist", "reversed", "--size", "4", "--method", "insertion"]) == 0
    out = capsys.readouterr().out
    assert "Initial Array: 4 3 2 1\n" in out
    # 3 outer iterations + 6 inversions
    assert "Insertion Sort: 9 iterations" in out
