from __future__ import annotations

import io
import os
import subprocess
import sys
from pathlib import Path

import pytest

from game_of_life.grid import Grid
from game_of_life.life import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR, main, simulate


def blinker() -> Grid:
    return Grid.from_iterable(5, 5, [(1, 2), (2, 2), (3, 2)])


def test_simulate_renders_then_steps() -> None:
    out = io.StringIO()
    pauses: list[float] = []
    grid = blinker()
    first_frame = grid.render()

    steps = simulate(grid, interval=0.25, generations=3, out=out, sleep=pauses.append)

    text = out.getvalue()
    assert steps == 3
    assert grid.generation == 3
    assert pauses == [0.25, 0.25, 0.25]
    assert text.startswith(HIDE_CURSOR + first_frame)
    assert text.count(CLEAR_SCREEN) == 3
    assert text.endswith(SHOW_CURSOR)


def test_simulate_zero_generations() -> None:
    out = io.StringIO()
    grid = blinker()
    assert simulate(grid, generations=0, out=out, sleep=lambda _: None) == 0
    assert grid.generation == 0
    assert out.getvalue() == HIDE_CURSOR + SHOW_CURSOR


def test_simulate_restores_cursor_on_interrupt() -> None:
    out = io.StringIO()

    def interrupt(_: float) -> None:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        simulate(blinker(), out=out, sleep=interrupt)
    assert out.getvalue().endswith(SHOW_CURSOR)


def test_main_runs_seeded_grid(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--seed", "42", "--width", "6", "--height", "4", "--cells", "10",
                 "--generations", "2", "--interval", "0.001"])
    assert code == 0
    out = capsys.readouterr().out
    assert out.count(CLEAR_SCREEN) == 2
    assert Grid.from_seed(6, 4, 42, 10).render() in out


def test_main_reads_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "life.toml"
    path.write_text("[life]\nwidth = 3\nheight = 3\ncells = 2\nseed = 1\ngenerations = 1\ninterval = 0.001\n")
    assert main(["--config", str(path), "--width", "4"]) == 0
    out = capsys.readouterr().out
    assert " " + "# " * 5 in out


@pytest.mark.parametrize("argv", [["--width", "0"], ["--interval", "0"], ["--cells", "-5"]])
def test_main_rejects_invalid_settings(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert main(argv + ["--generations", "1"]) == 2
    assert "Error:" in capsys.readouterr().err


@pytest.mark.parametrize("line", ['generations = "ten"', 'seed = "abc"', 'log_level = "LOUD"'])
def test_main_rejects_bad_config_values(
    line: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "life.toml"
    path.write_text(f"[life]\ninterval = 0.001\n{line}\n")
    assert main(["--config", str(path)]) == 2
    assert "Error:" in capsys.readouterr().err


def test_main_seeds_from_clock_without_seed(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("game_of_life.lcg.time.time", lambda: 1_700_000_000.4)
    code = main(["--width", "6", "--height", "4", "--cells", "10",
                 "--generations", "1", "--interval", "0.001"])
    assert code == 0
    assert Grid.from_seed(6, 4, 1_700_000_000, 10).render() in capsys.readouterr().out


def test_main_at_default_level_keeps_stderr_clean(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "life.toml"
    path.write_text("[life]\nwidth = 4\nheight = 4\nseed = 3\ngenerations = 2\ninterval = 0.001\n")
    assert main(["--config", str(path)]) == 0
    assert capsys.readouterr().err == ""


def test_library_use_is_silent() -> None:
    src = Path(__file__).resolve().parents[1] / "src"
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [str(src), os.environ.get("PYTHONPATH")]))}
    code = (
        "from game_of_life import Grid\n"
        "grid = Grid.from_seed(5, 5, seed=1, cells=3)\n"
        "grid.step()\n"
    )
    result = subprocess.run(
        [sys.executable, "-c", code], env=env, capture_output=True, text=True, timeout=60
    )
    assert result.returncode == 0, result.stderr
    assert result.stderr == ""
