import io
from pathlib import Path

from rich.console import Console

from pesh.cli.interactive import InteractiveShell, is_exit_request
from pesh.config import get_settings
from pesh.core.parser import parse_line
from pesh.core.supervisor import Supervisor


def _shell(supervisor: Supervisor, lines: list[str]) -> tuple[InteractiveShell, io.StringIO, io.StringIO, list[str]]:
    out = io.StringIO()
    err = io.StringIO()
    prompts: list[str] = []
    pending = iter(lines)

    def read_line(prompt: str) -> str:
        prompts.append(prompt)
        try:
            return next(pending)
        except StopIteration:
            raise EOFError from None

    shell = InteractiveShell(
        get_settings(),
        supervisor,
        console=Console(file=out, highlight=False),
        error_console=Console(file=err, highlight=False, width=200),
        read_line=read_line,
    )
    return shell, out, err, prompts


def test_exit_request_only_for_single_exit() -> None:
    assert is_exit_request(parse_line("exit"))
    assert is_exit_request(parse_line("exit 3"))
    assert not is_exit_request(parse_line("exit ## ls"))
    assert not is_exit_request(parse_line(""))


def test_loop_stops_on_end_of_input(supervisor: Supervisor) -> None:
    shell, out, _, prompts = _shell(supervisor, [])
    shell.run()
    assert len(prompts) == 1
    assert "Exiting shell..." in out.getvalue()


def test_loop_stops_on_exit_and_skips_remaining_lines(supervisor: Supervisor, tmp_path: Path) -> None:
    shell, _, _, prompts = _shell(supervisor, ["", "exit", "touch never"])
    shell.run()
    assert len(prompts) == 2
    assert not (tmp_path / "never").exists()


def test_prompt_shows_working_directory_after_cd(supervisor: Supervisor, tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    start = supervisor.cwd.path
    shell, _, _, prompts = _shell(supervisor, ["cd sub"])
    shell.run()
    assert prompts[0] == f"{start}$ "
    assert prompts[1] == f"{supervisor.cwd.path}$ "
    assert prompts[1].endswith("sub$ ")


def test_errors_are_reported_and_loop_continues(supervisor: Supervisor, tmp_path: Path) -> None:
    lines = ["ls && && pwd", "cd", "cd /nonexistent", "no-such-program-xyz", "ls | wc", "touch after"]
    shell, _, err, _ = _shell(supervisor, lines)
    shell.run()
    output = err.getvalue()
    assert "parse error" in output
    assert "cd: missing directory argument" in output
    assert "cd: no such file or directory: /nonexistent" in output
    assert "no-such-program-xyz: command not found" in output
    assert "pipes are not implemented yet" in output
    assert shell.errors_reported == 5
    assert (tmp_path / "after").exists()


def test_run_line_returns_report(supervisor: Supervisor) -> None:
    shell, _, _, _ = _shell(supervisor, [])
    keep_going, report = shell.run_line("true ## false")
    assert keep_going
    assert report is not None
    assert report.statuses == [0, 1]


def test_null_byte_line_is_reported_not_raised(supervisor: Supervisor) -> None:
    shell, _, err, _ = _shell(supervisor, [])
    keep_going, report = shell.run_line("echo a\x00b")
    assert keep_going
    assert report is None
    assert "null byte" in err.getvalue()
    assert shell.errors_reported == 1
