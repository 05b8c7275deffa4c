"""
端到端测试 — 使用真实的 /bin/sh：
  1. ShellCommandRunner 的退出码语义（0 / 非零 / 信号 / 无法启动）
  2. main.run() 的输出格式与退出码
"""

from __future__ import annotations

import os
import sys

import pytest

import main
from tools.shell import ShellCommandRunner

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")


def _write_cakefile(tmp_path, text: str):
    path = tmp_path / "Cakefile"
    path.write_text(text, encoding="utf-8")
    return path


class TestShellCommandRunner:

    def test_success(self):
        outcome = ShellCommandRunner().run("true")
        assert outcome.success
        assert outcome.returncode == 0

    def test_non_zero_exit(self):
        outcome = ShellCommandRunner().run("exit 137")
        assert not outcome.success
        assert outcome.returncode == 137

    def test_killed_by_signal(self):
        outcome = ShellCommandRunner().run("kill -9 $$")
        assert not outcome.success
        assert outcome.returncode == -9

    def test_command_string_goes_to_shell(self, tmp_path):
        target = tmp_path / "out.txt"
        outcome = ShellCommandRunner().run(f"echo one > '{target}' && echo two >> '{target}'")
        assert outcome.success
        assert target.read_text() == "one\ntwo\n"

    def test_missing_shell(self, tmp_path):
        outcome = ShellCommandRunner(shell=str(tmp_path / "no-such-shell")).run("true")
        assert not outcome.success
        assert outcome.returncode is None
        assert outcome.error


class TestDriver:

    def test_successful_run(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(main.config, "CAKEFILE", "Cakefile")
        _write_cakefile(tmp_path, "a: b\n\ttouch a.done\nb:\n\ttouch b.done\n")

        code = main.run()

        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out == [
            "[...Target Order...]",
            "b",
            "a",
            "[...Processing...]",
            "@touch b.done",
            "@touch a.done",
        ]
        assert (tmp_path / "a.done").exists()
        assert (tmp_path / "b.done").exists()

    def test_failing_task(self, tmp_path, capsys):
        path = _write_cakefile(
            tmp_path,
            f"a: b\n\ttouch '{tmp_path}/a.done'\nb:\n\texit 137\n\ttouch '{tmp_path}/b.done'\n",
        )

        code = main.run(str(path))

        captured = capsys.readouterr()
        assert code == 1
        assert captured.err.splitlines()[-2:] == [
            "Error: processing task [exit 137]",
            "Error: processing target [b]",
        ]
        # 失败之后的命令与目标都未执行
        assert not (tmp_path / "b.done").exists()
        assert not (tmp_path / "a.done").exists()

    def test_parse_error(self, tmp_path, capsys):
        path = _write_cakefile(tmp_path, "a:\n\techo a\n\nbroken\n")

        code = main.run(str(path))

        assert code == 1
        assert capsys.readouterr().err.strip() == "Error: no target [line 4]"

    def test_missing_file(self, tmp_path, capsys):
        code = main.run(str(tmp_path / "Cakefile"))

        assert code == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: ")
        assert "No such file or directory" in err

    def test_undeclared_dependency(self, tmp_path, capsys):
        path = _write_cakefile(tmp_path, "x: y\n\techo x\n")

        code = main.run(str(path))

        captured = capsys.readouterr()
        assert code == 1
        assert "Error: target [x] depends on undeclared target [y]" in captured.err
        assert "[...Processing...]" not in captured.out

    def test_cycle_runs_without_error(self, tmp_path, capsys):
        path = _write_cakefile(tmp_path, "a: b\n\ttrue\nb: a\n\ttrue\n")

        assert main.run(str(path)) == 0
        assert capsys.readouterr().out.splitlines()[1:3] == ["b", "a"]

    def test_cycle_detection_enabled(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(main.config, "CAKE_DETECT_CYCLES", True)
        path = _write_cakefile(tmp_path, "a: b\nb: a\n")

        assert main.run(str(path)) == 1
        assert "Error: dependency cycle: a -> b -> a" in capsys.readouterr().err

    def test_list_only(self, tmp_path, capsys):
        path = _write_cakefile(tmp_path, "a: b\n\techo 1\n\techo 2\nb:\n")

        assert main.run(str(path), list_only=True) == 0
        assert capsys.readouterr().out.splitlines() == ["a: [echo 1, echo 2]", "b: []"]

    def test_echo_can_be_disabled(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(main.config, "CAKE_ECHO_COMMANDS", False)
        path = _write_cakefile(tmp_path, "a:\n\ttrue\n")

        assert main.run(str(path)) == 0
        assert "@true" not in capsys.readouterr().out

    def test_cakefile_from_environment_config(self, tmp_path, monkeypatch, capsys):
        path = _write_cakefile(tmp_path, "only:\n\ttrue\n")
        monkeypatch.setattr(main.config, "CAKEFILE", os.fspath(path))

        assert main.run() == 0
        assert "only" in capsys.readouterr().out.splitlines()
