"""GitRunner tests with ``subprocess.run`` replaced by a recorder."""

import subprocess
from pathlib import Path

import pytest

from storefront.exceptions import ExternalServiceError
from storefront.pipeline.publisher.git import GitRunner


class FakeRun:
    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def __call__(self, cmd, cwd=None, capture_output=False, text=False):
        self.calls.append((cmd, cwd))
        returncode, stdout = self.results.get(tuple(cmd[1:3]), (0, ""))
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="boom")


def test_run_executes_in_repo(monkeypatch, tmp_path: Path):
    fake = FakeRun({("rev-parse", "--abbrev-ref"): (0, "dev\n")})
    monkeypatch.setattr(subprocess, "run", fake)
    runner = GitRunner(tmp_path)
    assert runner.current_branch() == "dev"
    assert fake.calls == [(["git", "rev-parse", "--abbrev-ref", "HEAD"], tmp_path)]


def test_non_zero_exit_raises(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(subprocess, "run", FakeRun({("push", "origin"): (1, "")}))
    with pytest.raises(ExternalServiceError) as exc:
        GitRunner(tmp_path).run("push", "origin", "main")
    assert "boom" in exc.value.message
    assert exc.value.context["returncode"] == 1


def test_unchecked_failure_returns_result(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(subprocess, "run", FakeRun({("rm", "-rf"): (128, "")}))
    result = GitRunner(tmp_path).run("rm", "-rf", ".", check=False)
    assert result.returncode == 128


def test_missing_git_binary(monkeypatch, tmp_path: Path):
    def missing(*args, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(subprocess, "run", missing)
    with pytest.raises(ExternalServiceError):
        GitRunner(tmp_path).run("status")


@pytest.mark.parametrize(
    "local_code,remote_out,expected",
    [(0, "", True), (1, "abc123\trefs/heads/site", True), (1, "", False)],
)
def test_branch_exists(monkeypatch, tmp_path: Path, local_code, remote_out, expected):
    fake = FakeRun(
        {
            ("show-ref", "--verify"): (local_code, ""),
            ("ls-remote", "--heads"): (0, remote_out),
        }
    )
    monkeypatch.setattr(subprocess, "run", fake)
    assert GitRunner(tmp_path).branch_exists("site", "origin") is expected
