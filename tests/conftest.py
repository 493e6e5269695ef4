from pathlib import Path

import pytest

from blkinventory.executor import RunResult

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Tests must not pick up the caller's lsblk override or debug settings."""
    monkeypatch.delenv("BLKINVENTORY_LSBLK", raising=False)
    monkeypatch.delenv("BLKINVENTORY_DEBUG", raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def fixture_executor():
    """Executor that answers `lsblk --json` with the nvme/raid fixture."""
    calls = []

    def executor(cmd, *, timeout=None):
        calls.append(cmd)
        if cmd[0] == "lsblk" and "--json" in cmd:
            return RunResult(stdout=(FIXTURES / "lsblk_nvme_raid.json").read_text(), stderr="", returncode=0)
        return RunResult(stdout="", stderr="unknown command", returncode=1)

    executor.calls = calls
    return executor
