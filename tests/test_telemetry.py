from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from tokenfield.runtime import telemetry


@pytest.fixture(autouse=True)
def restore_default_config() -> Iterator[None]:
    yield
    telemetry.configure()


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_config_and_preset_are_exclusive() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


@pytest.mark.parametrize("preset", ["development", "production", "performance"])
def test_each_preset_configures_a_working_logger(
    preset: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TOKENFIELD_LOG_FILE", str(tmp_path / f"{preset}.log"))

    telemetry.configure(preset=preset)
    telemetry.record_event("preset.check", data={"preset": preset})
    with telemetry.span("test::preset", component="telemetry", metadata={"preset": preset}) as handle:
        handle.add_metadata("step", 1)

    assert handle.metadata == {"preset": preset, "step": "1"}


def test_log_file_env_redirects_preset_file_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = str(tmp_path / "engine.log")
    monkeypatch.setenv("TOKENFIELD_LOG_FILE", target)

    assert telemetry.preset_settings("Production")["file_output"] == target
    assert "file_output" not in telemetry.preset_settings("development")


def test_env_settings_follow_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_LEVEL", "LOG_FILE", "LOG_JSON", "NO_COLOR", "DISABLE_CONSOLE", "LOG_BUFFERED"):
        monkeypatch.delenv(f"TOKENFIELD_{name}", raising=False)
    assert telemetry.env_settings() == {
        "min_level": "WARNING",
        "console_output": True,
        "colored_output": True,
    }

    monkeypatch.setenv("TOKENFIELD_LOG_LEVEL", "debug")
    monkeypatch.setenv("TOKENFIELD_DISABLE_CONSOLE", "1")
    monkeypatch.setenv("TOKENFIELD_LOG_BUFFERED", "yes")
    monkeypatch.setenv("TOKENFIELD_LOG_BUFFER_SIZE", "64")

    assert telemetry.env_settings() == {
        "min_level": "DEBUG",
        "console_output": False,
        "buffering": True,
        "buffer_size": 64,
    }


def test_span_reraises_and_clears_context() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("test::boom", metadata={"token": "resi"}):
            raise KeyError("boom")


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("bad.level", level="loud")


def test_loggers_are_cached_until_reconfigured() -> None:
    first = telemetry.get_logger("tokenfield.test")

    assert telemetry.get_logger("tokenfield.test") is first
    telemetry.configure()
    assert telemetry.get_logger("tokenfield.test") is not first
