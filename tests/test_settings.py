import logging
import os
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from budget_categorizer.core import settings


@pytest.fixture
def isolated_env() -> Generator[None, None, None]:
    # load_environment writes straight into os.environ
    with patch.dict(os.environ):
        yield


def test_read_config_file(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        "# budget categorizer\n"
        "LOG_LEVEL: debug\n"
        "AUTO_APPLY_THRESHOLD: '0.75'  # auto-apply strong matches\n"
        "LEARNING_MIN_SAMPLES:\n"
        "not a setting\n",
        encoding="utf-8",
    )
    assert settings.read_config_file(str(config)) == {
        "LOG_LEVEL": "debug",
        "AUTO_APPLY_THRESHOLD": "0.75",
    }


def test_read_config_file_missing(tmp_path: Path) -> None:
    assert settings.read_config_file(str(tmp_path / "absent.yaml")) == {}
    assert settings.read_config_file(None) == {}


@pytest.mark.usefixtures("isolated_env")
def test_load_environment_does_not_override_real_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "config.yaml").write_text(
        "LEARNING_MIN_SAMPLES: 4\nAUTO_APPLY_THRESHOLD: 0.8\n", encoding="utf-8"
    )
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("AUTO_APPLY_THRESHOLD", "0.6")
    monkeypatch.delenv("LEARNING_MIN_SAMPLES", raising=False)

    settings.load_environment()

    assert settings.get_config_path() == str(tmp_path / "config.yaml")
    assert settings.learning_min_samples() == 4
    assert settings.auto_apply_threshold() == 0.6


@pytest.mark.usefixtures("isolated_env")
def test_load_environment_reads_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text(
        "LEARNING_MIN_SAMPLES=7\nAUTO_APPLY_THRESHOLD=0.45\n", encoding="utf-8"
    )
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("LEARNING_MIN_SAMPLES", "3")
    monkeypatch.delenv("AUTO_APPLY_THRESHOLD", raising=False)

    settings.load_environment()

    # variables already in the environment win over .env
    assert settings.learning_min_samples() == 3
    assert settings.auto_apply_threshold() == 0.45


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LEARNING_MIN_SAMPLES", raising=False)
    monkeypatch.delenv("AUTO_APPLY_THRESHOLD", raising=False)
    assert settings.learning_min_samples() == settings.DEFAULT_LEARNING_MIN_SAMPLES
    assert settings.auto_apply_threshold() == settings.DEFAULT_AUTO_APPLY_THRESHOLD


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_min_samples_falls_back(
    raw: str, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("LEARNING_MIN_SAMPLES", raw)
    with caplog.at_level(logging.WARNING):
        assert settings.learning_min_samples() == settings.DEFAULT_LEARNING_MIN_SAMPLES
    assert "LEARNING_MIN_SAMPLES" in caplog.text


@pytest.mark.parametrize("raw", ["high", "1.5", "-0.1"])
def test_invalid_threshold_falls_back(raw: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTO_APPLY_THRESHOLD", raw)
    assert settings.auto_apply_threshold() == settings.DEFAULT_AUTO_APPLY_THRESHOLD
