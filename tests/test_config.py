from pathlib import Path

import pytest

from minicc.core import AgentSettings, ConfigurationError

ENV_VARS = (
    "OPENAI_API_KEY",
    "SILICONFLOW_API_KEY",
    "OPENAI_BASE_URL",
    "MODEL",
    "MINICC_HISTORY_DIR",
    "MINICC_MAX_STEPS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("minicc.core.config.find_dotenv", lambda usecwd=True: "")


def test_defaults_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    settings = AgentSettings.from_env(prompt_file=tmp_path / "missing.md")

    assert settings.api_key == "sk-test"
    assert settings.base_url == "https://api.openai.com/v1"
    assert settings.model == "gpt-4"
    assert settings.max_steps == 25
    assert settings.history_dir == Path(".history")
    assert settings.system_prompt is None


def test_overrides_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SILICONFLOW_API_KEY", "sf-key")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://api.siliconflow.cn/v1")
    monkeypatch.setenv("MODEL", "Qwen/Qwen2.5-7B-Instruct")
    monkeypatch.setenv("MINICC_HISTORY_DIR", str(tmp_path / "sessions"))
    monkeypatch.setenv("MINICC_MAX_STEPS", "5")

    settings = AgentSettings.from_env(prompt_file=tmp_path / "missing.md")

    assert settings.api_key == "sf-key"
    assert settings.base_url == "https://api.siliconflow.cn/v1"
    assert settings.model == "Qwen/Qwen2.5-7B-Instruct"
    assert settings.history_dir == tmp_path / "sessions"
    assert settings.max_steps == 5


def test_openai_key_takes_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    monkeypatch.setenv("SILICONFLOW_API_KEY", "sf-key")

    assert AgentSettings.from_env(prompt_file=tmp_path / "missing.md").api_key == "sk-openai"


def test_missing_key_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        AgentSettings.from_env(prompt_file=tmp_path / "missing.md")


def test_invalid_value_raises(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("MINICC_MAX_STEPS", "0")

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        AgentSettings.from_env(prompt_file=tmp_path / "missing.md")


def test_system_prompt_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    prompt_file = tmp_path / "system_prompt.md"
    prompt_file.write_text("You only speak in haiku.\n", encoding="utf-8")

    settings = AgentSettings.from_env(prompt_file=prompt_file)

    assert settings.system_prompt == "You only speak in haiku."
