"""Tests for layered configuration resolution."""

import pytest

from gimme_readme.config import (
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    ConfigFileError,
    generate_telemetry_summary,
    resolve_config,
)
from gimme_readme.core.prompts import DEFAULT_PROMPT
from gimme_readme.exceptions import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / ".gimme_readme_config"

    def write(text: str):
        path.write_text(text, encoding="utf-8")
        return path

    return write


@pytest.mark.unit
def test_defaults_when_no_source_is_set(tmp_path):
    config = resolve_config(environ={}, config_file=tmp_path / "absent")

    assert config.model == DEFAULT_MODEL
    assert config.temperature == DEFAULT_TEMPERATURE
    assert config.api_key is None
    assert config.output_file is None
    assert config.instruction == DEFAULT_PROMPT
    assert set(config.origin.values()) == {"default"}


@pytest.mark.unit
def test_environment_values_are_read(tmp_path):
    config = resolve_config(
        environ={"MODEL": "gemini-1.5-pro", "TEMPERATURE": "0.2", "GEMINI_API_KEY": "k"},
        config_file=tmp_path / "absent",
    )

    assert config.model == "gemini-1.5-pro"
    assert config.temperature == 0.2
    assert config.api_key == "k"
    assert config.origin["model"] == "env"


@pytest.mark.unit
def test_prefixed_variable_wins_over_bare_name(tmp_path):
    config = resolve_config(
        environ={"MODEL": "bare-model", "GIMME_README_MODEL": "prefixed-model"},
        config_file=tmp_path / "absent",
    )

    assert config.model == "prefixed-model"


@pytest.mark.unit
def test_config_file_is_read(config_file):
    path = config_file("GEMINI_API_KEY=from-file\nMODEL=gemini-1.5-pro\nOUTPUT_FILE=README.md\n")

    config = resolve_config(environ={}, config_file=path)

    assert config.api_key == "from-file"
    assert config.model == "gemini-1.5-pro"
    assert config.output_file == "README.md"
    assert config.origin["api_key"] == "file"
    assert config.origin["temperature"] == "default"


@pytest.mark.unit
def test_precedence_programmatic_over_env_over_file(config_file):
    path = config_file("MODEL=file-model\nTEMPERATURE=0.9\nOUTPUT_FILE=file.md\n")

    config = resolve_config(
        {"model": "cli-model", "temperature": None},
        environ={"MODEL": "env-model", "TEMPERATURE": "0.7"},
        config_file=path,
    )

    assert config.model == "cli-model"
    assert config.temperature == 0.7
    assert config.output_file == "file.md"
    assert config.origin == {
        "api_key": "default",
        "model": "programmatic",
        "temperature": "env",
        "output_file": "file",
        "custom_prompt": "default",
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"overrides": {"temperature": 0}},
        {"environ": {"TEMPERATURE": "0"}},
    ],
    ids=["programmatic", "environment"],
)
def test_zero_temperature_is_not_treated_as_unset(tmp_path, kwargs):
    kwargs = {"environ": {"TEMPERATURE": "1.5"}, **kwargs}
    config = resolve_config(config_file=tmp_path / "absent", **kwargs)

    assert config.temperature == 0.0
    assert config.to_dispatch_config().temperature == 0.0


@pytest.mark.unit
def test_zero_temperature_in_file_overrides_default(config_file):
    config = resolve_config(environ={}, config_file=config_file("TEMPERATURE=0\n"))

    assert config.temperature == 0.0
    assert config.origin["temperature"] == "file"


@pytest.mark.unit
@pytest.mark.parametrize("value", ["-0.1", "2.5", "warm"])
def test_invalid_temperature_from_environment_is_rejected(tmp_path, value):
    with pytest.raises(ConfigurationError):
        resolve_config(environ={"TEMPERATURE": value}, config_file=tmp_path / "absent")


@pytest.mark.unit
def test_invalid_programmatic_value_is_rejected(tmp_path):
    with pytest.raises(ConfigurationError, match="validation failed"):
        resolve_config({"model": ""}, environ={}, config_file=tmp_path / "absent")


@pytest.mark.unit
def test_whitespace_only_model_is_rejected(tmp_path):
    with pytest.raises(ConfigurationError, match="model must not be blank"):
        resolve_config({"model": "   "}, environ={}, config_file=tmp_path / "absent")


@pytest.mark.unit
def test_model_id_is_stripped(tmp_path):
    config = resolve_config(
        {"model": "  gemini-1.5-pro "}, environ={}, config_file=tmp_path / "absent"
    )

    assert config.model == "gemini-1.5-pro"
    assert config.to_dispatch_config().model == "gemini-1.5-pro"


@pytest.mark.unit
def test_invalid_file_value_names_the_file(config_file):
    path = config_file("TEMPERATURE=hot\n")

    with pytest.raises(ConfigFileError) as excinfo:
        resolve_config(environ={}, config_file=path)

    assert excinfo.value.file_path == path
    assert isinstance(excinfo.value, ConfigurationError)


@pytest.mark.unit
def test_blank_values_are_treated_as_unset(tmp_path):
    config = resolve_config(
        {"output_file": ""},
        environ={"GEMINI_API_KEY": "   ", "CUSTOM_PROMPT": ""},
        config_file=tmp_path / "absent",
    )

    assert config.api_key is None
    assert config.output_file is None
    assert config.to_destination().is_console
    assert config.instruction == DEFAULT_PROMPT


@pytest.mark.unit
def test_custom_prompt_replaces_default_instruction(tmp_path):
    config = resolve_config(
        environ={"CUSTOM_PROMPT": "Write docs for:"}, config_file=tmp_path / "absent"
    )

    assert config.instruction == "Write docs for:"


@pytest.mark.unit
def test_output_file_becomes_file_destination(tmp_path):
    config = resolve_config(
        {"output_file": "out/README.md"}, environ={}, config_file=tmp_path / "absent"
    )

    destination = config.to_destination()
    assert not destination.is_console
    assert str(destination) == "out/README.md"


@pytest.mark.unit
def test_api_key_never_appears_in_text_forms(tmp_path):
    config = resolve_config(
        {"api_key": "super-secret-value"}, environ={}, config_file=tmp_path / "absent"
    )

    assert "super-secret-value" not in str(config)
    assert "super-secret-value" not in repr(config)
    assert "super-secret-value" not in config.audit()
    assert "api_key: programmatic:<redacted>" in config.audit()


@pytest.mark.unit
def test_audit_lists_every_field_with_origin(tmp_path):
    config = resolve_config(
        {"custom_prompt": "abcd"},
        environ={"TEMPERATURE": "0"},
        config_file=tmp_path / "absent",
    )

    assert config.audit().splitlines() == [
        "api_key: default:None",
        f"model: default:{DEFAULT_MODEL}",
        "temperature: env:0.0",
        "output_file: default:None",
        "custom_prompt: programmatic:<4 chars>",
    ]


@pytest.mark.unit
def test_default_config_location_follows_override_variable(tmp_path, monkeypatch):
    path = tmp_path / "custom_config"
    path.write_text("MODEL=from-override\n", encoding="utf-8")
    monkeypatch.setenv("GIMME_README_CONFIG_FILE", str(path))

    config = resolve_config(environ={})

    assert config.model == "from-override"


@pytest.mark.unit
def test_telemetry_summary_counts_origins(tmp_path):
    config = resolve_config(
        {"model": "m"}, environ={"TEMPERATURE": "1"}, config_file=tmp_path / "absent"
    )

    assert generate_telemetry_summary(config.origin) == {
        "default": 3,
        "programmatic": 1,
        "env": 1,
    }
