import os

from model_orchestrator.config.loader import _substitute_env_vars, load_capability_config
from model_orchestrator.llm.registry import CapabilityRegistry, build_default_registry


class TestSubstituteEnvVars:
    def test_basic(self, monkeypatch):
        monkeypatch.setenv("HOME", "/users/test")
        assert _substitute_env_vars("${HOME}") == "/users/test"

    def test_with_default(self):
        result = _substitute_env_vars("${NONEXISTENT_VAR_12345:-fallback}")
        assert result == "fallback"

    def test_missing_no_default(self):
        key = "TOTALLY_MISSING_VAR_99999"
        assert os.environ.get(key) is None
        assert _substitute_env_vars(f"${{{key}}}") == ""

    def test_no_substitution(self):
        assert _substitute_env_vars("plain string") == "plain string"

    def test_env_var_overrides_default(self, monkeypatch):
        monkeypatch.setenv("MY_VAR", "real")
        assert _substitute_env_vars("${MY_VAR:-default}") == "real"


VALID_YAML = """\
capabilities:
  - model: "llama-3.1-8b-instant"
    provider: "groq"
    strengths: ["quick_iteration", "brainstorming"]
    cost_per_million: 0.05
    average_latency_ms: 100
    max_tokens: 8000
    context_window: 32768
  - model: "gpt-4-turbo"
    provider: "openai"
    strengths: ["creative_generation", "ideation"]
    cost_per_million: 10.0
    average_latency_ms: 1500
    max_tokens: 4096
    context_window: 128000
"""


class TestLoadCapabilityConfig:
    def test_load_valid_yaml(self, tmp_path):
        cfg_file = tmp_path / "capabilities.yaml"
        cfg_file.write_text(VALID_YAML)
        result = load_capability_config(str(cfg_file))
        assert result is not None
        assert [c.id for c in result] == ["groq:llama-3.1-8b-instant", "openai:gpt-4-turbo"]
        assert result[0].strengths == ("quick_iteration", "brainstorming")
        assert result[1].cost_per_million == 10.0

    def test_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FAST_MODEL", "llama-3.1-8b-instant")
        yaml_content = """\
capabilities:
  - model: "${FAST_MODEL}"
    provider: "${FAST_PROVIDER:-groq}"
    strengths: ["quick_iteration"]
    cost_per_million: 0.05
    average_latency_ms: 100
    max_tokens: 8000
    context_window: 32768
"""
        cfg_file = tmp_path / "capabilities.yaml"
        cfg_file.write_text(yaml_content)
        result = load_capability_config(str(cfg_file))
        assert result is not None
        assert result[0].id == "groq:llama-3.1-8b-instant"

    def test_missing_file(self):
        assert load_capability_config("/nonexistent/path/capabilities.yaml") is None

    def test_none_path(self):
        assert load_capability_config(None) is None

    def test_invalid_yaml(self, tmp_path):
        cfg_file = tmp_path / "bad.yaml"
        cfg_file.write_text("{{{{not yaml at all::::")
        assert load_capability_config(str(cfg_file)) is None

    def test_missing_capabilities_key(self, tmp_path):
        cfg_file = tmp_path / "no_caps.yaml"
        cfg_file.write_text("models:\n  - foo: bar\n")
        assert load_capability_config(str(cfg_file)) is None

    def test_empty_list(self, tmp_path):
        cfg_file = tmp_path / "empty.yaml"
        cfg_file.write_text("capabilities: []\n")
        assert load_capability_config(str(cfg_file)) is None

    def test_invalid_entry_skipped(self, tmp_path):
        yaml_content = VALID_YAML + """\
  - model: "broken"
    provider: "openai"
    cost_per_million: -3
"""
        cfg_file = tmp_path / "mixed.yaml"
        cfg_file.write_text(yaml_content)
        result = load_capability_config(str(cfg_file))
        assert result is not None
        assert len(result) == 2
        assert "openai:broken" not in {c.id for c in result}

    def test_duplicate_entry_skipped(self, tmp_path):
        yaml_content = VALID_YAML + """\
  - model: "gpt-4-turbo"
    provider: "openai"
    strengths: ["visual_analysis"]
    cost_per_million: 1.0
    average_latency_ms: 10
    max_tokens: 10
    context_window: 10
"""
        cfg_file = tmp_path / "dupes.yaml"
        cfg_file.write_text(yaml_content)
        result = load_capability_config(str(cfg_file))
        assert result is not None
        turbo = [c for c in result if c.id == "openai:gpt-4-turbo"]
        assert len(turbo) == 1
        assert turbo[0].cost_per_million == 10.0


class TestRegistryFromConfig:
    def test_from_config(self, tmp_path):
        cfg_file = tmp_path / "capabilities.yaml"
        cfg_file.write_text(VALID_YAML)
        registry = CapabilityRegistry.from_config(str(cfg_file))
        assert registry is not None
        assert len(registry) == 2

    def test_yaml_takes_priority_over_defaults(self, tmp_path):
        cfg_file = tmp_path / "capabilities.yaml"
        cfg_file.write_text(VALID_YAML)
        registry = build_default_registry(str(cfg_file))
        assert len(registry) == 2
        assert "anthropic:claude-3-opus-20240229" not in registry
