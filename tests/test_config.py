import pytest

from cmdpalette import constants
from cmdpalette.config import Configuration, coerce_to_bool
from cmdpalette.config_loader import ConfigLoader
from cmdpalette.errors import ConfigError
from cmdpalette.schema import PALETTE_CONFIG_SCHEMA
from cmdpalette.validation import ConfigField, ConfigItems, ConfigValidator, format_config_error


def test_schema_defaults(test_logger):
    conf = Configuration({}, logger=test_logger, schema=PALETTE_CONFIG_SCHEMA)
    assert conf.get("max_suggestions") == 50
    assert conf.get_bool("strict_errors") is False
    assert conf.get("include") is None
    assert not conf.has_explicit("max_suggestions")


def test_explicit_over_schema(test_logger):
    conf = Configuration({"max_suggestions": 7}, logger=test_logger, schema=PALETTE_CONFIG_SCHEMA)
    assert conf.get_int("max_suggestions") == 7
    assert conf.has_explicit("max_suggestions")


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), ("yes", True), ("On", True), ("anything", True), (False, False), ("off", False), ("disabled", False), ("", False), (0, False)],
)
def test_coerce_to_bool(value, expected):
    assert coerce_to_bool(value) is expected


def test_coerce_none_uses_default():
    assert coerce_to_bool(None, default=True) is True


def test_typed_getters(test_logger):
    conf = Configuration({"n": "12", "f": "0.5", "bad": "twelve", "s": 3}, logger=test_logger)
    assert conf.get_int("n") == 12
    assert conf.get_float("f") == 0.5
    assert conf.get_int("bad", default=4) == 4
    assert conf.get_float("bad", default=1.5) == 1.5
    assert conf.get_str("s") == "3"
    assert conf.get_str("missing", "none") == "none"


def test_format_config_error():
    assert format_config_error("palette", "max_suggestions", "too small") == "[palette] Config error for 'max_suggestions': too small"
    assert format_config_error("palette", "x", "bad", "fix it").endswith(" -> fix it")


def test_palette_schema_validation(test_logger):
    validator = ConfigValidator({"max_suggestions": 0, "include": "one.toml", "colored_handlers_log": "yes"}, "palette", test_logger)
    errors = validator.validate(PALETTE_CONFIG_SCHEMA)
    assert len(errors) == 2
    assert any("must be 1 or more" in error for error in errors)
    assert any("Expected list, got str" in error for error in errors)


def test_validator_required_and_choices(test_logger):
    schema = ConfigItems(
        ConfigField("mode", str, required=True, choices=["fast", "safe"]),
        ConfigField("ratio", (int, float)),
    )
    assert schema.get("ratio").type_name == "int or float"
    assert schema.get("missing") is None
    assert len(ConfigValidator({}, "x", test_logger).validate(schema)) == 1
    errors = ConfigValidator({"mode": "slow", "ratio": True}, "x", test_logger).validate(schema)
    assert len(errors) == 2
    assert "Valid options: 'fast', 'safe'" in errors[0]


def test_unknown_keys(test_logger):
    validator = ConfigValidator({"max_sugestions": 5, "colour": True}, "palette", test_logger)
    warnings = validator.warn_unknown_keys(PALETTE_CONFIG_SCHEMA)
    assert len(warnings) == 2
    assert "Did you mean 'max_suggestions'?" in warnings[0]
    assert "Did you mean" not in warnings[1]


class TestConfigLoader:
    def test_missing_default_file(self, test_logger, tmp_path, monkeypatch):
        monkeypatch.setattr(constants, "CONFIG_FILE", tmp_path / "nope.toml")
        assert ConfigLoader(test_logger).load() == {}

    def test_default_file(self, test_logger, tmp_path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text("[palette]\nmax_suggestions = 9\n")
        monkeypatch.setattr(constants, "CONFIG_FILE", path)
        assert ConfigLoader(test_logger).load() == {"palette": {"max_suggestions": 9}}

    def test_explicit_missing_file(self, test_logger, tmp_path):
        with pytest.raises(ConfigError):
            ConfigLoader(test_logger).load(str(tmp_path / "nope.toml"))

    def test_syntax_error(self, test_logger, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[palette\n")
        with pytest.raises(ConfigError):
            ConfigLoader(test_logger).load(str(path))

    def test_include(self, test_logger, tmp_path):
        (tmp_path / "main.toml").write_text('[palette]\ninclude = ["extra.toml"]\n\n[teams]\ncache_seconds = 1\n')
        (tmp_path / "extra.toml").write_text("[teams.roster]\nred = ['ann']\n")
        config = ConfigLoader(test_logger).load(str(tmp_path / "main.toml"))
        assert config["teams"] == {"cache_seconds": 1, "roster": {"red": ["ann"]}}

    def test_directory(self, test_logger, tmp_path):
        (tmp_path / "b.toml").write_text("[palette]\nextensions = ['two']\n")
        (tmp_path / "a.toml").write_text("[palette]\nextensions = ['one']\nmax_suggestions = 3\n")
        (tmp_path / "notes.txt").write_text("ignored")
        config = ConfigLoader(test_logger).load(str(tmp_path))
        assert config["palette"] == {"extensions": ["one", "two"], "max_suggestions": 3}
