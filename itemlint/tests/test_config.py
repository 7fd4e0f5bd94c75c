# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Config file loading and command-line level overrides."""

import json
from pathlib import Path

import pytest

from itemlint.config import CONFIG_FORMAT, CONFIG_VERSION, LintConfig, load_config_json, resolve_config
from itemlint.lints import Level


def _write_config(path: Path, **fields) -> Path:
	obj = {"format": CONFIG_FORMAT, "version": CONFIG_VERSION}
	obj.update(fields)
	path.write_text(json.dumps(obj))
	return path


def test_load_config_levels_and_deny_warnings(tmp_path: Path):
	path = _write_config(tmp_path / "itemlint.json", lints={"items-after-statements": "Deny"}, deny_warnings=True)
	config = load_config_json(path)
	assert config.levels == {"items_after_statements": Level.DENY}
	assert config.deny_warnings


@pytest.mark.parametrize(
	"body, fragment",
	[
		({"lints": {"no_such_lint": "deny"}}, "unknown lint"),
		({"lints": {"items_after_statements": "forbid"}}, "unknown lint level"),
		({"lints": {"items_after_statements": 1}}, "must be a string"),
		({"lints": ["items_after_statements"]}, "must be a JSON object"),
		({"lints": []}, "must be a JSON object"),
		({"lints": 0}, "must be a JSON object"),
		({"lints": ""}, "must be a JSON object"),
		({"lints": None}, "must be a JSON object"),
		({"deny_warnings": "yes"}, "must be a boolean"),
	],
)
def test_load_config_rejects_bad_entries(tmp_path: Path, body, fragment):
	path = _write_config(tmp_path / "c.json", **body)
	with pytest.raises(ValueError, match=fragment):
		load_config_json(path)


def test_load_config_rejects_wrong_format(tmp_path: Path):
	path = tmp_path / "c.json"
	path.write_text(json.dumps({"format": "other", "version": 0}))
	with pytest.raises(ValueError, match="unsupported config"):
		load_config_json(path)


def test_load_config_rejects_malformed_json(tmp_path: Path):
	path = tmp_path / "c.json"
	path.write_text("{not json")
	with pytest.raises(ValueError):
		load_config_json(path)


def test_resolve_config_prefers_explicit_then_default_then_builtin(tmp_path: Path):
	assert resolve_config(None, cwd=tmp_path) == LintConfig()
	_write_config(tmp_path / "itemlint.json", lints={"items_after_statements": "allow"})
	assert resolve_config(None, cwd=tmp_path).levels == {"items_after_statements": Level.ALLOW}
	explicit = _write_config(tmp_path / "strict.json", deny_warnings=True)
	assert resolve_config(explicit, cwd=tmp_path) == LintConfig(deny_warnings=True)
	with pytest.raises(ValueError, match="not found"):
		resolve_config(tmp_path / "missing.json", cwd=tmp_path)


def test_flags_apply_in_order():
	config = LintConfig().apply_flags([
		(Level.DENY, "items_after_statements"),
		(Level.WARN, "items-after-statements"),
	])
	assert config.levels == {"items_after_statements": Level.WARN}


def test_warnings_group_flags():
	assert LintConfig().apply_flags([(Level.DENY, "warnings")]).deny_warnings
	assert not LintConfig(deny_warnings=True).apply_flags([(Level.WARN, "warnings")]).deny_warnings
	allowed = LintConfig().apply_flags([(Level.ALLOW, "warnings")])
	assert allowed.levels == {"items_after_statements": Level.ALLOW}
	assert not allowed.deny_warnings


def test_unknown_lint_flag_is_rejected():
	with pytest.raises(ValueError, match="unknown lint `nope`"):
		LintConfig().apply_flags([(Level.DENY, "nope")])


def test_config_directory_is_rejected(tmp_path: Path):
	(tmp_path / "itemlint.json").mkdir()
	with pytest.raises(ValueError, match="not a file"):
		resolve_config(None, cwd=tmp_path)
	with pytest.raises(ValueError, match="not a file"):
		resolve_config(tmp_path / "itemlint.json", cwd=tmp_path)


def test_unreadable_config_is_reported_as_value_error(tmp_path: Path):
	with pytest.raises(ValueError, match="failed to read config"):
		load_config_json(tmp_path)
