# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lint level configuration: a pinned JSON file plus command-line overrides.

File format (v0):
{
  "format": "itemlint-config",
  "version": 0,
  "lints": { "items_after_statements": "deny" },   // optional
  "deny_warnings": false                             // optional
}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from itemlint.core.expansion import ExpansionOracle, MacroOriginOracle
from itemlint.lints import Level, LintContext, builtin_lints, find_lint

CONFIG_FORMAT = "itemlint-config"
CONFIG_VERSION = 0
DEFAULT_CONFIG_NAME = "itemlint.json"

# Pseudo lint name accepted by -A/-W/-D that addresses every warning at once.
WARNINGS_GROUP = "warnings"


@dataclass(frozen=True)
class LintConfig:
	levels: Dict[str, Level] = field(default_factory=dict)
	deny_warnings: bool = False

	def apply_flags(self, flags: Sequence[Tuple[Level, str]]) -> "LintConfig":
		"""
		Apply `(level, lint name)` overrides in command-line order.

		`-D warnings` promotes every warning to an error, `-W warnings` undoes
		that, and `-A warnings` silences every lint that would warn.
		"""
		levels = dict(self.levels)
		deny_warnings = self.deny_warnings
		for level, name in flags:
			if name == WARNINGS_GROUP:
				if level is Level.DENY:
					deny_warnings = True
				elif level is Level.WARN:
					deny_warnings = False
				else:
					deny_warnings = False
					for lint in builtin_lints():
						if levels.get(lint.name, lint.default_level) is Level.WARN:
							levels[lint.name] = Level.ALLOW
				continue
			levels[find_lint(name).name] = level
		return replace(self, levels=levels, deny_warnings=deny_warnings)

	def context(self, oracle: Optional[MacroOriginOracle] = None) -> LintContext:
		return LintContext(
			oracle=oracle if oracle is not None else ExpansionOracle(),
			levels=dict(self.levels),
			deny_warnings=self.deny_warnings,
		)


def load_config_json(path: Path) -> LintConfig:
	"""
	Load a config file.

	Raises `ValueError` (including `json.JSONDecodeError`) for unreadable or
	malformed files, unknown lint names and unknown levels.
	"""
	try:
		text = path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		raise ValueError(f"failed to read config: {err}") from err
	obj = json.loads(text)
	if not isinstance(obj, dict):
		raise ValueError("config must be a JSON object")
	if obj.get("format") != CONFIG_FORMAT or obj.get("version") != CONFIG_VERSION:
		raise ValueError("unsupported config format/version")

	levels: Dict[str, Level] = {}
	lints_obj = obj.get("lints", {})
	if not isinstance(lints_obj, dict):
		raise ValueError("config lints must be a JSON object")
	for name, level_text in lints_obj.items():
		if not isinstance(level_text, str):
			raise ValueError(f"level for lint `{name}` must be a string")
		levels[find_lint(name).name] = Level.parse(level_text)

	deny_warnings = obj.get("deny_warnings", False)
	if not isinstance(deny_warnings, bool):
		raise ValueError("config deny_warnings must be a boolean")
	return LintConfig(levels=levels, deny_warnings=deny_warnings)


def _checked_config_path(path: Path) -> Path:
	if not path.exists():
		raise ValueError(f"config file not found: {path}")
	if not path.is_file():
		raise ValueError(f"config path is not a file: {path}")
	return path


def resolve_config(explicit: Optional[Path], cwd: Optional[Path] = None) -> LintConfig:
	"""
	Pick the config for a run.

	An explicit path must be a readable file. Otherwise `./itemlint.json` is
	used when present (it must then be a file too), and the built-in defaults
	when it is not.
	"""
	if explicit is not None:
		return load_config_json(_checked_config_path(explicit))
	default_path = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
	if default_path.exists():
		return load_config_json(_checked_config_path(default_path))
	return LintConfig()


__all__ = [
	"CONFIG_FORMAT",
	"CONFIG_VERSION",
	"DEFAULT_CONFIG_NAME",
	"LintConfig",
	"load_config_json",
	"resolve_config",
]
