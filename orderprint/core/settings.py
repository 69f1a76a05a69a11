from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from orderprint.core.paths import settings_path

logger = logging.getLogger(__name__)

# Path to the settings.json (runtime-aware)
SETTINGS_PATH = settings_path()

DEFAULT_MAX_RECORDS = 1000


@dataclass
class Settings:
	# 0 means "use DEFAULT_MAX_RECORDS"
	max_records: int = 0
	# Page-loading loop limits
	max_attempts: int = 5
	retry_delay_ms: int = 500
	# A drop in loaded records down to this count means a newer session reset the dataset
	reset_threshold: int = 1
	# Rows per page for the local SQLite-backed dataset
	page_size: int = 50
	currency_suffix: str = "đ"
	default_unit: str = "Cái"

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Settings":
		# Merge provided values over defaults, ignore unknown keys
		defaults = asdict(cls())
		merged: Dict[str, Any] = {**defaults, **{k: v for k, v in data.items() if k in defaults}}
		return cls(**merged)

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)

	@property
	def target_records(self) -> int:
		return resolve_target(self.max_records)

	@property
	def retry_delay(self) -> float:
		return max(0, self.retry_delay_ms) / 1000.0


def resolve_target(max_records: Optional[object]) -> int:
	"""Record count to force-load; 0, negative or missing means the default ceiling."""
	try:
		n = int(max_records)  # type: ignore[arg-type]
	except (TypeError, ValueError):
		return DEFAULT_MAX_RECORDS
	return n if n > 0 else DEFAULT_MAX_RECORDS


def _coerce_path(path: Optional[Union[str, Path]]) -> Path:
	return Path(path) if path is not None else SETTINGS_PATH


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
	"""
	Load settings from JSON (UTF-8). If the file is missing, write defaults and return them.
	"""
	p = _coerce_path(path)
	if not p.exists():
		settings = Settings()
		save_settings(settings, p)
		return settings

	try:
		with p.open("r", encoding="utf-8") as f:
			raw: Dict[str, Any] = json.load(f)
	except (json.JSONDecodeError, OSError):
		# Unreadable or corrupt: use defaults, leave the file alone
		logger.warning("Could not read settings from %s; using defaults", p)
		return Settings()

	return Settings.from_dict(raw if isinstance(raw, dict) else {})


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> None:
	"""Save settings to JSON (UTF-8), creating parent dirs if needed."""
	p = _coerce_path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	tmp = p.with_suffix(p.suffix + ".tmp")
	with tmp.open("w", encoding="utf-8", newline="\n") as f:
		json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
		f.write("\n")
	tmp.replace(p)
