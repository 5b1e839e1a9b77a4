from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlparse


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class TargetConfig:
    name: str
    url: str


def _default_targets() -> dict[str, TargetConfig]:
    return {
        "elm": TargetConfig(name="elm", url="http://localhost:8001"),
        "derw": TargetConfig(name="derw", url="http://localhost:8000"),
        "react": TargetConfig(name="react", url="http://localhost:8002"),
    }


@dataclass(frozen=True)
class HarnessConfig:
    targets: dict[str, TargetConfig] = field(default_factory=_default_targets)
    words_file: str = "words.txt"
    word_limit: int = 100
    output_dir: str = "."
    timeout_ms: int = 5_000
    headless: bool = True
    viewport_width: int = 834
    viewport_height: int = 1007
    summary_file: Optional[str] = None
    log_level: str = "INFO"

    def validate(self) -> "HarnessConfig":
        if not self.targets:
            raise ConfigError("At least one target is required")
        for name, target in self.targets.items():
            if not name.strip():
                raise ConfigError("Target names must be non-empty")
            parsed = urlparse(target.url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ConfigError(f"Target {name!r} has an invalid url: {target.url!r}")
        for attr in ("word_limit", "timeout_ms", "viewport_width", "viewport_height"):
            if getattr(self, attr) <= 0:
                raise ConfigError(f"{attr} must be positive")
        return self

    def with_overrides(self, **overrides: Any) -> "HarnessConfig":
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes).validate()

    def describe_targets(self) -> dict[str, dict[str, str]]:
        return {name: {"url": target.url} for name, target in self.targets.items()}

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)


def parse_targets(raw: str | Mapping[str, Any]) -> dict[str, TargetConfig]:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Targets must be a JSON object: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("Targets must be a JSON object of name -> {\"url\": ...}")

    targets: dict[str, TargetConfig] = {}
    for name, value in raw.items():
        if isinstance(value, str):
            url = value
        elif isinstance(value, Mapping) and isinstance(value.get("url"), str):
            url = value["url"]
        else:
            raise ConfigError(f"Target {name!r} needs a url")
        targets[str(name)] = TargetConfig(name=str(name), url=url)
    return targets


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def config_from_env(environ: Mapping[str, str] | None = None) -> HarnessConfig:
    env = os.environ if environ is None else environ
    defaults = HarnessConfig()
    raw_targets = env.get("TODOBENCH_TARGETS")
    targets = parse_targets(raw_targets) if raw_targets else defaults.targets
    try:
        config = HarnessConfig(
            targets=targets,
            words_file=env.get("TODOBENCH_WORDS_FILE", defaults.words_file),
            word_limit=int(env.get("TODOBENCH_WORD_LIMIT", str(defaults.word_limit))),
            output_dir=env.get("TODOBENCH_OUTPUT_DIR", defaults.output_dir),
            timeout_ms=int(env.get("TODOBENCH_TIMEOUT_MS", str(defaults.timeout_ms))),
            headless=_env_bool(env.get("TODOBENCH_HEADLESS", "true")),
            viewport_width=int(env.get("TODOBENCH_VIEWPORT_WIDTH", str(defaults.viewport_width))),
            viewport_height=int(env.get("TODOBENCH_VIEWPORT_HEIGHT", str(defaults.viewport_height))),
            summary_file=env.get("TODOBENCH_SUMMARY_FILE") or None,
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )
    except ValueError as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc
    return config.validate()


def load_words(path: str | Path, limit: int) -> list[str]:
    text = Path(path).read_text(encoding="utf-8")
    return text.split("\n")[:limit]
