from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from todobench.harness.artifacts import ArtifactPaths
from todobench.harness.config import HarnessConfig, load_words
from todobench.harness.scenario import TodoInputScenario
from todobench.harness.session import BrowserSession, SessionConfig
from todobench.harness.telemetry import NullRunSink, RunSink, Telemetry

logger = logging.getLogger("todobench.runner")

SessionFactory = Callable[[SessionConfig], BrowserSession]


@dataclass
class TargetRunResult:
    target: str
    success: bool
    error: Optional[str] = None
    words_typed: int = 0
    keystrokes: int = 0
    artifacts: list[dict[str, Any]] = field(default_factory=list)
    telemetry: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "success": self.success,
            "error": self.error,
            "words_typed": self.words_typed,
            "keystrokes": self.keystrokes,
            "artifacts": self.artifacts,
            "telemetry": self.telemetry,
        }


def split_target_names(raw: Iterable[str]) -> list[str]:
    names: list[str] = []
    for chunk in ",".join(raw).split(","):
        name = chunk.strip()
        if name:
            names.append(name)
    return names


class BenchmarkRunner:
    def __init__(
        self,
        config: HarnessConfig,
        words: list[str] | None = None,
        sink: RunSink | None = None,
        session_factory: SessionFactory = BrowserSession,
    ) -> None:
        self._config = config
        self._words = words
        self._sink = sink or NullRunSink()
        self._session_factory = session_factory

    def _session_config(self) -> SessionConfig:
        return SessionConfig(
            headless=self._config.headless,
            viewport_width=self._config.viewport_width,
            viewport_height=self._config.viewport_height,
            default_timeout_ms=self._config.timeout_ms,
        )

    def _load_words(self) -> list[str]:
        if self._words is None:
            self._words = load_words(self._config.words_file, self._config.word_limit)
        return self._words

    async def run_target(self, name: str) -> TargetRunResult:
        target = self._config.targets[name]
        telemetry = Telemetry()
        telemetry.event("start", {"target": name, "url": target.url})
        try:
            scenario = TodoInputScenario(self._load_words(), timeout_ms=self._config.timeout_ms)
            paths = ArtifactPaths.for_target(self._config.output_path, name)
            async with self._session_factory(self._session_config()) as session:
                outcome = await scenario.run(session.browser, session.page, target, paths, telemetry)
        except Exception as exc:
            logger.exception("target %s failed", name)
            telemetry.event("failed", {"error": type(exc).__name__})
            return TargetRunResult(
                target=name,
                success=False,
                error=f"{type(exc).__name__}: {exc}",
                telemetry=telemetry.snapshot(),
            )

        telemetry.event("finished")
        return TargetRunResult(
            target=name,
            success=True,
            words_typed=outcome.words_typed,
            keystrokes=outcome.keystrokes,
            artifacts=[record.to_dict() for record in outcome.artifacts],
            telemetry=telemetry.snapshot(),
        )

    async def run(self, names: Iterable[str]) -> list[TargetRunResult]:
        results: list[TargetRunResult] = []
        for name in split_target_names(names):
            if name not in self._config.targets:
                logger.warning("Unknown target %s", name)
                logger.warning("Available targets: %s", json.dumps(self._config.describe_targets(), indent=4))
                continue
            logger.info("Running %s", name)
            result = await self.run_target(name)
            await self._sink.emit(result.to_dict())
            results.append(result)
        return results
