from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass
class TimelineEvent:
    phase: str
    ts: str
    elapsed_ms: int
    metadata: dict[str, Any] = field(default_factory=dict)


class Telemetry:
    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._timeline: list[TimelineEvent] = []
        self._counters: dict[str, int] = {}

    def _elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._start) * 1000)

    def event(self, phase: str, metadata: dict[str, Any] | None = None) -> None:
        self._timeline.append(
            TimelineEvent(
                phase=phase,
                ts=datetime.now(tz=timezone.utc).isoformat(),
                elapsed_ms=self._elapsed_ms(),
                metadata=metadata or {},
            )
        )

    def incr(self, counter: str, value: int = 1) -> None:
        self._counters[counter] = self._counters.get(counter, 0) + value

    def snapshot(self) -> dict[str, Any]:
        return {
            "elapsed_ms": self._elapsed_ms(),
            "counters": dict(self._counters),
            "timeline": [
                {"phase": event.phase, "ts": event.ts, "elapsed_ms": event.elapsed_ms, "metadata": event.metadata}
                for event in self._timeline
            ],
        }


class RunSink:
    async def emit(self, event: dict[str, Any]) -> None:
        raise NotImplementedError


class NullRunSink(RunSink):
    async def emit(self, event: dict[str, Any]) -> None:
        return None


class JsonlRunSink(RunSink):
    def __init__(self, path: str | Path) -> None:
        self._file = Path(path)
        self._file.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._file

    async def emit(self, event: dict[str, Any]) -> None:
        payload = json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
        with self._file.open("a", encoding="utf-8") as file_handle:
            file_handle.write(payload + "\n")
