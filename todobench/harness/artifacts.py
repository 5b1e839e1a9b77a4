from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from playwright.async_api import Browser, Page

logger = logging.getLogger("todobench.artifacts")


@dataclass(frozen=True)
class ArtifactRecord:
    kind: str
    target: str
    path: str
    mime: str
    size: int
    sha256: str

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "target": self.target,
            "path": self.path,
            "mime": self.mime,
            "size": self.size,
            "sha256": self.sha256,
        }


@dataclass(frozen=True)
class ArtifactPaths:
    target: str
    trace: Path
    pdf: Path

    @classmethod
    def for_target(cls, output_dir: str | Path, target: str) -> "ArtifactPaths":
        root = Path(output_dir)
        root.mkdir(parents=True, exist_ok=True)
        safe = target.replace("/", "_")
        return cls(
            target=target,
            trace=root / f"{safe}-trace.json",
            pdf=root / f"{safe}-view.pdf",
        )


def _sha256(path: Path) -> str:
    hasher = hashlib.sha256()
    with path.open("rb") as file_handle:
        for chunk in iter(lambda: file_handle.read(1024 * 1024), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def record_artifact(kind: str, target: str, path: Path, mime: str) -> ArtifactRecord:
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(str(path))
    return ArtifactRecord(
        kind=kind,
        target=target,
        path=str(path),
        mime=mime,
        size=path.stat().st_size,
        sha256=_sha256(path),
    )


class PerformanceTrace:
    """Chromium performance trace (DevTools timeline format) for one page."""

    def __init__(self, browser: Browser, page: Page, paths: ArtifactPaths) -> None:
        self._browser = browser
        self._page = page
        self._paths = paths
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            raise RuntimeError("Trace already started")
        await self._browser.start_tracing(page=self._page, path=str(self._paths.trace), screenshots=True)
        self._running = True
        logger.info("tracing %s -> %s", self._paths.target, self._paths.trace)

    async def stop(self) -> Optional[ArtifactRecord]:
        if not self._running:
            return None
        await self._browser.stop_tracing()
        self._running = False
        return record_artifact("trace", self._paths.target, self._paths.trace, "application/json")


async def render_pdf(page: Page, paths: ArtifactPaths) -> ArtifactRecord:
    await page.pdf(path=str(paths.pdf), format="A4")
    logger.info("rendered %s -> %s", paths.target, paths.pdf)
    return record_artifact("pdf", paths.target, paths.pdf, "application/pdf")
