import hashlib
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from todobench.harness.artifacts import ArtifactPaths, PerformanceTrace, record_artifact, render_pdf
from todobench.harness.telemetry import JsonlRunSink, Telemetry


def test_artifact_paths_per_target(tmp_path) -> None:
    paths = ArtifactPaths.for_target(tmp_path / "out", "react")

    assert paths.trace == tmp_path / "out" / "react-trace.json"
    assert paths.pdf == tmp_path / "out" / "react-view.pdf"
    assert (tmp_path / "out").is_dir()


def test_record_artifact_hashes_file(tmp_path) -> None:
    path = tmp_path / "elm-trace.json"
    path.write_bytes(b"{}")

    record = record_artifact("trace", "elm", path, "application/json")

    assert record.size == 2
    assert record.sha256 == hashlib.sha256(b"{}").hexdigest()
    assert record.to_dict()["kind"] == "trace"


def test_record_artifact_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        record_artifact("pdf", "elm", tmp_path / "missing.pdf", "application/pdf")


@pytest.mark.asyncio
async def test_performance_trace_start_stop(tmp_path) -> None:
    paths = ArtifactPaths.for_target(tmp_path, "derw")
    browser = MagicMock()
    page = MagicMock()
    browser.start_tracing = AsyncMock()

    async def stop_tracing() -> bytes:
        paths.trace.write_text('{"traceEvents": []}', encoding="utf-8")
        return b""

    browser.stop_tracing = AsyncMock(side_effect=stop_tracing)
    trace = PerformanceTrace(browser, page, paths)

    assert await trace.stop() is None
    await trace.start()
    with pytest.raises(RuntimeError):
        await trace.start()
    record = await trace.stop()

    browser.start_tracing.assert_awaited_once_with(page=page, path=str(paths.trace), screenshots=True)
    assert record is not None
    assert record.path == str(paths.trace)
    assert trace.running is False


@pytest.mark.asyncio
async def test_render_pdf(tmp_path) -> None:
    paths = ArtifactPaths.for_target(tmp_path, "elm")
    page = MagicMock()

    async def pdf(path: str, format: str) -> bytes:
        with open(path, "wb") as handle:
            handle.write(b"%PDF-1.4")
        return b""

    page.pdf = AsyncMock(side_effect=pdf)

    record = await render_pdf(page, paths)

    page.pdf.assert_awaited_once_with(path=str(paths.pdf), format="A4")
    assert record.mime == "application/pdf"
    assert record.size == 8


def test_telemetry_snapshot() -> None:
    telemetry = Telemetry()
    telemetry.event("navigated", {"url": "http://localhost:8000"})
    telemetry.incr("keystrokes", 5)
    telemetry.incr("keystrokes")

    snapshot = telemetry.snapshot()

    assert snapshot["counters"] == {"keystrokes": 6}
    assert snapshot["timeline"][0]["phase"] == "navigated"
    assert snapshot["timeline"][0]["metadata"] == {"url": "http://localhost:8000"}


@pytest.mark.asyncio
async def test_jsonl_sink_appends(tmp_path) -> None:
    sink = JsonlRunSink(tmp_path / "nested" / "runs.jsonl")

    await sink.emit({"target": "elm", "success": True})
    await sink.emit({"target": "react", "success": False})

    lines = sink.path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["target"] for line in lines] == ["elm", "react"]
