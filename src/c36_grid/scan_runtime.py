"""Asynchronous coordinate feed that classifies cells as position updates arrive."""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from .cells import get_cell_type, get_shop_variant
from .models import CellType, ShopVariant


@dataclass(slots=True)
class CellReport:
    """Content observed at one coordinate."""

    id: str
    x: int
    y: int
    observed_at: datetime
    cell_type: CellType | None = None
    shop_variant: ShopVariant | None = None


class ReportStore(Protocol):
    """Persistence contract for finished cell reports."""

    def append(self, report: CellReport) -> None:
        """Persist a classified report."""

    def list_recent(self, limit: int) -> list[CellReport]:
        """Return up to ``limit`` newest reports."""


class InMemoryReportStore:
    """Bounded in-memory report history."""

    def __init__(self, max_reports: int = 1_000) -> None:
        self._reports: deque[CellReport] = deque(maxlen=max_reports)

    def append(self, report: CellReport) -> None:
        self._reports.appendleft(report)

    def list_recent(self, limit: int) -> list[CellReport]:
        return list(self._reports)[:limit]


class JsonlReportStore:
    """JSONL-backed report persistence, one classified cell per line."""

    def __init__(self, file_path: str | Path) -> None:
        self._path = Path(file_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, report: CellReport) -> None:
        payload = asdict(report)
        payload["observed_at"] = report.observed_at.isoformat()
        payload["cell_type"] = report.cell_type.value if report.cell_type else None
        payload["shop_variant"] = report.shop_variant.value if report.shop_variant else None
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload) + "\n")

    def list_recent(self, limit: int) -> list[CellReport]:
        if not self._path.exists():
            return []

        reports: list[CellReport] = []
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                payload = json.loads(line)
                reports.append(
                    CellReport(
                        id=payload["id"],
                        x=payload["x"],
                        y=payload["y"],
                        observed_at=datetime.fromisoformat(payload["observed_at"]),
                        cell_type=CellType(payload["cell_type"]) if payload.get("cell_type") else None,
                        shop_variant=ShopVariant(payload["shop_variant"]) if payload.get("shop_variant") else None,
                    )
                )

        reports.reverse()
        return reports[:limit]


class ScanRuntime:
    """Queue-backed worker that turns coordinate updates into cell reports."""

    def __init__(
        self,
        *,
        report_store: ReportStore | None = None,
        max_queue_size: int = 1_000,
        max_retained_reports: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._report_store = report_store or InMemoryReportStore(max_reports=max_queue_size)
        self._logger = logger or logging.getLogger("c36_grid.scan_runtime")

        self._max_retained_reports = max_retained_reports or max_queue_size
        # Insertion ordered; classified reports beyond the retention limit are evicted oldest first.
        self._reports: dict[str, CellReport] = {}
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max_queue_size)
        self._worker_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the worker loop once for this runtime."""
        if self._worker_task and not self._worker_task.done():
            return

        self._worker_task = asyncio.create_task(self._worker_loop(), name="scan-runtime-worker")
        self._logger.info("scan_runtime_started", extra={"queue_maxsize": self._queue.maxsize})

    async def stop(self) -> None:
        """Stop worker loop and wait for graceful cancellation."""
        if not self._worker_task:
            return

        self._worker_task.cancel()
        try:
            await self._worker_task
        except asyncio.CancelledError:
            pass
        finally:
            self._worker_task = None

        self._logger.info("scan_runtime_stopped")

    async def drain(self) -> None:
        """Wait until every submitted coordinate has been classified."""
        await self._queue.join()

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    def submit(self, cell_x: int, cell_y: int) -> str:
        """Queue a coordinate update and return the report id.

        Raises ``asyncio.QueueFull`` when the queue is at capacity; nothing is recorded then.
        """
        report_id = uuid4().hex
        self._queue.put_nowait(report_id)
        self._register(report_id, cell_x, cell_y)
        return report_id

    async def feed(self, cell_x: int, cell_y: int) -> str:
        """Queue a coordinate update, waiting for room when the queue is full."""
        report_id = uuid4().hex
        await self._queue.put(report_id)
        self._register(report_id, cell_x, cell_y)
        return report_id

    def _register(self, report_id: str, cell_x: int, cell_y: int) -> None:
        self._reports[report_id] = CellReport(
            id=report_id,
            x=cell_x,
            y=cell_y,
            observed_at=datetime.now(timezone.utc),
        )
        self._logger.debug(
            "coordinate_submitted",
            extra={"report_id": report_id, "x": cell_x, "y": cell_y, "queue_size": self._queue.qsize()},
        )

    def get_report(self, report_id: str) -> CellReport:
        """Return a pending or recently classified report; evicted ones raise ``KeyError``."""
        if report_id not in self._reports:
            raise KeyError(f"Unknown cell report id: {report_id}")
        return self._reports[report_id]

    def list_recent_reports(self, limit: int = 20) -> list[CellReport]:
        """Return most recent in-memory reports and persisted history entries."""
        in_memory = sorted(
            (report for report in self._reports.values() if report.cell_type is not None),
            key=lambda report: report.observed_at,
            reverse=True,
        )
        if len(in_memory) >= limit:
            return in_memory[:limit]

        persisted = self._report_store.list_recent(limit)
        merged: list[CellReport] = []
        seen: set[str] = set()
        for report in [*in_memory, *persisted]:
            if report.id in seen:
                continue
            seen.add(report.id)
            merged.append(report)
            if len(merged) >= limit:
                break
        return merged

    async def _worker_loop(self) -> None:
        while True:
            report_id = await self._queue.get()
            try:
                self._classify(report_id)
            except Exception:  # noqa: BLE001 - one bad update must not stop the feed.
                self._logger.exception("cell_classification_failed", extra={"report_id": report_id})
            finally:
                self._queue.task_done()

    def _classify(self, report_id: str) -> None:
        report = self._reports[report_id]
        report.cell_type = get_cell_type(report.x, report.y)
        if report.cell_type == CellType.SHOP:
            report.shop_variant = get_shop_variant(report.x, report.y)
        self._report_store.append(report)
        self._logger.info(
            "cell_classified",
            extra={"report_id": report.id, "x": report.x, "y": report.y, "cell_type": report.cell_type.value},
        )
        self._evict_classified()

    def _evict_classified(self) -> None:
        excess = len(self._reports) - self._max_retained_reports
        if excess <= 0:
            return
        evictable = [report_id for report_id, report in self._reports.items() if report.cell_type is not None]
        for report_id in evictable[:excess]:
            del self._reports[report_id]
