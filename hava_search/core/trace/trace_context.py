"""Per-request trace of the search stages (interpretation, query build, fetch)."""

from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any


@dataclass
class TraceContext:
    """Collects stage payloads for one interpret or search request.

    Each stage is stored as ``{"timestamp", "elapsed_ms", "data"}`` where
    ``elapsed_ms`` counts from the creation of the trace. Recording a stage
    twice keeps the later payload. ``finish()`` appends the whole trace as one
    JSON line to ``log_file`` when it is set.
    """

    trace_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    started_at: datetime = field(default_factory=datetime.now)
    stages: dict[str, dict[str, Any]] = field(default_factory=dict)
    user_query: str | None = None
    operation: str | None = None
    log_file: str | None = None
    _clock_start: float = field(default_factory=time.perf_counter, repr=False)

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self._clock_start) * 1000, 3)

    def record_stage(self, stage_name: str, data: dict[str, Any]) -> None:
        self.stages[stage_name] = {
            "timestamp": datetime.now().isoformat(),
            "elapsed_ms": self._elapsed_ms(),
            "data": data,
        }

    def get_stage_data(self, stage_name: str) -> dict[str, Any] | None:
        return self.stages.get(stage_name)

    def stage_names(self) -> list[str]:
        return list(self.stages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "trace_id": self.trace_id,
            "operation": self.operation,
            "user_query": self.user_query,
            "started_at": self.started_at.isoformat(),
            "total_ms": self._elapsed_ms(),
            "stages": self.stages,
        }

    def finish(self) -> dict[str, Any]:
        payload = self.to_dict()
        if not self.log_file:
            return payload

        path = Path(self.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        return payload
