"""Rolling per-capability success/latency statistics that feed back into scoring.

Statistics accumulate for the lifetime of the store: no window, no decay.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from model_orchestrator.constants import DEFAULT_SUCCESS_RATE
from model_orchestrator.schemas import Capability, PerformanceRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Counters:
    lock: threading.Lock = field(default_factory=threading.Lock)
    total_calls: int = 0
    successful_calls: int = 0
    total_latency_ms: float = 0.0


class PerformanceStore:
    def __init__(self, default_success_rate: float = DEFAULT_SUCCESS_RATE) -> None:
        if not 0.0 <= default_success_rate <= 1.0:
            raise ValueError(f"default_success_rate must be in [0, 1], got {default_success_rate}")
        self.default_success_rate = default_success_rate
        self._counters: dict[str, _Counters] = {}
        # Guards creation and removal of per-key entries; updates take the per-key lock.
        self._index_lock = threading.Lock()

    def _counters_for(self, capability_id: str) -> _Counters:
        counters = self._counters.get(capability_id)
        if counters is not None:
            return counters
        with self._index_lock:
            return self._counters.setdefault(capability_id, _Counters())

    def _to_record(self, capability_id: str, counters: _Counters) -> PerformanceRecord:
        return PerformanceRecord(
            capability_id=capability_id,
            total_calls=counters.total_calls,
            successful_calls=counters.successful_calls,
            total_latency_ms=counters.total_latency_ms,
        )

    def record(self, capability: Capability, latency_ms: float, success: bool) -> PerformanceRecord:
        while True:
            counters = self._counters_for(capability.id)
            with counters.lock:
                # reset() may have dropped this entry between lookup and lock.
                if self._counters.get(capability.id) is not counters:
                    continue
                counters.total_calls += 1
                if success:
                    counters.successful_calls += 1
                counters.total_latency_ms += latency_ms
                record = self._to_record(capability.id, counters)
            break
        logger.debug(
            "Performance %s: success=%s latency=%.1fms rate=%.3f calls=%d",
            capability.id,
            success,
            latency_ms,
            record.success_rate,
            record.total_calls,
        )
        return record

    def get(self, capability: Capability | str) -> PerformanceRecord | None:
        capability_id = capability if isinstance(capability, str) else capability.id
        counters = self._counters.get(capability_id)
        if counters is None:
            return None
        with counters.lock:
            return self._to_record(capability_id, counters)

    def success_rate(self, capability: Capability) -> float:
        record = self.get(capability)
        if record is None or record.success_rate is None:
            return self.default_success_rate
        return record.success_rate

    def effective_latency(self, capability: Capability) -> float:
        """Observed average latency once the capability has run, else its declared latency."""
        record = self.get(capability)
        if record is None or record.average_latency_ms is None:
            return capability.average_latency_ms
        return record.average_latency_ms

    def snapshot(self) -> dict[str, PerformanceRecord]:
        with self._index_lock:
            items = list(self._counters.items())
        snapshot: dict[str, PerformanceRecord] = {}
        for capability_id, counters in items:
            with counters.lock:
                snapshot[capability_id] = self._to_record(capability_id, counters)
        return snapshot

    def reset(self) -> None:
        """Drop all statistics. A record() racing with this lands in a fresh entry."""
        with self._index_lock:
            self._counters.clear()
