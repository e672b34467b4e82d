# src/saleor_configurator/core/pipeline/events.py
"""
Event log estruturado de uma run.

O `EventLog` é o mecanismo de logging do Saleor Configurator: em vez de
um logger global, cada invocação (diff ou deploy) acumula eventos
estruturados em memória, que são anexados ao relatório de deployment.

Invariantes:
    - Eventos sempre incluem `run_id`, `source`, `level`, `message` e
      `timestamp` (UTC, ISO 8601)
    - Warnings são agrupados por `source`
    - A ordem dos eventos reflete a ordem de chamada
    - O log é seguro para uso concorrente dentro de um estágio
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class EventLog:
    run_id: str
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "source": source,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        with self._lock:
            self.events.append(event)

    def add_warning(self, *, source: str, message: str) -> None:
        with self._lock:
            self.warnings.setdefault(source, []).append(message)
        self.log(source=source, level="warning", message=message)

    def warnings_for(self, source: str) -> List[str]:
        with self._lock:
            return list(self.warnings.get(source, []))
