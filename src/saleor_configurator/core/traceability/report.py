# src/saleor_configurator/core/traceability/report.py
"""
Relatório de deployment: persistência JSON determinística.

O relatório consolida, para auditoria pós-execução:
    - identificação da run (`runId`) e hash semântico da configuração
    - DiffSummary planejado
    - métricas, resultado por estágio e exit code
    - mudanças não aplicadas (deleções reportadas)
    - sugestões de limpeza, warnings e Event Log

Decisões arquiteturais:
    - JSON com `sort_keys=True` e indentação legível
    - Diretórios intermediários são criados automaticamente
    - Nomes de arquivo derivam do instante UTC da escrita

Limites explícitos:
    - Não decide se o relatório deve ser salvo (ver `Settings.save_report`)
    - Não poda relatórios antigos
    - Não valida semântica do conteúdo
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

REPORT_PREFIX = "deployment-report-"
REPORT_EXTENSION = ".json"


def generate_report_filename(now: Optional[datetime] = None) -> str:
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return f"{REPORT_PREFIX}{moment.strftime('%Y-%m-%d_%H-%M-%S')}{REPORT_EXTENSION}"


def save_report(report: Dict[str, Any], path: Union[str, Path]) -> Path:
    """
    Persiste o relatório em JSON.

    Raises:
        OSError: falha ao criar diretórios ou escrever o arquivo.
        TypeError: conteúdo não serializável em JSON.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
    return path


def load_report(path: Union[str, Path]) -> Dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


class JsonReportSink:
    """Destino de relatórios em um diretório gerenciado."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def write(self, report: Dict[str, Any], *, now: Optional[datetime] = None) -> Path:
        return save_report(report, self.directory / generate_report_filename(now))
