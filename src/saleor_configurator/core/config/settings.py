# src/saleor_configurator/core/config/settings.py
"""
Settings efetivas do Saleor Configurator.

Este módulo define os defaults embutidos da ferramenta e a materialização
tipada (`Settings`) da configuração resolvida.

Chaves suportadas (v1):
    deploy.fail_on_delete   → bloqueia o deployment se houver mudanças destrutivas
    deploy.max_workers      → paralelismo máximo dentro de um estágio
    deploy.save_report      → persiste o relatório JSON ao final da run
    deploy.report_dir       → diretório de destino dos relatórios
    diff.include_sections   → restringe o diff às seções listadas
    diff.exclude_sections   → remove seções do diff

Invariantes:
    - `Settings` é imutável após materializada
    - Valores fora do domínio são rejeitados com `InvalidSettingError`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from saleor_configurator.schema.model import ConfigurationSection

from .errors import InvalidSettingError


DEFAULT_SETTINGS: Dict[str, Any] = {
    "deploy": {
        "fail_on_delete": False,
        "max_workers": 4,
        "save_report": True,
        "report_dir": ".saleor-configurator/reports",
    },
    "diff": {
        "include_sections": [],
        "exclude_sections": [],
    },
}


def _sections(raw: Any, key: str) -> Tuple[ConfigurationSection, ...]:
    if not isinstance(raw, list):
        raise InvalidSettingError(f"diff.{key} deve ser lista, recebido: {type(raw).__name__}")
    known = {s.value: s for s in ConfigurationSection}
    out = []
    for item in raw:
        if item not in known:
            raise InvalidSettingError(
                f"Seção desconhecida em diff.{key}: {item!r} (válidas: {sorted(known)})"
            )
        out.append(known[item])
    return tuple(out)


def _flag(deploy: Dict[str, Any], key: str, default: bool) -> bool:
    value = deploy.get(key, default)
    if not isinstance(value, bool):
        raise InvalidSettingError(f"deploy.{key} deve ser booleano, recebido: {value!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Settings resolvidas e validadas da ferramenta."""

    fail_on_delete: bool = False
    max_workers: int = 4
    save_report: bool = True
    report_dir: str = ".saleor-configurator/reports"
    include_sections: Tuple[ConfigurationSection, ...] = ()
    exclude_sections: Tuple[ConfigurationSection, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        deploy = dict(data.get("deploy") or {})
        diff = dict(data.get("diff") or {})

        max_workers = deploy.get("max_workers", 4)
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            raise InvalidSettingError(f"deploy.max_workers deve ser inteiro >= 1, recebido: {max_workers!r}")

        return cls(
            fail_on_delete=_flag(deploy, "fail_on_delete", False),
            max_workers=max_workers,
            save_report=_flag(deploy, "save_report", True),
            report_dir=str(deploy.get("report_dir", cls.report_dir)),
            include_sections=_sections(diff.get("include_sections", []), "include_sections"),
            exclude_sections=_sections(diff.get("exclude_sections", []), "exclude_sections"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deploy": {
                "fail_on_delete": self.fail_on_delete,
                "max_workers": self.max_workers,
                "save_report": self.save_report,
                "report_dir": self.report_dir,
            },
            "diff": {
                "include_sections": [s.value for s in self.include_sections],
                "exclude_sections": [s.value for s in self.exclude_sections],
            },
        }
