# src/saleor_configurator/stages/validation.py
"""Estágio de pré-validação: reexecuta o preflight antes de qualquer mutação remota."""

from __future__ import annotations

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.schema.preflight import ensure_valid


class ValidationStage:
    name = "Validating configuration"

    def skip(self, context: DeploymentContext) -> bool:
        return not context.summary.has_changes

    def execute(self, context: DeploymentContext) -> None:
        ensure_valid(context.configuration)
        context.log(stage=self.name, level="info", message="configuration is valid")
