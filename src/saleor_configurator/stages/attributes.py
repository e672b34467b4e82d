# src/saleor_configurator/stages/attributes.py
"""
Estágio de atributos globais (`productAttributes` / `contentAttributes`).

Responsabilidades:
    - Criar atributos declarados localmente e ausentes no remoto
    - Acrescentar valores novos a atributos de escolha existentes
    - Registrar cada id criado no cache de atributos da run, para que os
      estágios seguintes reusem a mesma identidade

Limites explícitos:
    - Não remove valores remotos (mudança destrutiva, apenas reportada)
    - Não altera `inputType` nem `entityType` de um atributo existente;
      a tentativa é sinalizada como falha da entidade
"""

from __future__ import annotations

from typing import List

from saleor_configurator.attributes.cache import AttributeCacheEntry
from saleor_configurator.core.exceptions import ValidationError
from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.schema.model import AttributeDefinition, ConfigurationSection

from .base import EntityStage, applicable_changes

_IMMUTABLE_FIELDS = ("inputType", "entityType")


class AttributeStage(EntityStage):
    name = "Managing attributes"
    entity_type = EntityType.ATTRIBUTES

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        definition: AttributeDefinition = result.desired
        cache = context.attribute_cache

        with cache.key_lock(definition.name, definition.kind):
            existing = cache.get(definition.name, definition.kind)
            if existing is not None:
                context.add_warning(
                    stage=self.name,
                    message=f"Attribute '{definition.name}' already exists; reusing it",
                )
                return

            payload = dict(definition.to_dict(), type=definition.kind.value)
            created = context.store.create_entity(ConfigurationSection.ATTRIBUTES, payload)
            cache.put(
                AttributeCacheEntry(
                    name=definition.name,
                    kind=definition.kind,
                    remote_id=created.id,
                    input_type=definition.input_type,
                )
            )

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        definition: AttributeDefinition = result.desired
        current: AttributeDefinition = result.current
        changes = applicable_changes(result)

        blocked = [c for c in changes if c.field in _IMMUTABLE_FIELDS]
        if blocked:
            raise ValidationError(
                message=(
                    f"Attribute '{definition.name}' cannot change "
                    + ", ".join(c.description for c in blocked)
                ),
                details={"attribute": definition.name, "fields": [c.field for c in blocked]},
                hint="Crie um novo atributo com outro nome ou ajuste a configuração local.",
            )

        added: List[str] = [v for v in definition.values if v not in current.values]
        if added:
            context.store.update_entity(
                ConfigurationSection.ATTRIBUTES,
                current.remote_id,
                {"addValues": [{"name": v} for v in added]},
            )
