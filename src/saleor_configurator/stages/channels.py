# src/saleor_configurator/stages/channels.py
"""
Estágio de canais.

Canais declarados com `settings` são criados em duas etapas: criação com
os campos básicos e, em seguida, atualização dos settings sobre o id
recém-criado.
"""

from __future__ import annotations

from typing import Any, Dict

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.schema.model import Channel, ConfigurationSection, EntityMode

from .base import EntityStage, applicable_changes

_SETTINGS_PREFIX = "settings."


def channel_patch(result: DiffResult) -> Dict[str, Any]:
    """Patch de atualização a partir das mudanças do diff."""
    patch: Dict[str, Any] = {}
    for change in applicable_changes(result):
        if change.field.startswith(_SETTINGS_PREFIX):
            patch.setdefault("settings", {})[change.field[len(_SETTINGS_PREFIX):]] = change.desired
        else:
            patch[change.field] = change.desired
    return patch


class ChannelStage(EntityStage):
    name = "Managing channels"
    entity_type = EntityType.CHANNELS

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        channel: Channel = result.desired
        payload = channel.to_dict()
        payload.pop("settings", None)
        created = context.store.create_entity(ConfigurationSection.CHANNELS, payload)

        if channel.mode == EntityMode.UPDATE and channel.settings:
            context.store.update_entity(
                ConfigurationSection.CHANNELS, created.id, {"settings": dict(channel.settings)}
            )

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        context.store.update_entity(
            ConfigurationSection.CHANNELS, result.current.remote_id, channel_patch(result)
        )
