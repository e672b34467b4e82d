# src/saleor_configurator/attributes/resolver.py
"""
Resolvedor de atributos compartilhados.

Este módulo converte as entradas de atributo de um product type ou page
type (referências por nome e definições inline) em ids remotos prontos
para vinculação, reutilizando o `AttributeCache` da run.

Algoritmo de `resolve(inputs, kind, already_assigned)`:
    1. Valida a legalidade das definições inline (antes de qualquer mutação)
    2. Descarta referências cujo nome já está vinculado ao owner
    3. Atende referências pelo cache; as ausentes são buscadas em UMA
       chamada em lote (`find_attributes_by_name`) e gravadas no cache
    4. Qualquer referência ainda não resolvida é falha fatal
       (`AttributeResolutionError`) nomeando todos os ausentes
    5. Valida `variantSelection` contra o tipo resolvido das referências
    6. Definições inline: reutiliza o atributo remoto existente (com
       diagnóstico) ou cria; valores locais ausentes no remoto são
       acrescentados, nunca removidos; o lookup remoto é omitido quando
       a run já criou ou sincronizou todos os valores pedidos

Decisões arquiteturais:
    - Cada chave é processada sob `cache.key_lock`, de modo que dois
      owners concorrentes nunca buscam ou criam o mesmo atributo duas vezes
    - Locks de várias chaves são adquiridos em ordem lexicográfica
    - Nenhuma exceção é engolida: falhas remotas propagam para o estágio

Limites explícitos:
    - Não vincula atributos ao owner (responsabilidade do estágio)
    - Não remove valores nem atributos
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from saleor_configurator.core import errors as catalog
from saleor_configurator.core.exceptions import AttributeResolutionError
from saleor_configurator.core.pipeline.events import EventLog
from saleor_configurator.remote.store import RemoteAttribute, RemoteStore
from saleor_configurator.schema.model import (
    AttributeDefinition,
    AttributeInput,
    AttributeKind,
    AttributeReference,
    ConfigurationSection,
    InputType,
)
from saleor_configurator.schema.preflight import attribute_input_issues

from .cache import AttributeCache, AttributeCacheEntry


_SOURCE = "attributes.resolver"


@dataclass(frozen=True)
class ResolvedAttribute:
    name: str
    remote_id: str
    input_type: InputType
    variant_selection: bool = False


def _unique(names: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for n in names:
        if n not in seen:
            seen.append(n)
    return seen


def _entry_from_remote(remote: RemoteAttribute) -> AttributeCacheEntry:
    return AttributeCacheEntry(
        name=remote.name,
        kind=remote.kind,
        remote_id=remote.id,
        input_type=remote.input_type,
    )


class AttributeResolver:
    def __init__(
        self,
        *,
        store: RemoteStore,
        cache: AttributeCache,
        events: Optional[EventLog] = None,
    ):
        self.store = store
        self.cache = cache
        self.events = events
        # valores já criados ou sincronizados nesta run, por (name, kind)
        self._synced_values: Dict[Tuple[str, AttributeKind], Set[str]] = {}

    # -----------------------------
    # Diagnósticos
    # -----------------------------
    def _log(self, level: str, message: str, **extra) -> None:
        if self.events is not None:
            self.events.log(source=_SOURCE, level=level, message=message, **extra)

    def _warn(self, message: str) -> None:
        if self.events is not None:
            self.events.add_warning(source=_SOURCE, message=message)

    # -----------------------------
    # Lookup somente-leitura (usado pelo diff)
    # -----------------------------
    def lookup(self, names: Sequence[str], kind: AttributeKind) -> Dict[str, RemoteAttribute]:
        """
        Busca definições remotas completas em uma única chamada e
        registra os ids encontrados no cache.
        """
        wanted = _unique(names)
        if not wanted:
            return {}
        found = {r.name: r for r in self.store.find_attributes_by_name(wanted, kind)}
        for remote in found.values():
            self.cache.put(_entry_from_remote(remote))
        self._log("debug", "attribute lookup", kind=kind.value, requested=wanted, found=sorted(found))
        return found

    # -----------------------------
    # Resolução (usada pelo deployment)
    # -----------------------------
    def resolve(
        self,
        inputs: Sequence[AttributeInput],
        kind: AttributeKind,
        already_assigned: Iterable[str] = (),
        *,
        owner: Optional[str] = None,
        as_variant: bool = False,
    ) -> List[str]:
        """Resolve entradas de atributo para ids remotos, na ordem de entrada."""
        return [
            r.remote_id
            for r in self.resolve_entries(
                inputs, kind, already_assigned, owner=owner, as_variant=as_variant
            )
        ]

    def resolve_entries(
        self,
        inputs: Sequence[AttributeInput],
        kind: AttributeKind,
        already_assigned: Iterable[str] = (),
        *,
        owner: Optional[str] = None,
        as_variant: bool = False,
    ) -> List[ResolvedAttribute]:
        assigned = set(already_assigned)

        problems: List[str] = []
        for item in inputs:
            if isinstance(item, AttributeDefinition):
                problems += attribute_input_issues(item, as_variant=as_variant)
        if problems:
            raise AttributeResolutionError(
                message=f"Invalid attribute definitions for '{owner}'",
                details={"owner": owner, "issues": problems},
                hint="Corrija as definições inline indicadas antes de executar novamente.",
            )

        references = [i for i in inputs if isinstance(i, AttributeReference) and i.name not in assigned]
        resolved_refs = self._resolve_references([r.name for r in references], kind, owner=owner)

        problems = []
        for ref in references:
            problems += attribute_input_issues(
                ref, as_variant=as_variant, resolved_input_type=resolved_refs[ref.name].input_type
            )
        if problems:
            raise AttributeResolutionError(
                message=f"Invalid attribute references for '{owner}'",
                details={"owner": owner, "issues": problems},
            )

        resolved: List[ResolvedAttribute] = []
        for item in inputs:
            if isinstance(item, AttributeReference):
                if item.name in assigned:
                    continue
                entry = resolved_refs[item.name]
            else:
                entry = self._ensure_inline(item, kind, owner=owner)
                if item.name in assigned:
                    continue
            resolved.append(
                ResolvedAttribute(
                    name=item.name,
                    remote_id=entry.remote_id,
                    input_type=entry.input_type,
                    variant_selection=item.variant_selection,
                )
            )
        return resolved

    def _resolve_references(
        self, names: Sequence[str], kind: AttributeKind, *, owner: Optional[str]
    ) -> Dict[str, AttributeCacheEntry]:
        wanted = _unique(names)
        if not wanted:
            return {}

        with ExitStack() as stack:
            for name in sorted(wanted):
                stack.enter_context(self.cache.key_lock(name, kind))

            found, missing = self.cache.partition(wanted, kind)
            if missing:
                for remote in self.store.find_attributes_by_name(missing, kind):
                    found[remote.name] = self.cache.put(_entry_from_remote(remote))

            unresolved = [n for n in wanted if n not in found]
            if unresolved:
                payload = catalog.attribute_resolution_error(names=unresolved, owner=owner, kind=kind.value)
                raise AttributeResolutionError(
                    message=f"Attributes not found for '{owner}': {', '.join(unresolved)}",
                    details=payload.details,
                    hint=payload.hint,
                )
        return found

    def _ensure_inline(
        self, definition: AttributeDefinition, kind: AttributeKind, *, owner: Optional[str]
    ) -> AttributeCacheEntry:
        key = (definition.name, kind)
        with self.cache.key_lock(definition.name, kind):
            entry = self.cache.get(definition.name, kind)
            synced = self._synced_values.get(key)
            remote: Optional[RemoteAttribute] = None
            if entry is None or (
                definition.values and (synced is None or not set(definition.values) <= synced)
            ):
                matches = self.store.find_attributes_by_name([definition.name], kind)
                remote = matches[0] if matches else None

            if entry is None and remote is None:
                payload = dict(definition.to_dict(), type=kind.value)
                created = self.store.create_entity(ConfigurationSection.ATTRIBUTES, payload)
                self._log("info", "attribute created", attribute=definition.name, owner=owner)
                self._synced_values[key] = set(definition.values)
                return self.cache.put(
                    AttributeCacheEntry(
                        name=definition.name,
                        kind=kind,
                        remote_id=created.id,
                        input_type=definition.input_type,
                    )
                )

            if entry is None:
                self._warn(f"Attribute '{definition.name}' already exists; reusing it for '{owner}'")
                entry = self.cache.put(_entry_from_remote(remote))

            if remote is not None:
                if remote.input_type != definition.input_type:
                    self._warn(
                        f"Attribute '{definition.name}' exists as {remote.input_type.value}, "
                        f"declared as {definition.input_type.value}; keeping the remote type"
                    )
                self.add_missing_values(definition, remote)
                self._synced_values[key] = set(remote.values) | set(definition.values)
            return entry

    def add_missing_values(self, definition: AttributeDefinition, remote: RemoteAttribute) -> List[str]:
        """Acrescenta ao atributo remoto os valores locais que ele ainda não possui."""
        missing = [v for v in definition.values if v not in remote.values]
        if missing:
            self.store.update_entity(
                ConfigurationSection.ATTRIBUTES,
                remote.id,
                {"addValues": [{"name": v} for v in missing]},
            )
            self._log("info", "attribute values added", attribute=definition.name, values=missing)
        return missing
