# src/saleor_configurator/attributes/cache.py
"""
Cache de atributos com escopo de uma invocação (diff + deploy).

O cache garante que um mesmo nome de atributo resolva para exatamente um
id remoto durante toda a run, e que o atributo seja buscado ou criado no
máximo uma vez, mesmo quando vários product types o referenciam em
paralelo.

Princípios fundamentais:
    - Escopo por run: uma nova instância por invocação, nunca global
    - Chave composta (name, kind): atributos de produto e de conteúdo
      vivem em espaços distintos
    - Primeiro escritor vence: `put` nunca sobrescreve uma entrada
    - Serialização por chave: `key_lock` permite que o resolvedor faça
      check-then-act (miss → lookup/criação → put) de forma atômica

Invariantes:
    - Uma chave, uma vez gravada, nunca muda de `remote_id`
    - Todas as operações são thread-safe

Limites explícitos:
    - Não acessa a loja remota
    - Não expira entradas
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from saleor_configurator.schema.model import AttributeKind, InputType


CacheKey = Tuple[str, AttributeKind]


@dataclass(frozen=True)
class AttributeCacheEntry:
    name: str
    kind: AttributeKind
    remote_id: str
    input_type: InputType

    @property
    def key(self) -> CacheKey:
        return (self.name, self.kind)


@dataclass
class AttributeCache:
    _entries: Dict[CacheKey, AttributeCacheEntry] = field(default_factory=dict, init=False, repr=False)
    _key_locks: Dict[CacheKey, threading.Lock] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def get(self, name: str, kind: AttributeKind) -> Optional[AttributeCacheEntry]:
        with self._lock:
            return self._entries.get((name, kind))

    def put(self, entry: AttributeCacheEntry) -> AttributeCacheEntry:
        """Grava a entrada se a chave estiver livre; retorna a entrada vigente."""
        with self._lock:
            current = self._entries.get(entry.key)
            if current is not None:
                return current
            self._entries[entry.key] = entry
            return entry

    def partition(
        self, names: Sequence[str], kind: AttributeKind
    ) -> Tuple[Dict[str, AttributeCacheEntry], List[str]]:
        """Separa nomes em (encontrados no cache, ausentes), preservando ordem."""
        found: Dict[str, AttributeCacheEntry] = {}
        missing: List[str] = []
        with self._lock:
            for name in names:
                entry = self._entries.get((name, kind))
                if entry is not None:
                    found[name] = entry
                elif name not in missing:
                    missing.append(name)
        return found, missing

    def key_lock(self, name: str, kind: AttributeKind) -> threading.Lock:
        with self._lock:
            return self._key_locks.setdefault((name, kind), threading.Lock())

    def entries(self) -> List[AttributeCacheEntry]:
        with self._lock:
            return list(self._entries.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries
