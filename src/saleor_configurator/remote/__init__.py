# src/saleor_configurator/remote/__init__.py
"""Acesso abstrato à loja remota (`RemoteStore`)."""

from .store import (
    AssignmentRole,
    AttributeAssignment,
    RemoteAttribute,
    RemoteEntity,
    RemoteStore,
)

__all__ = [
    "AssignmentRole",
    "AttributeAssignment",
    "RemoteAttribute",
    "RemoteEntity",
    "RemoteStore",
]
