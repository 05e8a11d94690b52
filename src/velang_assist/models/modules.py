"""Importable module descriptors."""

from __future__ import annotations

from pydantic import BaseModel


class ModuleDescriptor(BaseModel):
    """An importable module (``std/io`` or ``./util``) and its description."""

    name: str
    description: str


__all__ = ["ModuleDescriptor"]
