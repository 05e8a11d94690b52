"""Importable module discovery."""

from velang_assist.catalog.modules import (
    fallback_catalog,
    list_local_modules,
    list_modules,
    list_standard_modules,
    standard_module_functions,
)

__all__ = [
    "fallback_catalog",
    "list_local_modules",
    "list_modules",
    "list_standard_modules",
    "standard_module_functions",
]
