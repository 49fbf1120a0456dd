"""Visibility of identifiers, decided purely by spelling convention."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


def is_private_name(name: str) -> bool:
    """``__spam`` is private; dunders such as ``__init__`` are not."""
    return len(name) > 2 and name.startswith("__") and not name.endswith("__")


def is_protected_name(name: str) -> bool:
    """``_spam`` is protected; a bare ``_`` is not."""
    return len(name) > 1 and name.startswith("_") and not name.startswith("__")


@runtime_checkable
class NameClassifier(Protocol):
    def is_private_name(self, name: str) -> bool: ...

    def is_protected_name(self, name: str) -> bool: ...


class ConventionNameClassifier:
    """Default classifier backed by the module-level convention checks."""

    def is_private_name(self, name: str) -> bool:
        return is_private_name(name)

    def is_protected_name(self, name: str) -> bool:
        return is_protected_name(name)
