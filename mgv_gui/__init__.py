"""Multiple genome viewer state: strips, regions and cross-genome navigation."""

from __future__ import annotations

from typing import Any


def context_notifier(*args: Any, **kwargs: Any) -> Any:
    """Create a Qt :class:`ContextNotifier`, importing PySide6 on demand."""

    from .model.notifier import ContextNotifier

    return ContextNotifier(*args, **kwargs)


__all__ = ["context_notifier"]
