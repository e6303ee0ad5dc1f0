"""Qt adapter that turns region manager announcements into a signal."""

from __future__ import annotations

from PySide6 import QtCore

from .region_manager import RegionManager


class ContextNotifier(QtCore.QObject):
    """Re-emits :meth:`RegionManager.announce` as :attr:`context_changed`."""

    context_changed = QtCore.Signal()

    def __init__(self, manager: RegionManager, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent)
        self._manager: RegionManager | None = manager
        manager.subscribe(self._relay)

    def detach(self) -> None:
        if self._manager is None:
            return
        self._manager.unsubscribe(self._relay)
        self._manager = None

    def _relay(self) -> None:
        self.context_changed.emit()
