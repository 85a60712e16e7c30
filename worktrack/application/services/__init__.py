"""Application services shared by the task use cases."""

from worktrack.application.services.history_recorder import HistoryRecorder
from worktrack.application.services.permission_gate import PermissionGate

__all__ = ["HistoryRecorder", "PermissionGate"]
