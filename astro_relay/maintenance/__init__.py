from .periodic import PeriodicTask
from .keepalive import build_keep_alive_task
from .cleanup import build_cleanup_task, remove_stale_files

__all__ = ["PeriodicTask", "build_cleanup_task", "build_keep_alive_task", "remove_stale_files"]
