from .execution_tracker import ExecutionTracker

__all__ = ["ExecutionTracker"]
