"""System reporting: logging and emoji registry."""

from shared.reporter.system_reporter import SystemReporter

__all__ = ["SystemReporter"]
