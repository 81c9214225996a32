"""Process adapters (asyncio subprocesses)."""

from adapters.process.executor import CommandExecutor
from adapters.process.supervisor import ProcessSupervisor

__all__ = ["CommandExecutor", "ProcessSupervisor"]
