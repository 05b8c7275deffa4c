from .base import CommandRunner
from .shell import ShellCommandRunner

__all__ = ["CommandRunner", "ShellCommandRunner"]
