from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    MEMORY_OUT_OF_BOUNDS = auto()
    INVALID_COMMAND = auto()
    CONCURRENT_EXECUTION = auto()


class TapeVMError(RuntimeError):
    """Base class for the three failures the tape VM can raise."""

    kind: ErrorKind

    def __init__(self, message: str = "", pc: Optional[int] = None):
        super().__init__(message or self.__class__.__name__)
        self.pc = pc


class MemoryOutOfBounds(TapeVMError):
    """The memory cursor moved below zero."""

    kind = ErrorKind.MEMORY_OUT_OF_BOUNDS


class InvalidCommand(TapeVMError):
    """An instruction is not one of the six primitives."""

    kind = ErrorKind.INVALID_COMMAND


class ConcurrentExecution(TapeVMError):
    """``load`` was called while a program was executing."""

    kind = ErrorKind.CONCURRENT_EXECUTION


__all__ = [
    "ErrorKind",
    "TapeVMError",
    "MemoryOutOfBounds",
    "InvalidCommand",
    "ConcurrentExecution",
]
