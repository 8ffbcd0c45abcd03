"""tapevm package exposes the tape virtual machine and its instruction set."""
from .bytecode import Instruction, Opcode, decode_instruction, decode_program
from .tape_vm import INITIAL_MEMORY_SIZE, MAX_ALLOCATION, VirtualMachine
from .vm_errors import (
    ConcurrentExecution,
    ErrorKind,
    InvalidCommand,
    MemoryOutOfBounds,
    TapeVMError,
)
from .vm_events import VMStateSnapshot

__all__ = [
    "VirtualMachine",
    "INITIAL_MEMORY_SIZE",
    "MAX_ALLOCATION",
    "Opcode",
    "Instruction",
    "decode_instruction",
    "decode_program",
    "VMStateSnapshot",
    "ErrorKind",
    "TapeVMError",
    "MemoryOutOfBounds",
    "InvalidCommand",
    "ConcurrentExecution",
]
