from __future__ import annotations

import logging
from typing import IO, Any, Callable, Dict, List, Optional, Sequence, Tuple

from .bytecode import Instruction, Opcode, decode_instruction
from .vm_errors import ConcurrentExecution, InvalidCommand, MemoryOutOfBounds
from .vm_events import VMStateSnapshot

logger = logging.getLogger(__name__)

# Number of zeroed cells allocated by every load.
INITIAL_MEMORY_SIZE = 32

# Lower bound on a single tape growth step; larger tapes double instead.
MAX_ALLOCATION = 1_024


class VirtualMachine:
    """Executes ``(opcode, argument)`` streams over a growable tape.

    Every handler moves the program counter itself: branches add their
    relative offset, everything else steps by one. The input, output and EOF
    value are bound once for the lifetime of the instance; ``load`` re-arms
    the registers and memory for a new run.
    """

    def __init__(
        self,
        input_stream: IO[Any],
        output_stream: IO[Any],
        eof: int,
        *,
        initial_memory_size: int = INITIAL_MEMORY_SIZE,
        max_allocation: int = MAX_ALLOCATION,
    ):
        if initial_memory_size <= 0:
            raise ValueError("initial_memory_size must be positive")
        if max_allocation <= 0:
            raise ValueError("max_allocation must be positive")
        self.input = input_stream
        self.output = output_stream
        self.eof = eof
        self.initial_memory_size = initial_memory_size
        self.max_allocation = max_allocation
        self.executing = False
        self.program: Tuple[Any, ...] = ()
        self.program_counter = 0
        self.cursor = 0
        self.memory: List[int] = [0] * initial_memory_size
        self._decoded: List[Optional[Instruction]] = []
        self._handlers: Dict[Opcode, Callable[[int], None]] = {
            Opcode.CHANGE_VALUE: self._op_change_value,
            Opcode.CHANGE_POINTER: self._op_change_pointer,
            Opcode.GET: self._op_get,
            Opcode.PUT: self._op_put,
            Opcode.BRANCH_IF_ZERO: self._op_branch_if_zero,
            Opcode.BRANCH_NOT_ZERO: self._op_branch_not_zero,
        }

    def load(self, instructions: Sequence[Any]) -> None:
        if self.executing:
            raise ConcurrentExecution(
                "cannot load a program while another is executing",
                pc=self.program_counter,
            )
        self.program_counter = 0
        self.cursor = 0
        self.program = tuple(instructions)
        self._decoded = [None] * len(self.program)
        self.memory = [0] * self.initial_memory_size
        logger.debug("loaded %d instructions", len(self.program))

    def execute(self, debug: bool = False) -> None:
        self.executing = True
        try:
            while self.program_counter < len(self.program):
                inst = self._fetch()
                if debug:
                    logger.debug(
                        "[PC=%d] EXEC: %s (cursor=%d, value=%d)",
                        self.program_counter,
                        inst,
                        self.cursor,
                        self.memory[self.cursor],
                    )
                self._handlers[inst.opcode](inst.argument)
        finally:
            self.executing = False

    def state(self) -> VMStateSnapshot:
        in_bounds = 0 <= self.cursor < len(self.memory)
        return VMStateSnapshot(
            executing=self.executing,
            program_counter=self.program_counter,
            cursor=self.cursor,
            memory=tuple(self.memory),
            current_value=self.memory[self.cursor] if in_bounds else None,
        )

    def _fetch(self) -> Instruction:
        if self.program_counter < 0:
            raise InvalidCommand(
                f"branch moved the program counter to {self.program_counter}",
                pc=self.program_counter,
            )
        inst = self._decoded[self.program_counter]
        if inst is None:
            try:
                inst = decode_instruction(self.program[self.program_counter])
            except InvalidCommand as exc:
                exc.pc = self.program_counter
                raise
            self._decoded[self.program_counter] = inst
        return inst

    # -------------------- Opcode handlers --------------------
    def _op_change_value(self, delta: int) -> None:
        self.program_counter += 1
        self.memory[self.cursor] += delta

    def _op_change_pointer(self, delta: int) -> None:
        self.program_counter += 1
        self.cursor += delta
        if self.cursor < 0:
            raise MemoryOutOfBounds(
                f"memory cursor moved to {self.cursor}",
                pc=self.program_counter - 1,
            )
        self._reallocate()

    def _op_get(self, count: int) -> None:
        self.program_counter += 1
        for _ in range(count):
            value = self._read_byte()
            if value is None:
                self.memory[self.cursor] = self.eof
                break
            self.memory[self.cursor] = value

    def _op_put(self, count: int) -> None:
        self.program_counter += 1
        if count > 0:
            self.output.write(bytes([self.memory[self.cursor] % 256]) * count)

    def _op_branch_if_zero(self, offset: int) -> None:
        if self.memory[self.cursor] == 0:
            self.program_counter += offset
        else:
            self.program_counter += 1

    def _op_branch_not_zero(self, offset: int) -> None:
        if self.memory[self.cursor] == 0:
            self.program_counter += 1
        else:
            self.program_counter += offset

    # -------------------- Helpers --------------------
    def _read_byte(self) -> Optional[int]:
        chunk = self.input.read(1)
        if not chunk:
            return None
        if isinstance(chunk, str):
            return ord(chunk)
        return chunk[0]

    def _reallocate(self) -> None:
        while self.cursor >= len(self.memory):
            size = max(self.max_allocation, len(self.memory))
            self.memory.extend([0] * size)
            logger.debug("tape grown by %d cells to %d", size, len(self.memory))


__all__ = ["VirtualMachine", "INITIAL_MEMORY_SIZE", "MAX_ALLOCATION"]
