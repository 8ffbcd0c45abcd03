from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Tuple

from .vm_errors import InvalidCommand


class Opcode(Enum):
    CHANGE_VALUE = "change_value"        # CHANGE_VALUE delta
    CHANGE_POINTER = "change_pointer"    # CHANGE_POINTER delta
    GET = "get"                          # GET count
    PUT = "put"                          # PUT count
    BRANCH_IF_ZERO = "branch_if_zero"    # BRANCH_IF_ZERO offset (relative)
    BRANCH_NOT_ZERO = "branch_not_zero"  # BRANCH_NOT_ZERO offset (relative)


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    argument: int

    def __str__(self):
        return f"{self.opcode.value} {self.argument}"


def _decode_opcode(raw: Any) -> Opcode:
    if isinstance(raw, Opcode):
        return raw
    if not isinstance(raw, str):
        raise TypeError(f"opcode must be a string or Opcode, not {type(raw).__name__}")
    return Opcode(raw.lstrip(":").lower())


def decode_instruction(raw: Any) -> Instruction:
    """Turn an ``(opcode, argument)`` pair into an :class:`Instruction`.

    Raises :class:`InvalidCommand` for anything that is not one of the six
    primitives with an integer argument.
    """
    try:
        if isinstance(raw, Instruction):
            name, argument = raw.opcode, raw.argument
        else:
            name, argument = raw
        opcode = _decode_opcode(name)
        if isinstance(argument, bool) or not isinstance(argument, int):
            raise TypeError(f"argument must be an int, not {type(argument).__name__}")
    except (TypeError, ValueError) as exc:
        raise InvalidCommand(f"Invalid command {raw!r}: {exc}") from exc
    return Instruction(opcode, argument)


def decode_program(raw_items: Iterable[Any]) -> Tuple[Instruction, ...]:
    instructions = []
    for index, raw in enumerate(raw_items):
        try:
            instructions.append(decode_instruction(raw))
        except InvalidCommand as exc:
            raise InvalidCommand(f"at index {index}: {exc}", pc=index) from exc.__cause__
    return tuple(instructions)


__all__ = ["Opcode", "Instruction", "decode_instruction", "decode_program"]
