import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tapevm import (
    ConcurrentExecution,
    ErrorKind,
    Instruction,
    InvalidCommand,
    MemoryOutOfBounds,
    Opcode,
    decode_instruction,
    decode_program,
)


def test_opcode_set_is_closed():
    assert {op.value for op in Opcode} == {
        "change_value",
        "change_pointer",
        "get",
        "put",
        "branch_if_zero",
        "branch_not_zero",
    }


@pytest.mark.parametrize(
    "raw",
    [("put", 3), (":put", 3), ("PUT", 3), (Opcode.PUT, 3), [Opcode.PUT, 3], Instruction(Opcode.PUT, 3)],
)
def test_decode_accepts_supported_forms(raw):
    assert decode_instruction(raw) == Instruction(Opcode.PUT, 3)


def test_instruction_str():
    assert str(Instruction(Opcode.BRANCH_NOT_ZERO, -4)) == "branch_not_zero -4"


@pytest.mark.parametrize(
    "raw",
    [
        ("jump", 1),
        ("put",),
        ("put", 1, 2),
        ("put", "1"),
        ("put", True),
        (1, 1),
        None,
        Instruction("jump", 1),
        Instruction(Opcode.CHANGE_VALUE, "x"),
        Instruction(Opcode.PUT, False),
    ],
)
def test_decode_rejects_malformed_items(raw):
    with pytest.raises(InvalidCommand) as info:
        decode_instruction(raw)
    assert info.value.__cause__ is not None


def test_decode_program_reports_offending_index():
    with pytest.raises(InvalidCommand) as info:
        decode_program([("get", 1), ("frobnicate", 2)])
    assert info.value.pc == 1
    assert "at index 1" in str(info.value)
    assert isinstance(info.value.__cause__, ValueError)


def test_decode_program_returns_instructions():
    program = decode_program([("change_value", 5), ("branch_if_zero", 2)])
    assert program == (
        Instruction(Opcode.CHANGE_VALUE, 5),
        Instruction(Opcode.BRANCH_IF_ZERO, 2),
    )


def test_error_kinds():
    assert MemoryOutOfBounds.kind is ErrorKind.MEMORY_OUT_OF_BOUNDS
    assert InvalidCommand.kind is ErrorKind.INVALID_COMMAND
    assert ConcurrentExecution.kind is ErrorKind.CONCURRENT_EXECUTION
    assert str(ConcurrentExecution()) == "ConcurrentExecution"
