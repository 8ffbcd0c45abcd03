from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class VMStateSnapshot:
    """Point-in-time copy of the tape VM registers and memory."""

    executing: bool
    program_counter: int
    cursor: int
    memory: Tuple[int, ...]
    current_value: Optional[int]

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["VMStateSnapshot"]
