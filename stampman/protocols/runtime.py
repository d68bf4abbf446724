"""Clock and code generator protocols."""

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time. Injected so promotion windows are testable."""

    def now(self) -> datetime:
        ...


@runtime_checkable
class CodeGenerator(Protocol):
    """Produces coupon codes. Must be safe under concurrent callers."""

    def new_code(self, prefix: str) -> str:
        ...
