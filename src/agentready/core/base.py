"""Base classes for configuration, runtime state and records.

- Closeable Protocol for resource cleanup
- BaseCloseable for automatic cleanup cascade
- BaseConfig for configuration sections
- BaseState for per-run workflow state
- BaseRecord for immutable scan records

Kept apart from config.py and log.py so both can import them
without a cycle.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

# ============================================================
# CLOSEABLE PROTOCOL AND BASE CLASS
# ============================================================

@runtime_checkable
class Closeable(Protocol):
    """Protocol for objects that support close()."""

    def close(self) -> None:
        """Release resources."""
        ...


class BaseCloseable(BaseModel):
    """Base class that closes its Closeable children.

    Any model inheriting from BaseCloseable is a context manager,
    and close() walks its fields calling close() on every child
    that has one. A failing child does not stop the others:

    State.__exit__() → Config.close() → Logger.close() → Sink.close()
    """

    def close(self):
        """Close all closeable child objects.

        Errors are written to stderr and the walk continues.
        """
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None:
                continue

            if isinstance(child, Closeable):
                try:
                    child.close()
                except Exception as e:
                    msg = f"Warning: Error closing {field_name}: {e}"
                    print(msg, file=sys.stderr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        self.close()
        return False


# ============================================================
# BASE CLASSES (semantic markers for readers)
# ============================================================

class BaseConfig(BaseCloseable):
    """Base class for configuration sections (YAML/env/CLI)."""
    pass


class BaseState(BaseCloseable):
    """Base class for runtime state mutated by workflow nodes."""
    pass


class BaseRecord(BaseModel):
    """Base class for scan records.

    Records are created once per scan and never mutated, so two
    runs over the same input compare and serialize identically.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)


__all__ = [
    "Closeable",
    "BaseCloseable",
    "BaseConfig",
    "BaseState",
    "BaseRecord",
]
