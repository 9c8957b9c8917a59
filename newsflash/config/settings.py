"""
Newsflash Config — Bus Settings
=================================
Per-bus knobs. Each EventBus owns one immutable BusConfig.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


DEFAULT_SEPARATOR = ","


@dataclass(frozen=True)
class BusConfig:
    """
    Settings for a single EventBus instance.

    separator:              joins sorted member names into a joint key
    isolate_handler_errors: log a failing handler and keep dispatching,
                            instead of letting the exception escape emit()
    """

    separator: str = DEFAULT_SEPARATOR
    isolate_handler_errors: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.separator, str) or not self.separator:
            raise ValueError(
                f"Separator must be a non-empty string, got {self.separator!r}."
            )
        if not isinstance(self.isolate_handler_errors, bool):
            raise ValueError(
                f"isolate_handler_errors must be a bool, "
                f"got {type(self.isolate_handler_errors).__name__}."
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "BusConfig":
        """Build a config from a plain dict. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in mapping.items() if k in known})
