"""ContextVar-based lexer configuration for Pincel.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Lexer created without an explicit config reads the context value once,
and delegated child lexers inherit their parent's resolved config.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from pincel.config import LexConfig, StallPolicy, lex_config_context

    with lex_config_context(LexConfig(stall_policy=StallPolicy.LENIENT)):
        tokens = list(tokenize(source, "java"))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Any


class StallPolicy(Enum):
    """What the engine does when no rule matches at the cursor.

    - STRICT: raise LexerStallError with the offending offset
    - LENIENT: emit one ERROR token for a single character and resume

    """

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True, slots=True)
class LexConfig:
    """Immutable lexer configuration.

    Attributes:
        stall_policy: Behavior when no rule matches (see StallPolicy)
        max_delegation_depth: Deepest allowed chain of delegated runs
        trace: Log every committed step at DEBUG level (no behavioral effect)

    """

    stall_policy: StallPolicy = StallPolicy.STRICT
    max_delegation_depth: int = 32
    trace: bool = False

    @property
    def lenient(self) -> bool:
        return self.stall_policy is StallPolicy.LENIENT

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "LexConfig":
        """Create LexConfig from dictionary.

        Unknown keys are silently ignored. ``stall_policy`` may be given
        as a StallPolicy member or by value ("strict", "lenient").

        Example:
            >>> config = LexConfig.from_dict({"stall_policy": "lenient", "x": 1})
            >>> config.stall_policy
            <StallPolicy.LENIENT: 'lenient'>

        Raises:
            ValueError: If stall_policy names no known policy
        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        policy = filtered.get("stall_policy")
        if isinstance(policy, str):
            filtered["stall_policy"] = StallPolicy(policy.lower())
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexConfig = LexConfig()

_lex_config: ContextVar[LexConfig] = ContextVar(
    "lex_config",
    default=_DEFAULT_CONFIG,
)


def get_lex_config() -> LexConfig:
    """Get current lexer configuration (thread-local)."""
    return _lex_config.get()


def set_lex_config(config: LexConfig) -> None:
    """Set lexer configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _lex_config.set(config)


def reset_lex_config() -> None:
    """Reset to the module-level default configuration."""
    _lex_config.set(_DEFAULT_CONFIG)


@contextmanager
def lex_config_context(config: LexConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with lex_config_context(LexConfig(trace=True)):
        ...     get_lex_config().trace
        True

    """
    previous = _lex_config.get()
    _lex_config.set(config)
    try:
        yield
    finally:
        _lex_config.set(previous)


__all__ = [
    "LexConfig",
    "StallPolicy",
    "get_lex_config",
    "lex_config_context",
    "reset_lex_config",
    "set_lex_config",
]
