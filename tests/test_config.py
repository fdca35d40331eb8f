"""Tests for ContextVar-based lexer configuration.

Validates defaults, immutability, the context manager, and how lexers
pick up configuration (explicit argument wins over the context value).
"""

from threading import Thread

import pytest

from pincel import (
    LexConfig,
    StallPolicy,
    TokenKind,
    get_lex_config,
    lex_config_context,
    reset_lex_config,
    set_lex_config,
    tokenize,
)
from pincel.errors import LexerStallError


class TestLexConfigDataclass:
    def test_default_values(self) -> None:
        config = LexConfig()
        assert config.stall_policy is StallPolicy.STRICT
        assert config.max_delegation_depth == 32
        assert config.trace is False
        assert config.lenient is False

    def test_immutability(self) -> None:
        config = LexConfig()
        with pytest.raises(AttributeError):
            config.trace = True  # type: ignore[misc]

    def test_lenient_property(self) -> None:
        assert LexConfig(stall_policy=StallPolicy.LENIENT).lenient is True


class TestFromDict:
    def test_known_keys(self) -> None:
        config = LexConfig.from_dict({"trace": True, "max_delegation_depth": 4})
        assert config.trace is True
        assert config.max_delegation_depth == 4

    def test_unknown_keys_ignored(self) -> None:
        assert LexConfig.from_dict({"colour": "red"}) == LexConfig()

    def test_policy_by_name(self) -> None:
        assert LexConfig.from_dict({"stall_policy": "LENIENT"}).stall_policy is StallPolicy.LENIENT

    def test_policy_member(self) -> None:
        config = LexConfig.from_dict({"stall_policy": StallPolicy.LENIENT})
        assert config.stall_policy is StallPolicy.LENIENT

    def test_bad_policy_name(self) -> None:
        with pytest.raises(ValueError):
            LexConfig.from_dict({"stall_policy": "forgiving"})


class TestContextVarFunctions:
    def test_default(self) -> None:
        reset_lex_config()
        assert get_lex_config() == LexConfig()

    def test_set_and_reset(self) -> None:
        set_lex_config(LexConfig(trace=True))
        try:
            assert get_lex_config().trace is True
        finally:
            reset_lex_config()
        assert get_lex_config().trace is False

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with lex_config_context(LexConfig(trace=True)):
                raise RuntimeError("boom")
        assert get_lex_config().trace is False

    def test_thread_isolation(self) -> None:
        results: list[bool] = []

        def worker() -> None:
            results.append(get_lex_config().trace)

        with lex_config_context(LexConfig(trace=True)):
            thread = Thread(target=worker)
            thread.start()
            thread.join()
        assert results == [False]


class TestLexerPicksUpConfig:
    def test_context_policy_applies(self) -> None:
        with lex_config_context(LexConfig(stall_policy=StallPolicy.LENIENT)):
            tokens = list(tokenize("#", "java"))
        assert [(t.kind, t.value) for t in tokens] == [(TokenKind.ERROR, "#")]

    def test_explicit_config_wins(self) -> None:
        with lex_config_context(LexConfig(stall_policy=StallPolicy.LENIENT)):
            with pytest.raises(LexerStallError):
                list(tokenize("#", "java", config=LexConfig()))
