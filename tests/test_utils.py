"""Tests for Pincel utility modules."""

import logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_prefix_added(self) -> None:
        from pincel.utils.logger import get_logger

        assert get_logger("mymodule").name == "pincel.mymodule"

    def test_package_names_unchanged(self) -> None:
        from pincel.utils.logger import get_logger

        assert get_logger("pincel.lexer.core").name == "pincel.lexer.core"
        assert get_logger("pincel").name == "pincel"

    def test_returns_stdlib_logger(self) -> None:
        from pincel.utils.logger import get_logger

        logger = get_logger("x")
        assert isinstance(logger, logging.Logger)
        assert logger is logging.getLogger("pincel.x")

    def test_library_adds_no_handlers(self) -> None:
        import pincel  # noqa: F401

        assert logging.getLogger("pincel").handlers == []
