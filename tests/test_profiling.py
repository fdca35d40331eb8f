"""Tests for pincel.profiling — scan profiling API."""

from pincel import LexConfig, StallPolicy, tokenize
from pincel.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan


class TestGetScanAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_scan_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_scan():
            pass
        assert get_scan_accumulator() is None


class TestProfiledScan:
    def test_yields_accumulator(self) -> None:
        with profiled_scan() as acc:
            assert isinstance(acc, ScanAccumulator)
            assert get_scan_accumulator() is acc

    def test_records_run(self) -> None:
        with profiled_scan() as acc:
            list(tokenize("class Foo {", "java"))
        assert acc.runs == 1
        assert acc.source_length == len("class Foo {")
        assert acc.token_count == 5
        assert acc.delegations == 0

    def test_nested_runs_count_as_delegations(self) -> None:
        with profiled_scan() as acc:
            list(tokenize("public static void run() {", "java"))
        assert acc.runs == 1
        assert acc.delegations == 1
        assert acc.token_count == 11

    def test_records_stalls(self) -> None:
        config = LexConfig(stall_policy=StallPolicy.LENIENT)
        with profiled_scan() as acc:
            list(tokenize("a # b ~", "java", config=config))
            list(tokenize("`", "java", config=config))
        assert acc.stalls == 2
        assert acc.runs == 2

    def test_unfinished_run_is_not_recorded(self) -> None:
        with profiled_scan() as acc:
            tokens = tokenize("int x;", "java")
            next(tokens)
            tokens.close()
        assert acc.runs == 0


class TestSummary:
    def test_summary_keys(self) -> None:
        with profiled_scan() as acc:
            list(tokenize("int x;", "java"))
        summary = acc.summary()
        assert set(summary) == {
            "total_ms",
            "runs",
            "source_length",
            "token_count",
            "delegations",
            "stalls",
        }
        assert summary["token_count"] == 4
        assert summary["total_ms"] >= 0
