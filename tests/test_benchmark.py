"""Tests for benchmark.py - wall-clock benchmark runner."""

import os

import pytest

from crabscore.benchmark import (
    BenchmarkOptions,
    BenchmarkRunner,
    metrics_from_samples,
    percentile_index,
)
from crabscore.exceptions import CommandError, MeasurementError
from crabscore.metrics import PerformanceMetrics


class TestPercentileIndex:
    """Test the nearest-rank index rule."""

    @pytest.mark.parametrize(
        "p,n,expected",
        [
            (0.50, 5, 2),
            (0.95, 5, 4),
            (0.99, 5, 4),
            (0.50, 2, 1),  # 0.5 rounds up
            (0.50, 4, 2),  # 1.5 rounds up
            (0.95, 20, 18),
            (0.99, 100, 98),
            (0.0, 10, 0),
            (1.0, 10, 9),
        ],
    )
    def test_index(self, p, n, expected):
        assert percentile_index(p, n) == expected

    @pytest.mark.parametrize("p", [0.5, 0.95, 0.99])
    def test_single_sample(self, p):
        assert percentile_index(p, 1) == 0

    def test_clamped(self):
        assert percentile_index(1.5, 4) == 3
        assert percentile_index(-0.5, 4) == 0

    def test_no_samples(self):
        assert percentile_index(0.5, 0) == 0


class TestMetricsFromSamples:
    """Test aggregation of run durations."""

    def test_empty_gives_zero_metrics(self):
        assert metrics_from_samples([]) == PerformanceMetrics()

    def test_unsorted_samples(self):
        perf = metrics_from_samples([30.0, 10.0, 20.0, 50.0, 40.0])
        assert perf.latency.p50_ms == 30.0
        assert perf.latency.p95_ms == 50.0
        assert perf.latency.p99_ms == 50.0
        assert perf.latency.cold_start_ms == 10.0
        assert perf.latency.ttfb_ms == 0.0
        assert perf.throughput.requests_per_second == pytest.approx(1000.0 / 30.0)

    def test_single_sample(self):
        perf = metrics_from_samples([12.5])
        assert perf.latency.p50_ms == perf.latency.p95_ms == perf.latency.p99_ms == 12.5
        assert perf.latency.cold_start_ms == 12.5
        assert perf.throughput.requests_per_second == 80.0

    def test_zero_duration_has_zero_throughput(self):
        assert metrics_from_samples([0.0]).throughput.requests_per_second == 0.0

    def test_other_groups_default(self):
        perf = metrics_from_samples([5.0, 6.0])
        assert perf.resource_usage == PerformanceMetrics().resource_usage
        assert perf.scalability == PerformanceMetrics().scalability


class TestBenchmarkRunner:
    """Test running real processes."""

    def test_defaults(self):
        runner = BenchmarkRunner()
        assert runner.options == BenchmarkOptions(warmup=1, iterations=5, args=())

    def test_successful_runs(self, tmp_path, make_script):
        tool = make_script(tmp_path / "ok", "exit 0")
        perf = BenchmarkRunner(BenchmarkOptions(warmup=1, iterations=3)).benchmark(tool)
        assert perf.latency.p50_ms > 0.0
        assert perf.latency.cold_start_ms <= perf.latency.p50_ms <= perf.latency.p95_ms
        assert perf.throughput.requests_per_second == pytest.approx(1000.0 / perf.latency.p50_ms)

    def test_failing_runs_excluded(self, tmp_path, make_script):
        tool = make_script(tmp_path / "fails", "exit 3")
        perf = BenchmarkRunner(BenchmarkOptions(warmup=1, iterations=3)).benchmark(tool)
        assert perf == PerformanceMetrics()

    def test_only_successful_runs_counted(self, tmp_path, make_script):
        # Alternates exit status using a counter file: runs 1 and 3 fail
        counter = tmp_path / "count"
        counter.write_text("0")
        tool = make_script(
            tmp_path / "flaky",
            f'n=$(cat "{counter}"); n=$((n + 1)); echo $n > "{counter}"; [ $((n % 2)) -eq 0 ]',
        )
        perf = BenchmarkRunner(BenchmarkOptions(warmup=0, iterations=4)).benchmark(tool)
        assert counter.read_text().strip() == "4"
        assert perf.latency.p50_ms > 0.0

    def test_arguments_passed(self, tmp_path, make_script):
        out = tmp_path / "args.txt"
        tool = make_script(tmp_path / "echo-args", f'echo "$@" > "{out}"')
        options = BenchmarkOptions(warmup=0, iterations=1, args=("--size", "3"))
        BenchmarkRunner(options).benchmark(tool)
        assert out.read_text().strip() == "--size 3"

    def test_zero_iterations(self, tmp_path, make_script):
        tool = make_script(tmp_path / "ok", "exit 0")
        perf = BenchmarkRunner(BenchmarkOptions(warmup=0, iterations=0)).benchmark(tool)
        assert perf == PerformanceMetrics()

    def test_measured_timeout_excluded(self, tmp_path, make_script):
        tool = make_script(tmp_path / "slow", "sleep 5")
        runner = BenchmarkRunner(BenchmarkOptions(warmup=0, iterations=1), timeout=0.2)
        assert runner.benchmark(tool) == PerformanceMetrics()

    def test_warmup_timeout_raises(self, tmp_path, make_script):
        tool = make_script(tmp_path / "slow", "sleep 5")
        runner = BenchmarkRunner(BenchmarkOptions(warmup=1, iterations=1), timeout=0.2)
        with pytest.raises(CommandError, match="failed"):
            runner.benchmark(tool)

    def test_warmup_spawn_failure_raises(self, tmp_path):
        runner = BenchmarkRunner(BenchmarkOptions(warmup=1, iterations=1))
        with pytest.raises(MeasurementError):
            runner.benchmark(tmp_path / "missing")

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_measured_spawn_failure_raises(self, tmp_path):
        path = tmp_path / "not-executable"
        path.write_text("data")
        path.chmod(0o644)
        runner = BenchmarkRunner(BenchmarkOptions(warmup=0, iterations=2))
        with pytest.raises(CommandError) as exc_info:
            runner.benchmark(path)
        assert "measured run" in exc_info.value.reason
