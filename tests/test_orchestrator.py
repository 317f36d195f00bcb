# tests/test_orchestrator.py
import io
import threading

import pytest

from multi_pinger import ConfigurationError, Orchestrator, OrchestratorState, PingerConfig, ReportQueue

from conftest import FakePopen


def test_end_to_end_with_launch_failure(fast_config):
    popen = FakePopen(failures={"a.example": FileNotFoundError("ping not found")})
    stream = io.StringIO()
    orchestrator = Orchestrator(fast_config, popen=popen, stream=stream)

    summary = orchestrator.run(["a.example", "b.example", "c.example"])

    lines = stream.getvalue().splitlines()
    assert len(lines) == 4
    assert not any(line.startswith("a.example") for line in lines)
    assert sorted(lines) == sorted([
        "b.example: sent: 2 received: 2 loss: 0.0%",
        "b.example: min: 11.900 avg: 12.122 max: 12.345 stdev: 0.222 (ms)",
        "c.example: sent: 2 received: 2 loss: 0.0%",
        "c.example: min: 11.900 avg: 12.122 max: 12.345 stdev: 0.222 (ms)",
    ])

    assert summary.exit_code == 0
    assert summary.failed_launches == ["a.example"]
    assert summary.submitted == 4
    assert orchestrator.state is OrchestratorState.TERMINATED
    assert orchestrator.queue.closed


def test_entries_of_one_target_keep_order(fast_config, fake_popen):
    stream = io.StringIO()
    Orchestrator(fast_config, popen=fake_popen, stream=stream).run(["x"])

    assert stream.getvalue().splitlines() == [
        "x: sent: 2 received: 2 loss: 0.0%",
        "x: min: 11.900 avg: 12.122 max: 12.345 stdev: 0.222 (ms)",
    ]


def test_commands_use_config(fast_config, fake_popen):
    fast_config.repeat_count = 4
    fast_config.timeout_ms = 2000
    Orchestrator(fast_config, popen=fake_popen, stream=io.StringIO()).run(["h1", "h2"])

    assert sorted(fake_popen.commands) == [
        ["ping", "-c", "4", "-W", "2", "h1"],
        ["ping", "-c", "4", "-W", "2", "h2"],
    ]


def test_empty_targets_rejected(fast_config):
    orchestrator = Orchestrator(fast_config, popen=FakePopen())
    with pytest.raises(ConfigurationError):
        orchestrator.run([])
    assert orchestrator.state is OrchestratorState.IDLE


def test_cannot_run_twice(fast_config, fake_popen):
    orchestrator = Orchestrator(fast_config, popen=fake_popen, stream=io.StringIO())
    orchestrator.run(["x"])
    with pytest.raises(RuntimeError):
        orchestrator.run(["x"])


def test_progress_callback(fast_config, fake_popen):
    calls = []
    orchestrator = Orchestrator(fast_config, popen=fake_popen, stream=io.StringIO(),
                                on_progress=lambda done, total: calls.append((done, total)))
    orchestrator.run(["a", "b", "c"])

    assert sorted(calls) == [(1, 3), (2, 3), (3, 3)]


def test_every_accepted_entry_is_printed(fast_config):
    lines = ["1 packets transmitted, 1 received\n"] * 10
    popen = FakePopen(outputs={"flood": lines})
    queue = ReportQueue(capacity=3)
    stream = io.StringIO()

    orchestrator = Orchestrator(fast_config, queue=queue, popen=popen, stream=stream)
    summary = orchestrator.run(["flood"])

    assert summary.exit_code == 0
    assert summary.submitted + summary.dropped == 10
    assert len(stream.getvalue().splitlines()) == summary.submitted


class FailingOrchestrator(Orchestrator):
    """Второй поток не создается"""

    def _start_worker(self, worker, total):
        if worker.target == "second":
            raise RuntimeError("can't start new thread")
        return super()._start_worker(worker, total)


def test_thread_start_failure_is_fatal(fast_config, fake_popen):
    orchestrator = FailingOrchestrator(fast_config, popen=fake_popen, stream=io.StringIO())

    summary = orchestrator.run(["first", "second", "third"])

    assert summary.exit_code == 1
    assert "second" in summary.error
    assert orchestrator.state is OrchestratorState.TERMINATED
    assert ["ping", "-c", "10", "-W", "1", "third"] not in fake_popen.commands


def test_cooldown_and_grace_delays(monkeypatch, fake_popen):
    config = PingerConfig(cooldown_seconds=0.25, grace_seconds=0.75, poll_interval=0.05)
    orchestrator = Orchestrator(config, popen=fake_popen, stream=io.StringIO())
    sleeps = []
    lock = threading.Lock()

    def record_sleep(seconds):
        with lock:
            sleeps.append((seconds, orchestrator.state))

    monkeypatch.setattr("multi_pinger.orchestrator.time.sleep", record_sleep)

    orchestrator.run(["a", "b"])

    assert sleeps.count((0.25, OrchestratorState.RUNNING)) == 2
    assert sleeps[-1] == (0.75, OrchestratorState.DRAINING)
    assert len(sleeps) == 3
