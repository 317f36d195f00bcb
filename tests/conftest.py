import io
import logging

import pytest

from multi_pinger import PingerConfig


LINUX_OUTPUT = [
    "PING {target} ({target}) 56(84) bytes of data.\n",
    "64 bytes from {target}: icmp_seq=1 ttl=55 time=12.345 ms\n",
    "64 bytes from {target}: icmp_seq=2 ttl=55 time=11.900 ms\n",
    "\n",
    "--- {target} ping statistics ---\n",
    "2 packets transmitted, 2 received, 0% packet loss, time 1001ms\n",
    "rtt min/avg/max/mdev = 11.900/12.122/12.345/0.222 ms\n",
]


class FakeProcess:
    """Заменитель subprocess.Popen с заранее заданным выводом"""

    def __init__(self, lines, returncode=0, stderr=""):
        self.stdout = io.StringIO("".join(lines))
        self.stderr = io.StringIO(stderr)
        self.returncode = returncode

    def wait(self, timeout=None):
        return self.returncode

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.stdout.close()
        self.stderr.close()
        return False


class FakePopen:
    """
    Фабрика процессов: цель -> строки вывода, текст stderr или исключение

    Цель берется из последнего аргумента команды.
    """

    def __init__(self, outputs=None, failures=None, returncode=0, stderr=None):
        self.outputs = outputs or {}
        self.stderr = stderr or {}
        self.failures = failures or {}
        self.returncode = returncode
        self.commands = []

    def __call__(self, cmd, **kwargs):
        self.commands.append(list(cmd))
        target = cmd[-1]
        if target in self.failures:
            raise self.failures[target]
        lines = self.outputs.get(target)
        if lines is None:
            lines = [line.format(target=target) for line in LINUX_OUTPUT]
        return FakeProcess(lines, self.returncode, self.stderr.get(target, ""))


@pytest.fixture
def fast_config():
    return PingerConfig(cooldown_seconds=0, grace_seconds=0, poll_interval=0.05)


@pytest.fixture
def fake_popen():
    return FakePopen()


@pytest.fixture(autouse=True)
def restore_logging():
    """setup_logging заменяет обработчики корневого логгера"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
