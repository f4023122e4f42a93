"""Shared test fixtures for the transcode job.

External tools are replaced by small generated shell scripts so tests need
neither ffmpeg nor ffprobe installed.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_ffprobe_text(name: str) -> str:
    """Load an ffprobe JSON fixture as raw text.

    Args:
        name: Name of the fixture file (without .json extension).
    """
    return (FIXTURES_DIR / "ffprobe" / f"{name}.json").read_text()


@pytest.fixture
def ffprobe_text():
    """Return a loader for raw ffprobe fixture text by name."""
    return load_ffprobe_text


def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(0o755)
    return path


@dataclass
class FakeFFmpeg:
    """Handle on a generated ffmpeg stand-in."""

    path: Path
    payload: bytes
    args_log: Path

    @property
    def calls(self) -> list[list[str]]:
        """Argument vectors of every invocation, in order."""
        if not self.args_log.exists():
            return []
        calls: list[list[str]] = []
        for block in self.args_log.read_text().split("--END--\n"):
            if block:
                calls.append(block.splitlines())
        return calls


@pytest.fixture
def tools_dir(tmp_path: Path) -> Path:
    path = tmp_path / "tools"
    path.mkdir()
    return path


@pytest.fixture
def work_temp_dir(tmp_path: Path) -> Path:
    """Temp directory handed to the executor, checked for leftovers."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def make_ffprobe(tools_dir: Path):
    """Factory creating an ffprobe stand-in that prints a fixture."""

    def factory(
        fixture: str | None = None, text: str = "", exit_code: int = 0
    ) -> Path:
        output = tools_dir / "ffprobe-output.json"
        output.write_text(load_ffprobe_text(fixture) if fixture else text)
        return _write_script(
            tools_dir / "ffprobe",
            f"cat {shlex.quote(str(output))}\nexit {exit_code}\n",
        )

    return factory


@pytest.fixture
def make_ffmpeg(tools_dir: Path):
    """Factory creating an ffmpeg stand-in.

    The script records its arguments, then writes the payload to its last
    argument, or to stdout when the last argument is ``pipe:1``.
    """

    def factory(
        payload: bytes = b"FAKE-MP4-PAYLOAD" * 1000, exit_code: int = 0
    ) -> FakeFFmpeg:
        payload_file = tools_dir / "ffmpeg-payload.bin"
        payload_file.write_bytes(payload)
        args_log = tools_dir / "ffmpeg-args.log"
        q_payload = shlex.quote(str(payload_file))
        q_log = shlex.quote(str(args_log))
        body = (
            f"for a in \"$@\"; do printf '%s\\n' \"$a\" >> {q_log}; done\n"
            f"echo '--END--' >> {q_log}\n"
            "for last; do :; done\n"
            f"if [ {exit_code} -ne 0 ]; then exit {exit_code}; fi\n"
            'if [ "$last" = "pipe:1" ]; then\n'
            f"  exec cat {q_payload}\n"
            "else\n"
            f'  exec cat {q_payload} > "$last"\n'
            "fi\n"
        )
        path = _write_script(tools_dir / "ffmpeg", body)
        return FakeFFmpeg(path=path, payload=payload, args_log=args_log)

    return factory


@asynccontextmanager
async def _silent_peer() -> AsyncIterator[str]:
    connections: list[asyncio.StreamWriter] = []

    async def accept(
        reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        connections.append(writer)

    server = await asyncio.start_server(accept, "127.0.0.1", 0)
    host, port = server.sockets[0].getsockname()[:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        for writer in connections:
            writer.close()
        server.close()
        await server.wait_closed()


@pytest.fixture
def silent_peer():
    """Return a context manager running a TCP peer that accepts and never replies.

    Example:
        async with silent_peer() as base_url:
            ...
    """
    return _silent_peer


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler changes made by configure_logging() in a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
