"""Shared pytest fixtures for adapter, CLI and module-entry tests.

Contents:
- CLI helpers (runner, ANSI stripping, traceback state isolation)
- Config injection without filesystem I/O
- A fake SparkPost HTTP server that records every request it receives
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, fields
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import orjson
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from sparkmail.adapters.memory.sparkpost import TransmissionSpy
    from sparkmail.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(type(lib_cli_exit_tools.config)))
SUPPORT_DIR = Path(__file__).parent / "support"


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


# ======================== Fake SparkPost server ========================


@dataclass
class RecordedRequest:
    """One request received by the fake SparkPost server.

    Header names are lower-cased so lookups match HTTP semantics.
    """

    method: str
    path: str
    headers: dict[str, str]
    body: bytes

    @property
    def params(self) -> Any:
        """The JSON body, decoded."""
        return orjson.loads(self.body)


@dataclass
class FakeSparkPost:
    """Handle on a running fake server: where it listens and what it saw."""

    base_uri: str
    requests: list[RecordedRequest] = field(default_factory=list)

    @property
    def last_request(self) -> RecordedRequest:
        assert self.requests, "fake SparkPost received no requests"
        return self.requests[-1]


def _make_handler(recorder: FakeSparkPost) -> type[BaseHTTPRequestHandler]:
    class _TransmissionsHandler(BaseHTTPRequestHandler):
        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002 - required signature
            pass

        def do_POST(self) -> None:  # noqa: N802 - required by BaseHTTPRequestHandler
            content_length = int(self.headers.get("Content-Length", "0"))
            body = self.rfile.read(content_length)
            recorder.requests.append(
                RecordedRequest(
                    method="POST",
                    path=self.path,
                    headers={k.lower(): v for k, v in self.headers.items()},
                    body=body,
                )
            )
            if self.path != "/api/v1/transmissions":
                self._reply(404, b"Not Found")
                return
            try:
                sender = orjson.loads(body).get("content", {}).get("from", {}).get("email")
            except (orjson.JSONDecodeError, AttributeError):
                self._reply(400, b"Bad Request")
                return
            if sender == "INVALID_EMAIL":
                self._reply(500, b"Error!!")
            else:
                self._reply(200, b"SENT")

        def _reply(self, status: int, payload: bytes) -> None:
            self.send_response(status)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

    return _TransmissionsHandler


_PROXY_VARIABLES = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy")


@pytest.fixture(autouse=True)
def no_http_proxy(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep httpx from routing loopback requests through a proxy from the environment."""
    for name in _PROXY_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_sparkpost() -> Iterator[FakeSparkPost]:
    """Run a fake SparkPost transmissions endpoint on a free local port.

    ``POST /api/v1/transmissions`` answers 500 ``Error!!`` when
    ``content.from.email`` is ``INVALID_EMAIL`` and 200 ``SENT`` otherwise.

    Example:
        def test_send(fake_sparkpost: FakeSparkPost) -> None:
            deliver(email, SparkPostConfig(api_key="k", base_uri=fake_sparkpost.base_uri))
            assert fake_sparkpost.last_request.path == "/api/v1/transmissions"
    """
    recorder = FakeSparkPost(base_uri="")
    server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(recorder))
    recorder.base_uri = f"http://127.0.0.1:{server.server_address[1]}/"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield recorder
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def attachment_path() -> Path:
    """Path to a small text attachment whose base64 form is ``VGVzdCBBdHRhY2htZW50Cg==``."""
    return SUPPORT_DIR / "attachment.txt"


# ======================== CLI fixtures ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g. JSON parsing) so log lines on
    stderr do not contaminate it.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from sparkmail.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test.

    Only clears before, not after: a monkeypatched get_config loses
    ``cache_clear``.
    """
    from sparkmail.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts, without file I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory producing production services with an injected Config.

    Only the I/O boundary (``get_config``) is replaced.

    Example:
        def test_config_display(cli_runner, config_factory, inject_config) -> None:
            factory = inject_config(config_factory({"section": {"key": "value"}}))
            result = cli_runner.invoke(cli, ["config"], obj=factory)
            assert "key" in result.output
    """
    from sparkmail.composition import AppServices, build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            deliver_email=prod.deliver_email,
            load_sparkpost_config_from_dict=prod.load_sparkpost_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Like ``inject_config`` but records every profile passed to get_config."""
    from sparkmail.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            display_config=prod.display_config,
            deliver_email=prod.deliver_email,
            load_sparkpost_config_from_dict=prod.load_sparkpost_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _inject


@dataclass
class SendCliContext:
    """Services factory plus the spy that records what it delivered."""

    factory: Callable[[], Any]
    spy: TransmissionSpy


@pytest.fixture
def send_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], SendCliContext]:
    """Create a send-email test context from a ``[sparkpost]`` section dict.

    Example:
        def test_send(cli_runner, send_cli_context) -> None:
            ctx = send_cli_context({"api_key": "k", "from_address": "a@b.com"})
            result = cli_runner.invoke(cli, ["send-email", "--to", "c@d.com", "--subject", "Hi"], obj=ctx.factory)
            assert ctx.spy.transmissions[0].payload["content"]["subject"] == "Hi"
    """
    from sparkmail.adapters.memory import TransmissionSpy as TransmissionSpyImpl
    from sparkmail.composition import AppServices, build_production, build_testing

    def _create(sparkpost_data: dict[str, Any]) -> SendCliContext:
        spy = TransmissionSpyImpl()
        config = Config({"sparkpost": sparkpost_data}, {})
        testing = build_testing(spy=spy)

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=build_production().display_config,
            deliver_email=testing.deliver_email,
            load_sparkpost_config_from_dict=testing.load_sparkpost_config_from_dict,
            init_logging=testing.init_logging,
        )
        return SendCliContext(factory=lambda: test_services, spy=spy)

    return _create
