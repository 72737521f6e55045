import pytest
from loguru import logger as _logger

from helpers import unified_logger
from helpers.unified_logger import configure_logging, get_client_logger, get_logger
from kraken_client import KrakenClient

from conftest import TEST_API_SECRET, RecordingTransport


@pytest.fixture
def captured():
    messages = []
    handler_id = _logger.add(
        lambda message: messages.append(message),
        level="DEBUG",
        format="{extra[component_id]} {message}",
        filter=lambda record: "component_id" in record["extra"],
    )
    yield messages
    _logger.remove(handler_id)


@pytest.fixture
def host_sink():
    """A sink the host application installed before using the client."""
    messages = []
    handler_id = _logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    _logger.remove(handler_id)


@pytest.fixture
def fresh_sinks(monkeypatch):
    """Start with no library sinks installed and remove any a test adds."""
    installed = {}
    monkeypatch.setattr(unified_logger, "_installed_sinks", installed)
    yield installed
    for handler_id in installed.values():
        _logger.remove(handler_id)


def test_component_id_includes_context():
    logger = get_logger("client", "kraken", {"key": "abcd...wxyz"})

    assert logger.component_id == "CLIENT:KRAKEN:key=abcd...wxyz"


def test_with_context_extends_existing_context():
    logger = get_client_logger("kraken").with_context(key="abcd...wxyz")

    assert logger.component_id == "CLIENT:KRAKEN:key=abcd...wxyz"


def test_client_logger_level_override():
    assert get_client_logger("kraken", log_level="debug").log_level == "DEBUG"


def test_messages_are_bound_to_component(captured):
    get_client_logger("kraken").info("hello")

    assert any(message.startswith("CLIENT:KRAKEN hello") for message in captured)


def test_host_sink_keeps_receiving_after_client_construction(host_sink, http_clients):
    _logger.info("before")

    client = KrakenClient("LONGAPIKEY1234567890", TEST_API_SECRET)
    http_clients.append(client.get_client())
    _logger.info("after")

    assert "before" in host_sink
    assert "after" in host_sink


def test_console_opt_in_keeps_host_sink(host_sink, fresh_sinks, monkeypatch):
    monkeypatch.setenv("KRAKEN_LOG_CONSOLE", "1")

    get_client_logger("kraken")
    _logger.info("after")

    assert set(fresh_sinks) == {"console"}
    assert "after" in host_sink


def test_no_library_sinks_without_opt_in(fresh_sinks, monkeypatch):
    monkeypatch.delenv("KRAKEN_LOG_CONSOLE", raising=False)
    monkeypatch.delenv("KRAKEN_LOG_DIR", raising=False)

    get_client_logger("kraken")

    assert fresh_sinks == {}


def test_configure_logging_is_idempotent(host_sink, fresh_sinks):
    first = configure_logging(level="WARNING")
    second = configure_logging(level="WARNING")
    _logger.info("still delivered")

    assert first == second
    assert set(first) == {"console"}
    assert "still delivered" in host_sink


def test_configure_logging_file_sink(fresh_sinks, tmp_path):
    handler_ids = configure_logging(console=False, log_dir=str(tmp_path / "logs"))

    assert set(handler_ids) == {"file"}
    assert (tmp_path / "logs").is_dir()


@pytest.mark.asyncio
async def test_private_calls_never_log_secret_or_signature(captured):
    api_key = "LONGAPIKEY1234567890"
    transport = RecordingTransport()

    async with KrakenClient(api_key, TEST_API_SECRET, transport_options={"transport": transport}) as client:
        await client.get_balance()

    signature = transport.requests[0].headers["API-Sign"]
    output = "".join(captured)
    assert "Balance" in output
    assert api_key not in output
    assert TEST_API_SECRET not in output
    assert signature not in output
