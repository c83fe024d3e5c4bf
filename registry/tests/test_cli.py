"""
Tests for the registry CLI against a local event log (no node access).
"""

import json
import os

import pytest
from typer.testing import CliRunner

from cli.main import app
from registry.core.errors import StoreError
from registry.log import FileEventLog
from registry.store import FileRecipientStore

from .factories import OTHER_REGISTRY, REGISTRY, SENDER, added, payout, removed, rid

runner = CliRunner()

HISTORY = [
    added(1, timestamp=10, block=1),
    added(2, timestamp=20, block=2),
    added(3, timestamp=30, block=3, meta="{bad"),
    removed(2, timestamp=75, block=4),
    added(4, timestamp=150, block=5),
]


@pytest.fixture
def event_log(tmp_path):
    path = str(tmp_path / "events.log")
    FileEventLog(path).extend(HISTORY)
    return path


def _invoke(*args):
    return runner.invoke(app, ["--log-level", "ERROR", *args])


def test_list_json_window(event_log):
    result = _invoke("list", REGISTRY, "--events", event_log, "--start", "50", "--end", "100", "--all", "--json")
    assert result.exit_code == 0, result.output

    data = json.loads(result.stdout)
    flags = {r["id"]: (r["is_hidden"], r["is_locked"]) for r in data["recipients"]}
    assert flags == {
        rid(1): (False, False),
        rid(2): (False, True),
        rid(4): (True, False),
    }


def test_list_hides_hidden_by_default(event_log):
    result = _invoke("list", REGISTRY, "--events", event_log, "--start", "50", "--end", "100", "--json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [r["id"] for r in data["recipients"]] == [rid(1), rid(2)]
    assert data["count"] == 2


def test_list_missing_event_log(tmp_path):
    result = _invoke("list", REGISTRY, "--events", str(tmp_path / "missing.log"), "--json")
    assert result.exit_code == 2
    assert not os.path.exists(tmp_path / "missing.log")


def test_get_found_and_locked(event_log):
    result = _invoke("get", REGISTRY, rid(2), "--events", event_log, "--json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["recipient"]["id"] == rid(2)
    assert data["recipient"]["is_locked"] is True


def test_get_not_found(event_log):
    result = _invoke("get", REGISTRY, "0x1234", "--events", event_log, "--json")
    assert result.exit_code == 1
    assert json.loads(result.stdout) == {"recipient": None}


def test_index_offline_then_show(event_log, tmp_path):
    store_path = str(tmp_path / "recipients.json")

    result = _invoke(
        "index", REGISTRY, "--offline", "--log", event_log, "--store", store_path,
        "--strategy", "flag", "--json",
    )
    assert result.exit_code == 0, result.output
    summary = json.loads(result.stdout)
    assert summary["applied"] == 5
    assert summary["recipients"] == 4

    result = _invoke("show", "--store", store_path, "--start", "50", "--end", "100", "--all", "--json")
    assert result.exit_code == 0, result.output
    recipients = {r["id"]: r for r in json.loads(result.stdout)["recipients"]}
    # stored verbatim, so bad metadata does not drop the record
    assert rid(3) in recipients
    assert recipients[rid(2)]["removed"] is True
    assert recipients[rid(2)]["is_locked"] is True
    assert recipients[rid(4)]["is_hidden"] is True


def test_show_hides_hidden_by_default(event_log, tmp_path):
    store_path = str(tmp_path / "recipients.json")
    _invoke("index", REGISTRY, "--offline", "--log", event_log, "--store", store_path, "--strategy", "flag")

    result = _invoke("show", "--store", store_path, "--start", "50", "--end", "100", "--json")
    assert result.exit_code == 0, result.output
    ids = [r["id"] for r in json.loads(result.stdout)["recipients"]]
    assert ids == [rid(1), rid(2), rid(3)]


def test_show_single_recipient(event_log, tmp_path):
    store_path = str(tmp_path / "recipients.json")
    _invoke("index", REGISTRY, "--offline", "--log", event_log, "--store", store_path, "--strategy", "flag")

    result = _invoke("show", "--store", store_path, "--id", rid(2), "--json")
    assert result.exit_code == 0, result.output
    record = json.loads(result.stdout)["recipient"]
    assert record["id"] == rid(2)
    assert record["removed"] is True

    result = _invoke("show", "--store", store_path, "--id", "0x1234", "--json")
    assert result.exit_code == 1
    assert json.loads(result.stdout) == {"recipient": None}


class _StubSource:
    calls = []
    history = []

    def __init__(self, w3):
        pass

    async def fetch_history(self, registry, from_block=0, to_block="latest"):
        self.calls.append((registry, from_block))
        return [ev for ev in self.history if ev.block_number >= from_block]


@pytest.fixture
def stub_source(monkeypatch):
    monkeypatch.setattr(_StubSource, "calls", [])
    monkeypatch.setattr(_StubSource, "history", [])
    monkeypatch.setattr("cli.commands.index.Web3EventSource", _StubSource)
    monkeypatch.setattr("cli.commands.index.connect", lambda url: None)
    return _StubSource


def test_index_resumes_per_registry(tmp_path, stub_source):
    log_path = str(tmp_path / "events.log")
    FileEventLog(log_path).append(added(1, block=500))
    store_path = str(tmp_path / "recipients.json")

    result = _invoke("index", OTHER_REGISTRY, "--log", log_path, "--store", store_path, "--json")
    assert result.exit_code == 0, result.output
    result = _invoke("index", REGISTRY, "--log", log_path, "--store", store_path, "--json")
    assert result.exit_code == 0, result.output

    assert stub_source.calls == [(OTHER_REGISTRY, 0), (REGISTRY, 501)]


def test_index_logs_only_applied_batches(tmp_path, stub_source, monkeypatch):
    class FailingStore(FileRecipientStore):
        writes = 0

        def upsert(self, recipient):
            FailingStore.writes += 1
            if FailingStore.writes == 2:
                raise StoreError("disk full")
            super().upsert(recipient)

    monkeypatch.setattr("cli.commands.index.FileRecipientStore", FailingStore)
    stub_source.history = [added(1, block=1), added(2, block=2), added(3, block=3)]
    log_path = str(tmp_path / "events.log")
    store_path = str(tmp_path / "recipients.json")

    result = _invoke("index", REGISTRY, "--log", log_path, "--store", store_path, "--json")
    assert result.exit_code == 2
    assert list(FileEventLog(log_path).read()) == []

    # next run refetches the whole batch
    result = _invoke("index", REGISTRY, "--log", log_path, "--store", store_path, "--json")
    assert result.exit_code == 0, result.output
    assert stub_source.calls[-1] == (REGISTRY, 0)
    assert json.loads(result.stdout)["recipients"] == 3
    assert len(list(FileEventLog(log_path).read())) == 3


def test_add_reports_registry_descriptor(tmp_path, monkeypatch):
    submitted = []

    async def fake_add(w3, registry, recipient, metadata, sender):
        submitted.append((registry, recipient, metadata, sender))
        return "0x" + "ee" * 32

    monkeypatch.setattr("cli.commands.submit.add_recipient", fake_add)
    monkeypatch.setattr("cli.commands.submit.connect", lambda url: None)
    meta_path = tmp_path / "meta.json"
    meta_path.write_text(json.dumps({"name": "p1"}))

    result = _invoke("add", REGISTRY, payout(1), "--metadata", str(meta_path), "--from", SENDER, "--json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "tx_hash": "0x" + "ee" * 32,
        "registration_open": False,
        "requires_deposit": False,
    }
    assert submitted == [(REGISTRY, payout(1), {"name": "p1"}, SENDER)]


def test_version():
    result = _invoke("version")
    assert result.exit_code == 0
    assert "Registry CLI" in result.stdout
