"""Tests for the collaborators — input source, output, config, CLI and sidecar."""

import http.client
import io
import json
import logging
import threading
import urllib.error
import urllib.request
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from field_extractor import extract, dumps, to_payload, read_input, load_config, load_from_yaml
from field_extractor.cli import main
from field_extractor.server import make_server

SAMPLE = (
    "Ping ops@example.com or (555) 123-4567 before 9:30 AM. "
    "Invoice $1,250.00 paid with 4111-1111-1111-1111. "
    "Docs: https://docs.example.com/start?ref=mail <b>now</b> #release"
)

KEYS = [
    "emails", "urls", "phoneNumbers", "currencyAmounts",
    "creditCards", "timestamps", "htmlTags", "hashtags",
]


# ── Input source ─────────────────────────────────────────────────────

def test_read_input(tmp_path):
    p = tmp_path / "in.txt"
    p.write_text("hello #world", encoding="utf-8")
    assert read_input(p) == "hello #world"


def test_read_input_missing_file_degrades(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="field_extractor.source"):
        assert read_input(tmp_path / "nope.txt") == ""
    assert "not found" in caplog.text


def test_read_input_undecodable_degrades(tmp_path):
    p = tmp_path / "bad.txt"
    p.write_bytes(b"\xff\xfe\xfa")
    assert read_input(p, encoding="utf-8") == ""


# ── Output ───────────────────────────────────────────────────────────

def test_payload_keys_in_order():
    payload = to_payload(extract(SAMPLE))
    assert list(payload) == KEYS
    assert payload["creditCards"] == ["****-****-****-1111"]
    assert payload["hashtags"] == ["#release"]


def test_dumps_default_indent():
    text = dumps(extract(""))
    assert text.startswith('{\n    "emails": []')
    assert json.loads(text) == {k: [] for k in KEYS}


# ── Config ───────────────────────────────────────────────────────────

def test_config_defaults():
    cfg = load_config()
    assert cfg["input_path"] == "input.txt"
    assert cfg["indent"] == 4
    assert cfg["ensure_ascii"] is False
    assert cfg["host"] == "127.0.0.1"


def test_config_nested():
    cfg = load_config({"field_extractor": {"output": {"indent": 2}, "log_level": "debug"}})
    assert cfg["indent"] == 2
    assert cfg["log_level"] == "DEBUG"


def test_config_rejects_bad_indent():
    with pytest.raises(ValueError):
        load_config({"output": {"indent": -1}})


def test_config_rejects_bad_port():
    with pytest.raises(ValueError):
        load_config({"server": {"port": "http"}})


def test_load_from_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text(
        "field_extractor:\n"
        "  input_path: notes.txt\n"
        "  server:\n"
        "    port: 9000\n"
    )
    cfg = load_from_yaml(p)
    assert cfg["input_path"] == "notes.txt"
    assert cfg["port"] == 9000


def test_load_from_empty_yaml(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_from_yaml(p) == load_config()


# ── CLI ──────────────────────────────────────────────────────────────

def test_cli_extract_file(tmp_path, capsys):
    p = tmp_path / "input.txt"
    p.write_text(SAMPLE, encoding="utf-8")
    assert main(["extract", str(p)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["emails"] == ["ops@example.com"]
    assert out["urls"] == ["https://docs.example.com/start?ref=mail"]
    assert out["timestamps"] == ["9:30 AM"]
    assert out["htmlTags"] == ["<b>", "</b>"]


def test_cli_missing_file_exits_quietly(tmp_path, capsys):
    assert main(["extract", str(tmp_path / "missing.txt")]) == 0
    assert capsys.readouterr().out == ""


def test_cli_extract_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("see #a and #b and #a"))
    assert main(["--indent", "0", "extract", "-"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["hashtags"] == ["#a", "#b", "#a"]


def test_cli_config_input_path(tmp_path, capsys):
    src = tmp_path / "notes.txt"
    src.write_text("a@b.com")
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(f"input_path: {src}\n")
    assert main(["--config", str(cfg), "extract"]) == 0
    assert json.loads(capsys.readouterr().out)["emails"] == ["a@b.com"]


def test_cli_rules(capsys):
    assert main(["rules"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert list(out) == KEYS
    assert out["hashtags"] == r"#\w+"


# ── HTTP sidecar ─────────────────────────────────────────────────────

@pytest.fixture
def sidecar():
    server = make_server("127.0.0.1", 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


def _request(url, body=None):
    data = body.encode("utf-8") if isinstance(body, str) else body
    req = urllib.request.Request(url, data=data, method="POST" if data is not None else "GET")
    try:
        with urllib.request.urlopen(req, timeout=5) as resp:
            return resp.status, json.loads(resp.read())
    except urllib.error.HTTPError as e:
        return e.code, json.loads(e.read())


def test_sidecar_health(sidecar):
    assert _request(sidecar + "/health") == (200, {"status": "ok"})


def test_sidecar_extract(sidecar):
    status, payload = _request(sidecar + "/extract", json.dumps({"text": "1234-5678-9012-3456"}))
    assert status == 200
    assert payload["creditCards"] == ["****-****-****-3456"]
    assert list(payload) == KEYS


def test_sidecar_missing_text_is_empty(sidecar):
    status, payload = _request(sidecar + "/extract", "{}")
    assert status == 200
    assert payload == {k: [] for k in KEYS}


def test_sidecar_bad_body(sidecar):
    status, payload = _request(sidecar + "/extract", "not json")
    assert status == 400
    assert "error" in payload
    status, _ = _request(sidecar + "/extract", json.dumps({"text": 42}))
    assert status == 400


def test_sidecar_non_utf8_body(sidecar):
    status, payload = _request(sidecar + "/extract", b"\xff\xfe\xfa")
    assert status == 400
    assert "UTF-8" in payload["error"]


def test_sidecar_bad_content_length(sidecar):
    host, port = sidecar.rsplit("/", 1)[-1].split(":")
    conn = http.client.HTTPConnection(host, int(port), timeout=5)
    try:
        conn.putrequest("POST", "/extract")
        conn.putheader("Content-Length", "abc")
        conn.endheaders()
        resp = conn.getresponse()
        assert resp.status == 400
        assert "Content-Length" in json.loads(resp.read())["error"]
    finally:
        conn.close()


def test_sidecar_unknown_path(sidecar):
    status, _ = _request(sidecar + "/nope")
    assert status == 404


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
