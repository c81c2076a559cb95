"""
Tests for the command line client.
"""

import json
import urllib.error

import pytest

from diagram_backend import cli


@pytest.fixture
def api_calls(monkeypatch):
    """Record API calls instead of sending them."""
    calls = []

    def fake_request(method, endpoint, data=None, params=None):
        calls.append((method, endpoint, data, params))
        return {"success": True}

    monkeypatch.setattr(cli, "_api_request", fake_request)
    return calls


def run(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 0
    return json.loads(capsys.readouterr().out)


def test_get(api_calls, capsys):
    assert run(["get"], capsys) == {"success": True}
    assert api_calls == [("GET", "/graph", None, None)]


def test_add_vertex_sends_only_given_fields(api_calls, capsys):
    run(["add-vertex", "--label", "Start", "--x", "40"], capsys)
    assert api_calls == [("POST", "/vertices", {"label": "Start", "x": 40.0}, None)]


def test_update_vertex(api_calls, capsys):
    run(["update-vertex", "v1", "--shape", "rectangle"], capsys)
    assert api_calls == [("PATCH", "/vertices/v1", {"shape": "rectangle"}, None)]


def test_add_edge(api_calls, capsys):
    run(["add-edge", "v1", "v2", "--label", "next"], capsys)
    assert api_calls == [("POST", "/edges", {"source": "v1", "target": "v2", "label": "next"}, None)]


def test_traverse_defaults(api_calls, capsys):
    run(["traverse"], capsys)
    assert api_calls == [
        ("GET", "/traversal", None, {"start": 0, "order": "breadth_first", "mode": "undirected"})
    ]


def test_distance(api_calls, capsys):
    run(["distance", "v1", "v2"], capsys)
    assert api_calls == [("GET", "/distance", None, {"origin": "v1", "destination": "v2"})]


def test_layout(api_calls, capsys):
    run(["layout", "--strategy", "layered", "--root", "2"], capsys)
    assert api_calls == [("POST", "/layout", {"strategy": "layered", "root": 2}, None)]


def test_invalid_order_is_rejected(api_calls):
    with pytest.raises(SystemExit) as exc:
        cli.main(["traverse", "--order", "sideways"])
    assert exc.value.code == 2
    assert api_calls == []


def test_connection_failure_is_reported(monkeypatch, capsys):
    def refuse(*args, **kwargs):
        raise urllib.error.URLError("refused")

    monkeypatch.setattr(cli.urllib.request, "urlopen", refuse)

    result = run(["validate"], capsys)

    assert result["status"] == "error"
    assert "Connection failed" in result["error"]
