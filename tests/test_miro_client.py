"""Tests for the Miro REST adapter (no network)."""

from unittest.mock import MagicMock

import pytest
import requests

from archboard_cli.emitter import DiagramEmitter
from archboard_cli.errors import RemoteRejectedError, RemoteUnavailableError
from archboard_cli.layout import HorizontalLayout
from archboard_cli.miro_client import MiroAdapter, connector_payload, shape_payload


def _response(status=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.text = text
    resp.json.return_value = payload if payload is not None else {}
    return resp


@pytest.fixture
def session():
    sess = MagicMock(spec=requests.Session)
    sess.headers = {}
    return sess


def test_headers_and_board_creation(session):
    session.post.return_value = _response(payload={"id": "uXj", "viewLink": "https://miro.com/app/board/uXj/"})
    adapter = MiroAdapter("tok", api_url="https://api.example/v2/", session=session)

    board = adapter.create_board("Arch", "desc")

    assert session.headers["Authorization"] == "Bearer tok"
    assert board.board_id == "uXj"
    assert board.view_url == "https://miro.com/app/board/uXj/"
    url = session.post.call_args.args[0]
    assert url == "https://api.example/v2/boards"
    assert session.post.call_args.kwargs["json"] == {"name": "Arch", "description": "desc"}
    assert session.post.call_args.kwargs["timeout"] == 30


def test_full_emit_paths_and_payloads(session, sample_project_path):
    from archboard_cli.orchestrator import ArchitectureOrchestrator

    ids = iter(["board", "s1", "s2", "s3", "s4", "s5", "s6", "s7", "c1", "c2"])
    session.post.side_effect = lambda url, json, timeout: _response(
        payload={"id": next(ids), "viewLink": "https://miro.com/x"}
    )
    adapter = MiroAdapter("tok", session=session)
    graph = ArchitectureOrchestrator().analyze(sample_project_path)
    positions = HorizontalLayout().arrange(graph.module_names())

    result = DiagramEmitter(adapter).emit(graph, positions, "Arch")

    urls = [call.args[0] for call in session.post.call_args_list]
    assert urls[0].endswith("/boards")
    shape_calls = [u for u in urls if u.endswith("/boards/board/shapes")]
    connector_calls = [u for u in urls if u.endswith("/boards/board/connectors")]
    # title + 3 modules + 3 annotations
    assert len(shape_calls) == 7
    assert len(connector_calls) == 2
    assert urls[-2:] == connector_calls
    assert result.connector_ids == ["c1", "c2"]


def test_connection_error_is_unavailable(session):
    session.post.side_effect = requests.ConnectionError("refused")
    adapter = MiroAdapter("tok", session=session)

    with pytest.raises(RemoteUnavailableError):
        adapter.create_board("Arch", "")


def test_timeout_is_unavailable(session):
    session.post.side_effect = requests.Timeout("slow")
    adapter = MiroAdapter("tok", session=session)

    with pytest.raises(RemoteUnavailableError):
        adapter.create_board("Arch", "")


@pytest.mark.parametrize(
    "exc",
    [
        requests.exceptions.ChunkedEncodingError("truncated body"),
        requests.exceptions.MissingSchema("no scheme in api url"),
        requests.TooManyRedirects("redirect loop"),
    ],
)
def test_other_request_failures_are_unavailable(session, exc):
    session.post.side_effect = exc
    adapter = MiroAdapter("tok", api_url="api.example/v2", session=session)

    with pytest.raises(RemoteUnavailableError) as info:
        adapter.create_board("Arch", "")

    assert info.value.__cause__ is exc


def test_server_error_is_unavailable(session):
    session.post.return_value = _response(status=503, text="maintenance")
    adapter = MiroAdapter("tok", session=session)

    with pytest.raises(RemoteUnavailableError) as exc_info:
        adapter.create_board("Arch", "")
    assert exc_info.value.status_code == 503


def test_client_error_is_rejected(session):
    session.post.return_value = _response(status=400, text='{"message":"invalid name"}')
    adapter = MiroAdapter("tok", session=session)

    with pytest.raises(RemoteRejectedError) as exc_info:
        adapter.create_board("", "")
    assert exc_info.value.status_code == 400
    assert "invalid name" in str(exc_info.value)


def test_missing_id_is_rejected(session):
    session.post.return_value = _response(payload={"type": "shape"})
    adapter = MiroAdapter("tok", session=session)

    with pytest.raises(RemoteRejectedError):
        adapter.create_board("Arch", "")


def test_invalid_json_is_rejected(session):
    resp = _response()
    resp.json.side_effect = ValueError("not json")
    session.post.return_value = resp
    adapter = MiroAdapter("tok", session=session)

    with pytest.raises(RemoteRejectedError):
        adapter.create_board("Arch", "")


def test_payload_shapes():
    emitter = DiagramEmitter(adapter=None)
    node = emitter.title_node("Arch")
    conn = emitter.connector("n1", "n2")

    shape = shape_payload(node)
    assert shape["data"] == {"content": "<strong>Arch</strong>", "shape": "round_rectangle"}
    assert shape["position"] == {"x": 0, "y": -250}
    assert shape["geometry"] == {"width": 500, "height": 70}

    body = connector_payload(conn)
    assert body["startItem"] == {"id": "n1", "snapTo": "auto"}
    assert body["endItem"] == {"id": "n2", "snapTo": "auto"}
    assert body["shape"] == "curved"
    assert body["captions"] == [{"content": "imports"}]
    assert body["style"]["endStrokeCap"] == "stealth"
