"""Miro REST v2 adapter for diagram commands."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import DEFAULT_MIRO_API_URL
from .emitter import BoardAdapter
from .errors import RemoteRejectedError, RemoteUnavailableError
from .models import BoardRef, CreateConnector, NodeCommand

logger = logging.getLogger(__name__)


class MiroAdapter(BoardAdapter):
    """Creates boards, shapes, and connectors through the Miro REST API."""

    def __init__(
        self,
        api_token: str,
        api_url: str = DEFAULT_MIRO_API_URL,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        })

    def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise RemoteUnavailableError(f"Miro API {path} unreachable: {exc}") from exc
        except requests.RequestException as exc:
            raise RemoteUnavailableError(f"Miro API {path} request failed: {exc}") from exc

        if response.status_code >= 500:
            raise RemoteUnavailableError(
                f"Miro API {path} failed ({response.status_code})",
                status_code=response.status_code,
                details={"body": response.text},
            )
        if not response.ok:
            raise RemoteRejectedError(
                f"Miro API {path} failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
                details={"body": response.text},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteRejectedError(f"Miro API {path} returned invalid JSON") from exc
        if not isinstance(payload, dict) or "id" not in payload:
            raise RemoteRejectedError(f"Miro API {path} response has no id")
        logger.debug("POST %s -> %s", path, payload["id"])
        return payload

    def create_board(self, name: str, description: str) -> BoardRef:
        payload = self._post("/boards", {"name": name, "description": description})
        return BoardRef(board_id=str(payload["id"]), view_url=payload.get("viewLink", ""))

    def create_node(self, board_id: str, command: NodeCommand) -> str:
        payload = self._post(f"/boards/{board_id}/shapes", shape_payload(command))
        return str(payload["id"])

    def create_connector(self, board_id: str, command: CreateConnector) -> str:
        payload = self._post(f"/boards/{board_id}/connectors", connector_payload(command))
        return str(payload["id"])


def shape_payload(command: NodeCommand) -> Dict[str, Any]:
    return {
        "data": {"content": command.content, "shape": "round_rectangle"},
        "style": dict(command.style),
        "position": {"x": command.x, "y": command.y},
        "geometry": {"width": command.width, "height": command.height},
    }


def connector_payload(command: CreateConnector) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "startItem": {"id": command.from_node_id, "snapTo": "auto"},
        "endItem": {"id": command.to_node_id, "snapTo": "auto"},
        "shape": command.shape,
        "style": dict(command.style),
    }
    if command.caption:
        body["captions"] = [{"content": command.caption}]
    return body
