from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

import httpx

from config.settings import get_settings
from guidance.errors import TransportError
from guidance.events import ChatEvent, parse_event_line


logger = logging.getLogger(__name__)


class ChatClient:
    """HTTP client for the chat service endpoints.

    No timeout is applied unless one is configured; how long a request may
    run is left to the transport.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.chat_api_url).rstrip("/")
        if timeout is None:
            timeout = settings.chat_client_timeout
        self._owns_http = http is None
        self.http = http or httpx.Client(timeout=timeout)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def stream_chat(
        self,
        message: str,
        history: Iterable[Mapping[str, Any]] = (),
    ) -> Iterator[ChatEvent]:
        """Yield chat events in arrival order, stopping after the terminal one."""
        payload = {"message": message, "history": list(history)}
        logger.debug("POST %s history_turns=%s", self._url("chat"), len(payload["history"]))
        try:
            with self.http.stream("POST", self._url("chat"), json=payload) as response:
                if response.status_code >= 400:
                    response.read()
                    raise TransportError(
                        f"Chat request failed with status {response.status_code}",
                        status_code=response.status_code,
                    )
                for line in response.iter_lines():
                    event = parse_event_line(line)
                    if event is None:
                        continue
                    yield event
                    if event.is_terminal:
                        return
        except httpx.HTTPError as exc:
            raise TransportError(f"Chat request failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError(str(exc)) from exc
        # Stream closed without a completion marker
        raise TransportError("Chat stream ended before completion")

    def generate_guide(self, career: str) -> str:
        data = self._post_json("generate-guide", {"career": career})
        guide = data.get("guide")
        if not isinstance(guide, str):
            raise TransportError("Guide response is missing the 'guide' field")
        return guide

    def health(self) -> Dict[str, Any]:
        try:
            response = self.http.get(self._url("health"))
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"Health check failed: {exc}", status_code=exc.response.status_code
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"Health check failed: {exc}") from exc

    def _post_json(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.http.post(self._url(path), json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{path} request failed: {exc}", status_code=exc.response.status_code
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"{path} request failed: {exc}") from exc
        if not isinstance(data, dict):
            raise TransportError(f"{path} returned a non-object payload")
        return data

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "ChatClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

