"""HTTP client for the board API.

Keeps a local copy of the board, refreshed by polling, and commits drag
gestures as single reorder batches. A gesture is shown locally before the
request completes and rolled back if the request fails.
"""
import threading
from typing import Any, Dict, List, Optional

import httpx
import structlog

from kanban.client.filters import filter_cards
from kanban.client.ordering import DropTarget, apply_plan, resolve_card_drop, resolve_column_move
from kanban.config import settings
from kanban.schemas import CardOrder, ColumnOrder

logger = structlog.get_logger(__name__)


class BoardClientError(Exception):
    """A board API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DragInProgressError(BoardClientError):
    """Another gesture is still being committed."""


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase


class BoardClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        http: Optional[httpx.Client] = None,
        timeout: float = settings.REQUEST_TIMEOUT_SECONDS,
        poll_interval: float = settings.POLL_INTERVAL_SECONDS,
        api_prefix: str = "/api",
    ):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.poll_interval = poll_interval
        self.api_prefix = api_prefix

        self.board: Optional[Dict[str, Any]] = None
        self.columns: List[Dict[str, Any]] = []
        self.cards: List[Dict[str, Any]] = []
        self.members: List[Dict[str, Any]] = []

        self._lock = threading.RLock()
        self._committing = False

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, f"{self.api_prefix}{path}", **kwargs)
        except httpx.HTTPError as exc:
            raise BoardClientError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise BoardClientError(
                f"{method} {path} failed: {_error_detail(response)}",
                status_code=response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BoardClientError(
                f"{method} {path} returned a body that is not JSON",
                status_code=response.status_code,
            ) from exc

    # Board

    def refresh(self) -> Dict[str, Any]:
        """Replace the local state with the server's full board."""
        data = self._request("GET", "/board")
        with self._lock:
            self.board = {"id": data["id"], "name": data["name"], "theme": data["theme"]}
            self.columns = data.get("columns") or []
            self.cards = data.get("cards") or []
            self.members = data.get("members") or []
        return data

    def poll(self, stop: threading.Event, interval: Optional[float] = None) -> None:
        """Refresh every ``interval`` seconds until ``stop`` is set.

        Failed refreshes are logged and skipped; the next tick tries again.
        """
        interval = interval if interval is not None else self.poll_interval
        while not stop.wait(interval):
            try:
                self.refresh()
            except BoardClientError as exc:
                logger.debug("board_poll_failed", error=str(exc))

    def update_board(self, name: str, theme: str) -> Dict[str, Any]:
        board = self._request("PUT", "/board", json={"name": name, "theme": theme})
        with self._lock:
            self.board = {"id": board["id"], "name": board["name"], "theme": board["theme"]}
        return board

    # Columns

    def add_column(self, title: str) -> Dict[str, Any]:
        column = self._request("POST", "/columns", json={"title": title, "orderIndex": len(self.columns)})
        with self._lock:
            self.columns = [*self.columns, column]
        return column

    def delete_column(self, column_id: int) -> None:
        self._request("DELETE", f"/columns/{column_id}")
        with self._lock:
            self.columns = [column for column in self.columns if column["id"] != column_id]
            self.cards = [card for card in self.cards if card["column_id"] != column_id]

    def reorder_columns(self, orders: List[ColumnOrder]) -> List[Dict[str, Any]]:
        payload = {"orders": [entry.model_dump(by_alias=True) for entry in orders]}
        columns = self._request("POST", "/columns/reorder", json=payload)
        with self._lock:
            self.columns = columns
        return columns

    def move_column(self, column_id: int, target_index: int) -> bool:
        plan = resolve_column_move(self.columns, column_id, target_index)
        if not plan:
            return False
        return self._commit("columns", plan, self.reorder_columns)

    # Cards

    def add_card(self, column_id: int, title: str, **fields: Any) -> Dict[str, Any]:
        payload = {"columnId": column_id, "title": title, **fields}
        card = self._request("POST", "/cards", json=payload)
        with self._lock:
            self.cards = [*self.cards, card]
        return card

    def update_card(self, card_id: int, **fields: Any) -> Dict[str, Any]:
        card = self._request("PUT", f"/cards/{card_id}", json=fields)
        with self._lock:
            self.cards = [card if existing["id"] == card_id else existing for existing in self.cards]
        return card

    def delete_card(self, card_id: int) -> None:
        self._request("DELETE", f"/cards/{card_id}")
        with self._lock:
            self.cards = [card for card in self.cards if card["id"] != card_id]

    def reorder_cards(self, orders: List[CardOrder]) -> List[Dict[str, Any]]:
        payload = {"orders": [entry.model_dump(by_alias=True) for entry in orders]}
        cards = self._request("POST", "/cards/reorder", json=payload)
        with self._lock:
            self.cards = cards
        return cards

    def move_card(self, card_id: int, target: Optional[DropTarget]) -> bool:
        """Commit a drag gesture; returns ``False`` when there was nothing to send."""
        plan = resolve_card_drop(self.cards, card_id, target)
        if not plan:
            return False
        return self._commit("cards", plan, self.reorder_cards)

    def _commit(self, attr: str, plan, submit) -> bool:
        with self._lock:
            if self._committing:
                raise DragInProgressError("A reorder is already being committed")
            self._committing = True
            snapshot = getattr(self, attr)
            setattr(self, attr, apply_plan(snapshot, plan))

        try:
            submit(plan)
        except BoardClientError as exc:
            with self._lock:
                setattr(self, attr, snapshot)
            logger.warning("reorder_failed", entity=attr, entries=len(plan), error=str(exc))
            raise
        finally:
            with self._lock:
                self._committing = False
        return True

    # Members

    def add_member(self, name: str, color: Optional[str] = None) -> Dict[str, Any]:
        member = self._request("POST", "/members", json={"name": name, "color": color})
        with self._lock:
            self.members = [*self.members, member]
        return member

    def delete_member(self, member_id: int) -> None:
        self._request("DELETE", f"/members/{member_id}")
        with self._lock:
            self.members = [member for member in self.members if member["id"] != member_id]
            self.cards = [
                {**card, "assignee_id": None} if card.get("assignee_id") == member_id else card
                for card in self.cards
            ]

    # Views

    def filtered_cards(self, member_id: Optional[int] = None, today_only: bool = False, query: str = ""):
        return filter_cards(self.cards, self.columns, member_id=member_id, today_only=today_only, query=query)

    def close(self) -> None:
        self.http.close()
