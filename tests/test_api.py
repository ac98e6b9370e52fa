import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

import kanban.api.v1.board as board_routes
import kanban.api.v1.cards as card_routes
import kanban.api.v1.columns as column_routes
import kanban.api.v1.members as member_routes
import kanban.schemas as schemas
from kanban.database import DEFAULT_COLUMNS


def _create_column(session: Session, title: str, order_index=None):
    column_in = schemas.ColumnCreate(title=title, order_index=order_index)
    return column_routes.create_column(column_in, session)


def _create_card(session: Session, column_id: int, title: str, **fields):
    card_in = schemas.CardCreate(column_id=column_id, title=title, **fields)
    return card_routes.create_card(card_in, session)


def _first_column_id(session: Session) -> int:
    return column_routes.get_columns(session)[0].id


def test_schema_bootstrap_seeds_board_and_columns(db_session: Session):
    state = board_routes.read_board(db_session)

    assert state.id == 1
    assert state.theme == "light"
    assert [column.title for column in state.columns] == list(DEFAULT_COLUMNS)
    assert [column.order_index for column in state.columns] == list(range(len(DEFAULT_COLUMNS)))


def test_create_column_defaults_to_end(db_session: Session):
    column = _create_column(db_session, "  Review  ")

    assert column.title == "Review"
    assert column.order_index == len(DEFAULT_COLUMNS)


def test_create_column_keeps_explicit_order_index(db_session: Session):
    column = _create_column(db_session, "First", order_index=0)

    assert column.order_index == 0


def test_create_card_defaults_to_end_of_column(db_session: Session):
    column_id = _first_column_id(db_session)
    for title in ("one", "two", "three"):
        _create_card(db_session, column_id, title)

    card = _create_card(db_session, column_id, "four")

    assert card.order_index == 3


def test_create_card_counts_only_target_column(db_session: Session):
    columns = column_routes.get_columns(db_session)
    _create_card(db_session, columns[0].id, "elsewhere")

    card = _create_card(db_session, columns[1].id, "first here")

    assert card.order_index == 0


def test_create_card_with_all_fields(db_session: Session):
    member = member_routes.create_member(schemas.MemberCreate(name="Ada", color="#ff0000"), db_session)
    card = _create_card(
        db_session,
        _first_column_id(db_session),
        "Complete Card",
        description="This is a description",
        assignee_id=member.id,
        color="#ff0000",
        emoji="🎯",
        tags=["urgent", "important"],
        due_date="2025-12-31",
        order_index=0,
    )

    assert card.description == "This is a description"
    assert card.assignee_id == member.id
    assert card.tags == ["urgent", "important"]
    assert card.due_date == "2025-12-31"
    assert card.order_index == 0


def test_create_card_rejects_unknown_column(db_session: Session):
    with pytest.raises(HTTPException) as exc:
        _create_card(db_session, 999, "Lost")
    assert exc.value.status_code == 400


def test_create_card_escapes_markup(db_session: Session):
    card = _create_card(db_session, _first_column_id(db_session), '<script>alert("xss")</script>Test Card')

    assert "<script>" not in card.title
    assert "Test Card" in card.title


def test_reorder_cards_returns_full_list(db_session: Session, app_settings):
    columns = column_routes.get_columns(db_session)
    column_a, column_b = columns[0].id, columns[1].id
    a1 = _create_card(db_session, column_a, "a1")
    a2 = _create_card(db_session, column_a, "a2")
    b1 = _create_card(db_session, column_b, "b1")
    untouched = _create_card(db_session, columns[2].id, "c1")

    orders = schemas.CardReorderRequest(
        orders=[
            {"id": a1.id, "columnId": column_b, "orderIndex": 0},
            {"id": b1.id, "columnId": column_b, "orderIndex": 1},
            {"id": a2.id, "columnId": column_a, "orderIndex": 0},
        ]
    )
    cards = card_routes.reorder_cards(orders, db_session, app_settings)

    by_id = {card.id: card for card in cards}
    assert len(cards) == 4
    assert (by_id[a1.id].column_id, by_id[a1.id].order_index) == (column_b, 0)
    assert (by_id[b1.id].column_id, by_id[b1.id].order_index) == (column_b, 1)
    assert (by_id[a2.id].column_id, by_id[a2.id].order_index) == (column_a, 0)
    assert by_id[untouched.id].order_index == 0
    assert [card.order_index for card in cards] == sorted(card.order_index for card in cards)


def test_reorder_ignores_unknown_ids_by_default(db_session: Session, app_settings):
    card = _create_card(db_session, _first_column_id(db_session), "only")

    orders = schemas.CardReorderRequest(orders=[{"id": 999, "orderIndex": 0}, {"id": card.id, "orderIndex": 5}])
    cards = card_routes.reorder_cards(orders, db_session, app_settings)

    assert [(c.id, c.order_index) for c in cards] == [(card.id, 5)]


def test_strict_reorder_rejects_unknown_ids(db_session: Session, strict_settings):
    card = _create_card(db_session, _first_column_id(db_session), "only")

    orders = schemas.CardReorderRequest(orders=[{"id": card.id, "orderIndex": 5}, {"id": 999, "orderIndex": 0}])
    with pytest.raises(HTTPException) as exc:
        card_routes.reorder_cards(orders, db_session, strict_settings)
    assert exc.value.status_code == 404

    assert card_routes.get_cards(db_session)[0].order_index == 0


def test_reorder_columns(db_session: Session, app_settings):
    columns = column_routes.get_columns(db_session)
    reversed_orders = [{"id": column.id, "orderIndex": index} for index, column in enumerate(reversed(columns))]

    result = column_routes.reorder_columns(schemas.ColumnReorderRequest(orders=reversed_orders), db_session, app_settings)

    assert [column.id for column in result] == [column.id for column in reversed(columns)]


def test_delete_last_column_is_rejected(db_session: Session):
    columns = column_routes.get_columns(db_session)
    for column in columns[1:]:
        column_routes.delete_column(column.id, db_session)

    with pytest.raises(HTTPException) as exc:
        column_routes.delete_column(columns[0].id, db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Cannot delete the last column"
    assert len(column_routes.get_columns(db_session)) == 1


def test_delete_missing_column_is_404(db_session: Session):
    with pytest.raises(HTTPException) as exc:
        column_routes.delete_column(999, db_session)
    assert exc.value.status_code == 404


def test_update_card_partial(db_session: Session):
    columns = column_routes.get_columns(db_session)
    card = _create_card(db_session, columns[0].id, "Draft", tags=["a"])

    updated = card_routes.update_card(
        card.id, schemas.CardUpdate(title="Final", column_id=columns[1].id), db_session
    )

    assert updated.title == "Final"
    assert updated.column_id == columns[1].id
    assert updated.tags == ["a"]


def test_update_board_falls_back_to_light_theme(db_session: Session):
    board = board_routes.update_board(schemas.BoardUpdate(name="Team", theme="neon"), db_session)
    assert (board.name, board.theme) == ("Team", "light")

    board = board_routes.update_board(schemas.BoardUpdate(name="Team", theme="dark"), db_session)
    assert board.theme == "dark"


# HTTP surface


def test_reorder_rejects_non_array_orders(client):
    column_id = client.get("/api/columns").json()[0]["id"]
    created = client.post("/api/cards", json={"columnId": column_id, "title": "stay"}).json()

    response = client.post("/api/cards/reorder", json={"orders": "not-a-list"})

    assert response.status_code == 400
    assert "orders" in response.json()["detail"]
    cards = client.get("/api/cards").json()
    assert [(c["id"], c["order_index"]) for c in cards] == [(created["id"], 0)]


def test_column_reorder_rejects_non_array_orders(client):
    response = client.post("/api/columns/reorder", json={"orders": {"id": 1}})

    assert response.status_code == 400


def test_create_card_requires_title_and_column(client):
    column_id = client.get("/api/columns").json()[0]["id"]

    assert client.post("/api/cards", json={"columnId": column_id}).status_code == 400
    assert client.post("/api/cards", json={"title": "No column"}).status_code == 400


def test_create_column_rejects_blank_title(client):
    assert client.post("/api/columns", json={"title": "   "}).status_code == 400


def test_create_card_http_defaults_order_index(client):
    column_id = client.get("/api/columns").json()[0]["id"]
    client.post("/api/cards", json={"columnId": column_id, "title": "one"})

    response = client.post("/api/cards", json={"columnId": column_id, "title": "two"})

    assert response.status_code == 201
    body = response.json()
    assert body["order_index"] == 1
    assert body["column_id"] == column_id
    assert body["tags"] == []


def test_delete_last_column_over_http(client):
    columns = client.get("/api/columns").json()
    for column in columns[1:]:
        assert client.delete(f"/api/columns/{column['id']}").status_code == 204

    response = client.delete(f"/api/columns/{columns[0]['id']}")

    assert response.status_code == 400
    assert len(client.get("/api/columns").json()) == 1


def test_board_state_payload(client):
    client.post("/api/members", json={"name": "Grace"})

    body = client.get("/api/board").json()

    assert {"id", "name", "theme", "columns", "cards", "members"} <= set(body)
    assert body["members"][0]["color"] == "#6366f1"


def test_export_is_an_attachment(client):
    response = client.get("/api/board/export")

    assert response.status_code == 200
    assert "kanban-export.json" in response.headers["content-disposition"]
    body = response.json()
    assert {"board", "columns", "cards", "members", "exportedAt"} <= set(body)


def test_export_alias_redirects(client):
    response = client.get("/api/export", follow_redirects=False)

    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/api/board/export"


def test_download_db_without_file_is_404(client):
    assert client.get("/api/board/download-db").status_code == 404


def test_download_db_returns_sqlite_file(tmp_path):
    from fastapi.testclient import TestClient

    from kanban.config import Settings
    from kanban.main import create_app

    db_path = tmp_path / "board.db"
    app = create_app(Settings(DATA_PATH=str(db_path), _env_file=None))
    with TestClient(app) as client:
        response = client.get("/api/board/download-db")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/x-sqlite3"
    assert response.content.startswith(b"SQLite format 3")


def test_health(client):
    body = client.get("/health").json()

    assert body["status"] == "ok"
    assert "timestamp" in body


def test_unknown_api_route_is_json_404(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["detail"] == "Not found"


def test_spa_fallback_serves_index(tmp_path):
    from fastapi.testclient import TestClient

    from kanban.config import Settings
    from kanban.main import create_app

    (tmp_path / "index.html").write_text("<html>board</html>")
    app = create_app(Settings(DATABASE_URL="sqlite://", FRONTEND_DIR=str(tmp_path), _env_file=None))
    with TestClient(app) as client:
        response = client.get("/some/client/route")

    assert response.status_code == 200
    assert "board" in response.text


def test_non_integer_card_order_index_goes_to_end(client):
    column_id = client.get("/api/columns").json()[0]["id"]
    client.post("/api/cards", json={"columnId": column_id, "title": "one"})

    for bad_index in ("abc", 1.5, True):
        response = client.post("/api/cards", json={"columnId": column_id, "title": "x", "orderIndex": bad_index})
        assert response.status_code == 201

    indices = [card["order_index"] for card in client.get("/api/cards").json()]
    assert sorted(indices) == [0, 1, 2, 3]


def test_non_integer_column_order_index_goes_to_end(client):
    count = len(client.get("/api/columns").json())

    response = client.post("/api/columns", json={"title": "Later", "orderIndex": 1.5})

    assert response.status_code == 201
    assert response.json()["order_index"] == count


def test_resaving_a_title_does_not_change_it(client):
    column_id = client.get("/api/columns").json()[0]["id"]
    card = client.post("/api/cards", json={"columnId": column_id, "title": "Tom & Jerry's <b>plan</b>"}).json()

    first = client.put(f"/api/cards/{card['id']}", json={"title": card["title"]}).json()
    second = client.put(f"/api/cards/{card['id']}", json={"title": first["title"]}).json()

    assert card["title"] == "Tom & Jerry's &lt;b&gt;plan&lt;/b&gt;"
    assert second["title"] == first["title"] == card["title"]


def test_reorder_into_missing_column_is_500_and_rolled_back(client):
    column_id = client.get("/api/columns").json()[0]["id"]
    first = client.post("/api/cards", json={"columnId": column_id, "title": "first"}).json()
    second = client.post("/api/cards", json={"columnId": column_id, "title": "second"}).json()

    response = client.post(
        "/api/cards/reorder",
        json={
            "orders": [
                {"id": first["id"], "columnId": column_id, "orderIndex": 1},
                {"id": second["id"], "columnId": 9999, "orderIndex": 0},
            ]
        },
    )

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
    cards = client.get("/api/cards").json()
    assert [(c["id"], c["column_id"], c["order_index"]) for c in cards] == [
        (first["id"], column_id, 0),
        (second["id"], column_id, 1),
    ]
