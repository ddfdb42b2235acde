"""
/search and /files endpoint tests
"""
import asyncpg
import pytest

from tests.conftest import make_row, make_token

PNG_ROWS = [
    make_row(12, "holiday.png", 2048, "image/png"),
    make_row(9, "avatar.png", 512, "image/png"),
]


def auth_header(user_id):
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def test_mime_type_search_scoped_to_caller(client, fake_connection):
    fake_connection.total = 2
    fake_connection.rows = PNG_ROWS

    response = client.get(
        "/search",
        params={"mime_type": "image/png", "page": "1", "pageSize": "20"},
        headers=auth_header(7),
    )

    assert response.status_code == 200
    body = response.json()
    assert [f["id"] for f in body["files"]] == [12, 9]
    assert body["files"][0]["filename"] == "holiday.png"
    assert body["files"][0]["size_bytes"] == 2048
    assert body["files"][0]["mime_type"] == "image/png"
    assert body["files"][0]["created_at"].startswith("2025-07-01T12:00:00")
    assert body["pagination"] == {"current_page": 1, "total_pages": 1, "total_files": 2}

    (count_kind, count_sql, count_args), (page_kind, page_sql, page_args) = fake_connection.statements
    assert count_kind == "count" and page_kind == "page"
    assert "uf.user_id = $1 AND uf.mime_type = $2" in count_sql
    assert count_args == [7, "image/png"]
    assert page_args == [7, "image/png", 20, 0]


def test_empty_size_range(client, fake_connection):
    fake_connection.total = 0
    fake_connection.rows = []

    response = client.get(
        "/search",
        params={"min_size_bytes": "1000", "max_size_bytes": "500"},
        headers=auth_header(7),
    )

    assert response.status_code == 200
    assert response.json() == {
        "files": [],
        "pagination": {"current_page": 1, "total_pages": 0, "total_files": 0},
    }
    _, _, count_args = fake_connection.statements[0]
    assert count_args == [7, "1000", "500"]


def test_query_token_matches_header_token(client, fake_connection):
    fake_connection.total = 2
    fake_connection.rows = PNG_ROWS
    params = {"filename": "png"}

    via_header = client.get("/search", params=params, headers=auth_header(7))
    via_query = client.get("/search", params={**params, "auth": make_token(7)})

    assert via_header.status_code == via_query.status_code == 200
    assert via_header.json() == via_query.json()
    header_statements, query_statements = fake_connection.statements[:2], fake_connection.statements[2:]
    assert header_statements == query_statements


def test_repeated_search_is_identical(client, fake_connection):
    fake_connection.total = 2
    fake_connection.rows = PNG_ROWS
    params = {"filename": "a", "start_date": "2025-01-01", "page": "1"}

    first = client.get("/search", params=params, headers=auth_header(3))
    second = client.get("/search", params=params, headers=auth_header(3))

    assert first.json() == second.json()
    assert fake_connection.statements[:2] == fake_connection.statements[2:]


@pytest.mark.parametrize("page,page_size,expected_args", [
    ("0", "0", [20, 0]),
    ("-2", "500", [20, 0]),
    (None, None, [20, 0]),
    ("3", "10", [10, 20]),
    ("x", "y", [20, 0]),
])
def test_pagination_normalization(client, fake_connection, page, page_size, expected_args):
    params = {}
    if page is not None:
        params["page"] = page
    if page_size is not None:
        params["pageSize"] = page_size

    response = client.get("/search", params=params, headers=auth_header(1))

    assert response.status_code == 200
    _, _, page_args = fake_connection.statements[1]
    assert page_args == [1] + expected_args


def test_total_pages_rounds_up(client, fake_connection):
    fake_connection.total = 45

    response = client.get("/search", params={"pageSize": "20", "page": "2"}, headers=auth_header(1))

    assert response.json()["pagination"] == {"current_page": 2, "total_pages": 3, "total_files": 45}


def test_page_past_the_end_is_empty(client, fake_connection):
    fake_connection.total = 3
    fake_connection.rows = []

    response = client.get("/search", params={"page": "9"}, headers=auth_header(1))

    assert response.status_code == 200
    assert response.json() == {
        "files": [],
        "pagination": {"current_page": 9, "total_pages": 1, "total_files": 3},
    }


def test_count_failure_returns_500_without_page_query(client, fake_connection):
    fake_connection.count_error = asyncpg.InterfaceError("invalid input for query argument $2")

    response = client.get("/search", params={"min_size_bytes": "abc"}, headers=auth_header(1))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to count filtered files"}
    assert [kind for kind, _, _ in fake_connection.statements] == ["count"]


def test_page_failure_returns_500(client, fake_connection):
    fake_connection.total = 4
    fake_connection.fetch_error = ConnectionResetError("connection lost")

    response = client.get("/search", headers=auth_header(1))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to retrieve filtered files"}


def test_undecodable_row_discards_page(client, fake_connection):
    fake_connection.total = 2
    fake_connection.rows = [PNG_ROWS[0], make_row(13, None, 10, "image/png")]

    response = client.get("/search", headers=auth_header(1))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process filtered file data"}


def test_list_files_uses_owner_predicate_only(client, fake_connection):
    fake_connection.total = 2
    fake_connection.rows = PNG_ROWS

    response = client.get("/files", params={"page": "1", "pageSize": "1"}, headers=auth_header(5))

    assert response.status_code == 200
    assert response.json()["pagination"] == {"current_page": 1, "total_pages": 2, "total_files": 2}
    _, count_sql, count_args = fake_connection.statements[0]
    assert count_sql.endswith("WHERE uf.user_id = $1")
    assert count_args == [5]
