"""Book catalog CRUD through the HTTP API."""

import pytest
from fastapi.testclient import TestClient

BOOK = {
    "title": "The Left Hand of Darkness",
    "year": 1969,
    "isbn": "978-0441478125",
    "summary": "An envoy on the planet Gethen.",
    "image": "left-hand.jpg",
    "price": 12.5,
}


@pytest.fixture
def author_id(client: TestClient, admin_headers) -> int:
    response = client.post(
        "/api/authors",
        json={"firstname": "Ursula", "lastname": "Le Guin"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def book_id(client: TestClient, author_id: int) -> int:
    response = client.post("/api/books", json={**BOOK, "authorId": author_id})
    assert response.status_code == 201
    return response.json()["id"]


class TestReadBooks:
    """Test GET /api/books."""

    def test_empty_catalog(self, client: TestClient):
        response = client.get("/api/books")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_book_includes_author(self, client: TestClient, book_id: int, author_id: int):
        response = client.get(f"/api/books/{book_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == BOOK["title"]
        assert body["authorId"] == author_id
        assert body["author"] == {"id": author_id, "firstname": "Ursula", "lastname": "Le Guin"}

    def test_missing_book(self, client: TestClient):
        response = client.get("/api/books/999999")

        assert response.status_code == 404
        assert response.content == b""

    def test_unparsable_id(self, client: TestClient):
        assert client.get("/api/books/abc").status_code == 400

    def test_responses_carry_request_id(self, client: TestClient):
        response = client.get("/api/books", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestCreateBook:
    """Test POST /api/books."""

    def test_create_returns_location(self, client: TestClient):
        response = client.post("/api/books", json=BOOK)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] >= 1
        assert body["title"] == BOOK["title"]
        assert response.headers["Location"] == f"/api/books/{body['id']}"

    def test_created_book_is_readable(self, client: TestClient):
        created = client.post("/api/books", json=BOOK).json()

        fetched = client.get(f"/api/books/{created['id']}").json()

        assert fetched == created

    def test_missing_title(self, client: TestClient):
        response = client.post("/api/books", json={"isbn": "978-0441478125"})

        assert response.status_code == 400

    def test_summary_too_long(self, client: TestClient):
        response = client.post("/api/books", json={**BOOK, "summary": "x" * 501})

        assert response.status_code == 400


class TestUpdateBook:
    """Test PUT /api/books/{id}."""

    def test_update(self, client: TestClient, book_id: int):
        response = client.put(
            f"/api/books/{book_id}", json={**BOOK, "id": book_id, "price": 8.0}
        )

        assert response.status_code == 204
        assert client.get(f"/api/books/{book_id}").json()["price"] == 8.0

    def test_mismatched_ids(self, client: TestClient, book_id: int):
        response = client.put(f"/api/books/{book_id}", json={**BOOK, "id": book_id + 1})

        assert response.status_code == 400

    def test_mismatched_ids_without_stored_rows(self, client: TestClient):
        response = client.put("/api/books/5", json={**BOOK, "id": 6})

        assert response.status_code == 400

    def test_id_below_one(self, client: TestClient):
        response = client.put("/api/books/0", json={**BOOK, "id": 0})

        assert response.status_code == 400

    def test_missing_book(self, client: TestClient):
        response = client.put("/api/books/999999", json={**BOOK, "id": 999999})

        assert response.status_code == 404


class TestDeleteBook:
    """Test DELETE /api/books/{id}."""

    def test_delete_twice(self, client: TestClient, book_id: int):
        assert client.delete(f"/api/books/{book_id}").status_code == 204
        assert client.get(f"/api/books/{book_id}").status_code == 404

        assert client.delete(f"/api/books/{book_id}").status_code == 404

    def test_id_below_one(self, client: TestClient):
        assert client.delete("/api/books/0").status_code == 400


class TestStoreFailure:
    """Test that store faults surface as the generic 500 body."""

    def test_generic_error(self, client: TestClient, monkeypatch):
        from src.bookstore.core.errors import StoreFault
        from src.bookstore.entities import BookRepository

        def broken_find_all(self):
            raise StoreFault("BookTable find_all failed")

        monkeypatch.setattr(BookRepository, "find_all", broken_find_all)

        response = client.get("/api/books")

        assert response.status_code == 500
        assert response.json() == {
            "detail": "Something went wrong. Please contact Administrator"
        }
