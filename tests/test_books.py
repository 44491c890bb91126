"""Book and note API tests."""

import pytest

from conftest import PASSWORD

BOOK = {
    "googleId": "zyTCAlFPjgYC",
    "title": "The Analytical Engine",
    "authors": ["Ada Lovelace"],
    "categories": ["Computers"],
    "tags": ["classic"],
}


@pytest.fixture
def other_client(client, register_user, login_user):
    """Switch the shared client to a second, logged-in user."""

    def _switch():
        client.cookies.clear()
        register_user(email="charles@example.com", name="Charles Babbage")
        login_user(email="charles@example.com", password=PASSWORD)
        return client

    return _switch


def create_book(client, **overrides):
    response = client.post("/books", json={**BOOK, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_book(auth_client, registered_user):
    """Owner comes from the session, defaults are applied."""
    data = create_book(auth_client)
    assert data["title"] == "The Analytical Engine"
    assert data["userId"] == registered_user["id"]
    assert data["status"] == "wishlist"
    assert data["isPublic"] is False
    assert data["authors"] == ["Ada Lovelace"]


def test_create_book_ignores_client_owner(auth_client, registered_user):
    """A userId in the body cannot assign the book to someone else."""
    data = create_book(auth_client, userId=registered_user["id"] + 100)
    assert data["userId"] == registered_user["id"]


def test_create_book_validation(auth_client):
    """Missing catalog id, bad status and out-of-range rating are 400."""
    assert auth_client.post("/books", json={"title": "No id"}).status_code == 400
    assert auth_client.post("/books", json={**BOOK, "status": "burned"}).status_code == 400
    assert auth_client.post("/books", json={**BOOK, "rating": 6}).status_code == 400


def test_books_require_session(client):
    """Test book endpoints without and with an invalid cookie."""
    assert client.get("/books").status_code == 401
    client.cookies.set("token", "bogus")
    assert client.get("/books").status_code == 403
    assert client.post("/books", json=BOOK).status_code == 403


def test_list_books(auth_client):
    """Test listing the shelf."""
    create_book(auth_client, title="First")
    create_book(auth_client, title="Second")

    response = auth_client.get("/books")
    assert response.status_code == 200
    assert {book["title"] for book in response.json()} == {"First", "Second"}


def test_update_book(auth_client):
    """Test updating reading status, dates and rating."""
    book = create_book(auth_client)

    response = auth_client.put(
        f"/books/{book['id']}",
        json={
            "status": "finished",
            "rating": 4.5,
            "startDate": "2025-01-02",
            "endDate": "2025-02-03",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "finished"
    assert data["rating"] == 4.5
    assert data["startDate"] == "2025-01-02"
    assert data["title"] == "The Analytical Engine"


def test_delete_book_removes_notes(auth_client):
    """Deleting a book deletes its notes."""
    book = create_book(auth_client)
    auth_client.post("/notes", json={"bookId": book["id"], "content": "Note G"})

    response = auth_client.delete(f"/books/{book['id']}")
    assert response.status_code == 200
    assert auth_client.get(f"/books/{book['id']}").status_code == 404
    assert auth_client.get("/notes").json() == []


def test_books_are_private_to_owner(auth_client, other_client):
    """Another user can neither read, change nor delete a private book."""
    book = create_book(auth_client)

    client = other_client()
    assert client.get("/books").json() == []
    assert client.get(f"/books/{book['id']}").status_code == 404
    assert client.put(f"/books/{book['id']}", json={"title": "Mine"}).status_code == 404
    assert client.delete(f"/books/{book['id']}").status_code == 404


def test_public_book_is_readable_by_anyone(auth_client):
    """Public books can be read without a session, but not changed."""
    book = create_book(auth_client, isPublic=True)

    auth_client.cookies.clear()
    assert auth_client.get(f"/books/{book['id']}").status_code == 200
    assert auth_client.put(f"/books/{book['id']}", json={"title": "x"}).status_code == 401


def test_create_and_list_notes(auth_client):
    """Test creating notes and filtering by book."""
    first = create_book(auth_client, title="First")
    second = create_book(auth_client, title="Second")

    response = auth_client.post("/notes", json={"bookId": first["id"], "content": "Loved it"})
    assert response.status_code == 201
    assert response.json()["isPublic"] is False
    auth_client.post("/notes", json={"bookId": second["id"], "content": "Meh"})

    assert len(auth_client.get("/notes").json()) == 2
    filtered = auth_client.get("/notes", params={"bookId": first["id"]}).json()
    assert [note["content"] for note in filtered] == ["Loved it"]


def test_note_requires_content(auth_client):
    """Test creating an empty note."""
    book = create_book(auth_client)
    response = auth_client.post("/notes", json={"bookId": book["id"], "content": ""})
    assert response.status_code == 400


def test_update_and_delete_note(auth_client):
    """Test editing and removing a note."""
    book = create_book(auth_client)
    note = auth_client.post("/notes", json={"bookId": book["id"], "content": "Draft"}).json()

    response = auth_client.put(f"/notes/{note['id']}", json={"content": "Final", "isPublic": True})
    assert response.status_code == 200
    assert response.json()["content"] == "Final"
    assert response.json()["isPublic"] is True

    assert auth_client.delete(f"/notes/{note['id']}").status_code == 200
    assert auth_client.get("/notes").json() == []


def test_notes_are_private_to_owner(auth_client, other_client):
    """Notes cannot be attached to, read, changed or deleted by another user."""
    book = create_book(auth_client)
    note = auth_client.post("/notes", json={"bookId": book["id"], "content": "Mine"}).json()

    client = other_client()
    assert client.post("/notes", json={"bookId": book["id"], "content": "x"}).status_code == 404
    assert client.get("/notes").json() == []
    assert client.put(f"/notes/{note['id']}", json={"content": "x"}).status_code == 404
    assert client.delete(f"/notes/{note['id']}").status_code == 404


@pytest.mark.parametrize("field", ["tags", "authors", "status", "isPublic"])
def test_update_book_rejects_null(auth_client, field):
    """Fields that can be left out cannot be cleared to null."""
    book = create_book(auth_client)
    response = auth_client.put(f"/books/{book['id']}", json={field: None})
    assert response.status_code == 400
    current = auth_client.get(f"/books/{book['id']}").json()
    for key in ["tags", "authors", "status", "isPublic"]:
        assert current[key] == book[key]


def test_update_book_can_clear_optional_fields(auth_client):
    """Rating and notes are nullable and can be cleared."""
    book = create_book(auth_client, rating=3, notes="Dense")
    response = auth_client.put(f"/books/{book['id']}", json={"rating": None, "notes": None})
    assert response.status_code == 200
    assert response.json()["rating"] is None
    assert response.json()["notes"] is None


@pytest.mark.parametrize("field", ["content", "isPublic"])
def test_update_note_rejects_null(auth_client, field):
    """Test nulling a note's content or visibility."""
    book = create_book(auth_client)
    note = auth_client.post("/notes", json={"bookId": book["id"], "content": "Keep"}).json()
    response = auth_client.put(f"/notes/{note['id']}", json={field: None})
    assert response.status_code == 400
    assert auth_client.get("/notes").json()[0]["content"] == "Keep"


def test_ids_out_of_range(auth_client):
    """Ids past the column range are rejected before reaching the database."""
    huge = "9" * 20
    assert auth_client.get(f"/books/{huge}").status_code == 400
    assert auth_client.put(f"/books/{huge}", json={"title": "x"}).status_code == 400
    assert auth_client.delete(f"/books/{huge}").status_code == 400
    assert auth_client.put(f"/notes/{huge}", json={"content": "x"}).status_code == 400
    assert auth_client.delete(f"/notes/{huge}").status_code == 400
    assert auth_client.get("/books/0").status_code == 400
