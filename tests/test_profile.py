"""Profile slug and public profile tests."""

from conftest import PASSWORD


def test_set_slug(auth_client, registered_user):
    """Test assigning a profile slug."""
    response = auth_client.put("/users/slug", json={"slug": "Ada-L"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "profileSlug": "ada-l"}

    me = auth_client.get("/auth/me").json()
    assert me["profileSlug"] == "ada-l"
    assert me["publicId"] == "ada-l"


def test_set_slug_invalid(auth_client):
    """Empty, too long and badly shaped slugs are 400."""
    for slug in ["", "   ", "ab", "x" * 21, "no spaces", "slash/es"]:
        response = auth_client.put("/users/slug", json={"slug": slug})
        assert response.status_code == 400, slug


def test_set_slug_requires_session(client):
    """Test slug endpoint without and with an invalid cookie."""
    assert client.put("/users/slug", json={"slug": "someone"}).status_code == 401
    client.cookies.set("token", "bogus")
    assert client.put("/users/slug", json={"slug": "someone"}).status_code == 403


def test_set_slug_taken(client, register_user, login_user):
    """Slugs are unique across users, ignoring case; re-setting your own is fine."""
    register_user(email="ada@example.com")
    login_user(email="ada@example.com")
    assert client.put("/users/slug", json={"slug": "analyst"}).status_code == 200
    assert client.put("/users/slug", json={"slug": "analyst"}).status_code == 200

    client.cookies.clear()
    register_user(email="charles@example.com", name="Charles Babbage")
    login_user(email="charles@example.com", password=PASSWORD)
    response = client.put("/users/slug", json={"slug": "ANALYST"})
    assert response.status_code == 409


def test_public_profile(auth_client, registered_user):
    """Profile shows only public books and notes, and no private account data."""
    public = auth_client.post(
        "/books", json={"googleId": "pub", "title": "Shared", "isPublic": True}
    ).json()
    auth_client.post("/books", json={"googleId": "priv", "title": "Hidden"})
    auth_client.post("/notes", json={"bookId": public["id"], "content": "Seen", "isPublic": True})
    auth_client.post("/notes", json={"bookId": public["id"], "content": "Unseen"})
    auth_client.put("/users/slug", json={"slug": "ada"})

    auth_client.cookies.clear()
    for identifier in ["ada", str(registered_user["id"])]:
        response = auth_client.get(f"/profile/{identifier}")
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == registered_user["id"]
        assert data["user"]["profileSlug"] == "ada"
        assert "email" not in data["user"]
        assert "passwordHash" not in data["user"]
        assert [book["title"] for book in data["books"]] == ["Shared"]
        assert [note["content"] for note in data["notes"]] == ["Seen"]


def test_public_profile_unknown(client):
    """Test profile lookup for a missing user."""
    assert client.get("/profile/nobody").status_code == 404
    assert client.get("/profile/999999").status_code == 404


def test_public_profile_odd_identifiers(client):
    """Non-ASCII digits and ids past the column range are plain misses."""
    for identifier in ["²", "٣", "9" * 20]:
        assert client.get(f"/profile/{identifier}").status_code == 404, identifier


def test_numeric_slug_rejected(auth_client, registered_user):
    """An all-digit slug could shadow another user's id, so it is refused."""
    for slug in ["123", str(registered_user["id"])]:
        response = auth_client.put("/users/slug", json={"slug": slug})
        assert response.status_code == 400, slug
    assert auth_client.get("/auth/me").json()["profileSlug"] is None


def test_numeric_id_finds_user_with_slug(client, register_user, login_user):
    """Another user's slug never takes over an id lookup."""
    first_id = register_user(email="ada@example.com")
    register_user(email="charles@example.com", name="Charles Babbage")
    login_user(email="charles@example.com")
    assert client.put("/users/slug", json={"slug": "reader2"}).status_code == 200

    client.cookies.clear()
    response = client.get(f"/profile/{first_id}")
    assert response.status_code == 200
    assert response.json()["user"]["id"] == first_id
