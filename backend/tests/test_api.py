import pytest
from fastapi.testclient import TestClient

from main import create_app
from utils.data_store import TableStore
from utils.settings import Settings


def _csv(text, content_type="text/csv", name="users.csv"):
    return {"file": (name, text.encode("utf-8"), content_type)}


# ---------------------------------------------------------------------------
# POST /api/files
# ---------------------------------------------------------------------------

def test_upload_success(client, store):
    resp = client.post("/api/files", files=_csv("a,b\n1,2\n3,4"))
    assert resp.status_code == 200
    assert resp.json() == {"message": "File uploaded successfully"}
    assert store.snapshot().columns == ("a", "b")


def test_upload_without_file(client, store):
    resp = client.post("/api/files")
    assert resp.status_code == 400
    assert resp.json() == {"message": "A file must be provided"}
    assert store.snapshot() is None


def test_upload_other_field_only(client):
    resp = client.post("/api/files", files={"other": ("x.csv", b"a,b\n1,2", "text/csv")})
    assert resp.status_code == 400
    assert resp.json() == {"message": "A file must be provided"}


def test_upload_file_field_as_plain_text(client, store):
    resp = client.post("/api/files", data={"file": "a,b\n1,2"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "A file must be provided"}
    assert store.snapshot() is None


def test_upload_wrong_type(client):
    resp = client.post("/api/files", files=_csv("a,b\n1,2", content_type="application/json"))
    assert resp.status_code == 400
    assert resp.json() == {"message": "The file type must be CSV"}


def test_upload_empty_file(client):
    resp = client.post("/api/files", files=_csv(""))
    assert resp.status_code == 400
    assert resp.json() == {"message": "The file must not be empty"}


def test_upload_header_only(client):
    resp = client.post("/api/files", files=_csv("a,b,c\n"))
    assert resp.status_code == 400
    assert resp.json() == {"message": "Send a file with records"}


def test_upload_not_utf8(client):
    resp = client.post("/api/files", files={"file": ("x.csv", b"a,b\n\xff,1", "text/csv")})
    assert resp.status_code == 400
    assert resp.json() == {"message": "The file must be UTF-8 encoded"}


def test_upload_too_large(store):
    client = TestClient(create_app(settings=Settings(max_upload_bytes=8), store=store))
    resp = client.post("/api/files", files=_csv("a,b\n1,2\n3,4"))
    assert resp.status_code == 413
    assert resp.json() == {"message": "The file is too large"}
    assert store.snapshot() is None


def test_rejected_upload_keeps_previous_table(client, store):
    client.post("/api/files", files=_csv("a,b\n1,2"))
    resp = client.post("/api/files", files=_csv("x,y\n"))
    assert resp.status_code == 400
    assert store.snapshot().columns == ("a", "b")


def test_upload_replaces_previous_table(client):
    client.post("/api/files", files=_csv("a,b\n1,2"))
    client.post("/api/files", files=_csv("name\nZoe"))
    assert client.get("/api/users").json() == {"data": [{"name": "Zoe"}]}


# ---------------------------------------------------------------------------
# GET /api/users
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("params", [{}, {"q": "ana"}])
def test_users_before_upload(client, params):
    resp = client.get("/api/users", params=params)
    assert resp.status_code == 200
    assert resp.json() == {"message": "There is not data, upload a CSV file first"}


def test_round_trip(client):
    client.post("/api/files", files=_csv("a,b\n1,2\n3,4"))
    resp = client.get("/api/users")
    assert resp.status_code == 200
    assert resp.json() == {"data": [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]}


def test_search(client):
    client.post("/api/files", files=_csv("name,city\nAna,Lima\nBob,lima\nCarla,Quito"))
    resp = client.get("/api/users", params={"q": "lim"})
    assert resp.json() == {"data": [{"name": "Ana", "city": "Lima"}, {"name": "Bob", "city": "lima"}]}


def test_search_empty_term_returns_all(client):
    client.post("/api/files", files=_csv("name\nAna\nBob"))
    assert client.get("/api/users?q=").json() == {"data": [{"name": "Ana"}, {"name": "Bob"}]}


def test_search_duplicates_per_matching_cell(client):
    client.post("/api/files", files=_csv("first,last\nAnna,Hanna"))
    assert len(client.get("/api/users", params={"q": "nna"}).json()["data"]) == 2


def test_search_short_row_renders_null(client):
    client.post("/api/files", files=_csv("a,b\n1"))
    assert client.get("/api/users").json() == {"data": [{"a": "1", "b": None}]}


def test_search_no_match_empty_list(client):
    client.post("/api/files", files=_csv("name\nAna"))
    resp = client.get("/api/users", params={"q": "zzz"})
    assert resp.status_code == 200
    assert resp.json() == {"data": []}


def test_search_no_match_not_found_option(store):
    client = TestClient(create_app(settings=Settings(not_found_on_empty_match=True), store=store))
    client.post("/api/files", files=_csv("name\nAna"))

    resp = client.get("/api/users", params={"q": "zzz"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not found"}

    assert client.get("/api/users", params={"q": "an"}).status_code == 200


def test_search_dedupe_option():
    settings = Settings(dedupe_matches=True)
    client = TestClient(create_app(settings=settings))
    client.post("/api/files", files=_csv("first,last\nAnna,Hanna"))
    assert client.get("/api/users", params={"q": "nna"}).json() == {
        "data": [{"first": "Anna", "last": "Hanna"}]
    }


# ---------------------------------------------------------------------------
# Plumbing
# ---------------------------------------------------------------------------

def test_response_time_header(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["X-Response-Time"].endswith("ms")


def test_unknown_route_uses_message_envelope(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found"}


def test_unexpected_error_is_hidden():
    class BrokenStore(TableStore):
        def query(self, term=None):
            raise RuntimeError("boom")

    client = TestClient(create_app(settings=Settings(), store=BrokenStore()), raise_server_exceptions=False)
    resp = client.get("/api/users")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


def test_openapi_lists_routes(client):
    paths = client.get("/openapi.json").json()["paths"]
    assert "/api/files" in paths
    assert "/api/users" in paths
    body = paths["/api/files"]["post"]["requestBody"]["content"]["multipart/form-data"]
    assert "file" in body["schema"]["properties"]
