from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pastebin.config import AppConfig
from pastebin.domain.identifiers import ALPHABET
from pastebin.main import create_app


@pytest.fixture
def client(cfg: AppConfig) -> TestClient:
    return TestClient(create_app(cfg))


def test_root_redirects_to_fresh_identifier(client: TestClient, cfg: AppConfig) -> None:
    resp = client.get("/", follow_redirects=False)

    assert resp.status_code == 302
    location = resp.headers["location"]
    assert location.startswith("/")
    ident = location[1:]
    assert len(ident) == cfg.id_length
    assert set(ident) <= set(ALPHABET)
    # No storage interaction until the page is opened.
    assert not (cfg.storage_root / ident).exists()

    page = client.get(location)

    assert page.status_code == 200
    assert page.headers["content-type"].startswith("text/html")
    assert f"<title>{ident}</title>" in page.text
    assert (cfg.storage_root / ident).read_bytes() == b""


def test_post_then_get(client: TestClient, cfg: AppConfig) -> None:
    resp = client.post("/abc123", content=b"hello")

    assert resp.status_code == 200
    assert resp.json() == {"status": "Success"}
    assert (cfg.storage_root / "abc123").read_bytes() == b"hello"

    page = client.get("/abc123")

    assert page.status_code == 200
    assert "<title>abc123</title>" in page.text
    assert ">hello</textarea>" in page.text


def test_second_post_wins(client: TestClient, cfg: AppConfig) -> None:
    assert client.post("/same", content=b"B1").status_code == 200
    assert client.post("/same", content=b"B2").status_code == 200

    assert (cfg.storage_root / "same").read_bytes() == b"B2"


def test_empty_post_truncates(client: TestClient, cfg: AppConfig) -> None:
    client.post("/p", content=b"something")

    resp = client.post("/p", content=b"")

    assert resp.status_code == 200
    assert (cfg.storage_root / "p").read_bytes() == b""


def test_page_escapes_content(client: TestClient) -> None:
    client.post("/xss", content=b"<script>alert(1)</script>")

    page = client.get("/xss")

    assert "<script>alert(1)</script>" not in page.text
    assert "&lt;script&gt;" in page.text


def test_storage_failure_is_500_json(client: TestClient, cfg: AppConfig) -> None:
    (cfg.storage_root / "dir").mkdir(parents=True)

    get_resp = client.get("/dir")
    post_resp = client.post("/dir", content=b"x")

    for resp in (get_resp, post_resp):
        assert resp.status_code == 500
        assert resp.json()["error"]


def test_storage_root_blocked_by_file(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")
    app = create_app(AppConfig(port=":0", storage_root=blocker / "sub", id_length=4))

    resp = TestClient(app).post("/abc", content=b"x")

    assert resp.status_code == 500
    assert "error" in resp.json()


def test_static_assets_served(client: TestClient) -> None:
    resp = client.get("/static/style.css")

    assert resp.status_code == 200
    assert "textarea" in resp.text


def test_identifier_escaping_root_is_400(client: TestClient, cfg: AppConfig) -> None:
    base = cfg.storage_root.parent
    before = sorted(base.rglob("*"))

    # "%2e%2e" reaches the route as ".." once percent-decoded.
    get_resp = client.get("/%2e%2e")
    post_resp = client.post("/%2e%2e", content=b"x")

    for resp in (get_resp, post_resp):
        assert resp.status_code == 400
        assert "error" in resp.json()
    assert sorted(base.rglob("*")) == before
    assert not cfg.storage_root.exists()
