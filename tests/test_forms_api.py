from __future__ import annotations


def _skip(msg: str) -> None:  # pragma: no cover
    try:
        import pytest  # type: ignore

        pytest.skip(msg)
    except Exception:
        raise RuntimeError(msg)


def _client(**settings):
    from badgerblog.config import Settings
    from badgerblog.runtime.app import create_app

    try:
        from fastapi.testclient import TestClient
    except Exception as e:  # pragma: no cover
        _skip(f"TestClient not available ({e!r}); install test extras to run this test")
        return None

    return TestClient(create_app(Settings(**settings)))


def test_comment_rules_include_extension_rules_after_startup() -> None:
    with _client() as client:
        res = client.get("/api/forms/comment/rules")
        assert res.status_code == 200
        body = res.json()

    assert body["form"] == "comment"
    fields = body["fields"]

    assert [r["name"] for r in fields["email"]["rules"]] == ["required", "length", "email"]
    assert [r["name"] for r in fields["confirm_email"]["rules"]] == ["required", "email", "equalto"]
    assert [r["name"] for r in fields["url"]["rules"]] == ["length", "url"]
    assert [r["name"] for r in fields["attachment"]["rules"]] == ["extension"]

    attrs = fields["confirm_email"]["attributes"]
    assert attrs["data-val"] == "true"
    assert attrs["data-val-equalto-other"] == "*.email"
    assert attrs["data-val-required"] == "The Confirm e-mail field is required."

    assert fields["author"]["attributes"]["data-val-length-max"] == "100"


def test_post_rules() -> None:
    with _client() as client:
        fields = client.get("/api/forms/post/rules").json()["fields"]

    assert [r["name"] for r in fields["published_at"]["rules"]] == ["date"]
    assert [r["name"] for r in fields["tags"]["rules"]] == ["length"]
    assert fields["title"]["rules"][1]["message"] == (
        "The field Title must be a string with a minimum length of 1 and a maximum length of 200."
    )


def test_without_client_validation_only_builtin_rules_are_served() -> None:
    with _client(client_validation=False) as client:
        adapters = client.get("/api/validation/adapters").json()["adapters"]
        fields = client.get("/api/forms/comment/rules").json()["fields"]

    assert adapters == ["length", "required"]
    assert [r["name"] for r in fields["email"]["rules"]] == ["required", "length"]
    assert [r["name"] for r in fields["confirm_email"]["rules"]] == ["required"]
    assert "attachment" not in fields


def test_adapters_and_forms_listing() -> None:
    with _client() as client:
        adapters = client.get("/api/validation/adapters").json()["adapters"]
        forms = client.get("/api/forms").json()["forms"]

    assert "email" in adapters and "equalto" in adapters and "required" in adapters
    assert forms == ["comment", "post"]


def test_unknown_form_is_404() -> None:
    with _client() as client:
        assert client.get("/api/forms/guestbook/rules").status_code == 404
        assert client.post("/api/forms/guestbook/validate", json={}).status_code == 404


def test_validate_accepts_good_comment() -> None:
    with _client() as client:
        res = client.post(
            "/api/forms/comment/validate",
            json={
                "author": "  Reader ",
                "email": "reader@example.com",
                "confirm_email": "reader@example.com",
                "url": "",
                "body": "Nice post.",
                "attachment": "diagram.PNG",
            },
        )

    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert body["data"]["author"] == "Reader"
    assert body["data"]["url"] is None


def test_validate_reports_errors_as_422() -> None:
    with _client() as client:
        res = client.post(
            "/api/forms/comment/validate",
            json={
                "author": "",
                "email": "not-an-email",
                "confirm_email": "reader@example.com",
                "body": "x",
                "attachment": "payload.exe",
            },
        )

    assert res.status_code == 422
    body = res.json()
    assert body["ok"] is False
    bad_fields = {e["loc"][0] for e in body["errors"] if e["loc"]}
    assert {"author", "email", "attachment"} <= bad_fields


def test_validate_rejects_confirm_email_differing_only_in_case() -> None:
    # equalto is an exact match in the browser; the server must agree.
    with _client() as client:
        res = client.post(
            "/api/forms/comment/validate",
            json={
                "author": "Reader",
                "email": "a@b.co",
                "confirm_email": "A@B.CO",
                "body": "Nice post.",
            },
        )

    assert res.status_code == 422
    body = res.json()
    assert body["ok"] is False
    assert any("do not match" in e["msg"] for e in body["errors"])


def test_validate_post_slug() -> None:
    with _client() as client:
        ok = client.post(
            "/api/forms/post/validate",
            json={"title": "Hello", "slug": "hello-world", "body": "...", "published_at": "2012-03-01"},
        )
        bad = client.post("/api/forms/post/validate", json={"title": "Hello", "slug": "Hello World", "body": "..."})

    assert ok.status_code == 200
    assert ok.json()["data"]["published_at"] == "2012-03-01"
    assert bad.status_code == 422
