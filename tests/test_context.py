"""Tests for warble.context: per-request read/write helpers."""

import json
import logging
import math
from dataclasses import dataclass

import pytest

from warble.context import Context
from warble.http.request import Request
from warble.http.response import ResponseWriter


def _make_scope(**overrides: object) -> dict[str, object]:
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": [],
    }
    base.update(overrides)
    return base


def _make_receive(body: bytes = b""):
    sent = False

    async def receive():
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return receive


def _ctx(**overrides: object) -> Context:
    return Context(ResponseWriter(), Request.from_asgi(_make_scope(**overrides), _make_receive()))


async def _form_ctx(body: bytes, *, method: str = "POST", query: bytes = b"") -> Context:
    scope = _make_scope(
        method=method,
        query_string=query,
        headers=[(b"content-type", b"application/x-www-form-urlencoded")],
    )
    request = Request.from_asgi(scope, _make_receive(body))
    await request.load_form(max_size=1024)
    return Context(ResponseWriter(), request)


class TestContextFields:
    def test_resolved_from_request(self) -> None:
        ctx = _ctx(method="POST", path="/users")
        assert ctx.method == "POST"
        assert ctx.path == "/users"
        assert ctx.status_code == 0

    def test_repr(self) -> None:
        assert repr(_ctx(path="/x")) == "<Context GET /x>"


class TestQuery:
    def test_first_value(self) -> None:
        ctx = _ctx(query_string=b"tag=a&tag=b")
        assert ctx.query("tag") == "a"

    def test_missing_is_empty_string(self) -> None:
        assert _ctx().query("missing") == ""

    def test_blank_value(self) -> None:
        assert _ctx(query_string=b"flag=").query("flag") == ""

    def test_percent_decoded(self) -> None:
        ctx = _ctx(query_string=b"name=J%C3%BCrgen&q=a+b")
        assert ctx.query("name") == "Jürgen"
        assert ctx.query("q") == "a b"


class TestPostForm:
    async def test_body_value(self) -> None:
        ctx = await _form_ctx(b"name=alice")
        assert ctx.post_form("name") == "alice"

    async def test_body_wins_over_query(self) -> None:
        ctx = await _form_ctx(b"name=body", query=b"name=query")
        assert ctx.post_form("name") == "body"

    async def test_falls_back_to_query(self) -> None:
        ctx = await _form_ctx(b"other=1", query=b"name=query")
        assert ctx.post_form("name") == "query"

    async def test_missing_is_empty_string(self) -> None:
        ctx = await _form_ctx(b"other=1")
        assert ctx.post_form("name") == ""

    async def test_get_reads_query(self) -> None:
        ctx = await _form_ctx(b"name=body", method="GET", query=b"name=query")
        assert ctx.post_form("name") == "query"


class TestStatusAndHeaders:
    def test_status_records_and_commits(self) -> None:
        ctx = _ctx()
        ctx.status(204)
        assert ctx.status_code == 204
        assert ctx.writer.committed
        assert ctx.writer.to_response().status == 204

    def test_set_header_last_wins(self) -> None:
        ctx = _ctx()
        ctx.set_header("X-Mode", "a")
        ctx.set_header("x-mode", "b")
        ctx.status(200)
        assert ctx.writer.to_response().header("X-Mode") == "b"

    def test_header_after_status_not_sent(self) -> None:
        ctx = _ctx()
        ctx.status(200)
        ctx.set_header("X-Late", "1")
        assert ctx.writer.to_response().header("X-Late") is None

    def test_second_status_ignored_on_wire(self, caplog) -> None:
        ctx = _ctx()
        with caplog.at_level(logging.WARNING, logger="warble.server"):
            ctx.status(201)
            ctx.status(500)
        assert ctx.writer.to_response().status == 201
        assert ctx.status_code == 500
        assert "superfluous" in caplog.text

    def test_custom_header_with_helper(self) -> None:
        ctx = _ctx()
        ctx.set_header("X-Request-Id", "abc")
        ctx.string(200, "ok")
        assert ctx.writer.to_response().header("x-request-id") == "abc"


class TestString:
    def test_formatted(self) -> None:
        ctx = _ctx()
        ctx.string(201, "hello %s", "world")
        response = ctx.writer.to_response()

        assert response.status == 201
        assert response.content_type == "text/plain"
        assert response.text == "hello world"

    def test_multiple_values(self) -> None:
        ctx = _ctx()
        ctx.string(200, "%s is %d", "answer", 42)
        assert ctx.writer.to_response().text == "answer is 42"

    def test_no_values_written_verbatim(self) -> None:
        ctx = _ctx()
        ctx.string(200, "100% done")
        assert ctx.writer.to_response().text == "100% done"

    def test_unicode_encoded_utf8(self) -> None:
        ctx = _ctx()
        ctx.string(200, "héllo")
        assert ctx.writer.to_response().body == "héllo".encode()


class TestJSON:
    def test_mapping(self) -> None:
        ctx = _ctx()
        ctx.json(200, {"a": 1})
        response = ctx.writer.to_response()

        assert response.status == 200
        assert response.content_type == "application/json"
        assert json.loads(response.body) == {"a": 1}

    def test_compact_with_trailing_newline(self) -> None:
        ctx = _ctx()
        ctx.json(200, {"a": [1, 2]})
        assert ctx.writer.to_response().text == '{"a":[1,2]}\n'

    def test_list_payload(self) -> None:
        ctx = _ctx()
        ctx.json(202, [1, "two", None])
        response = ctx.writer.to_response()
        assert response.status == 202
        assert json.loads(response.body) == [1, "two", None]

    def test_dataclass_encoded_as_object(self) -> None:
        @dataclass
        class User:
            name: str
            age: int

        ctx = _ctx()
        ctx.json(200, {"user": User("alice", 30)})
        assert json.loads(ctx.writer.to_response().body) == {"user": {"name": "alice", "age": 30}}

    def test_unserializable_is_500_with_error_text(self) -> None:
        ctx = _ctx()
        ctx.json(200, {"value": object()})
        response = ctx.writer.to_response()

        assert response.status == 500
        assert ctx.status_code == 500
        assert response.content_type == "text/plain; charset=utf-8"
        assert "not JSON serializable" in response.text
        assert response.text.endswith("\n")

    def test_nan_is_rejected(self) -> None:
        ctx = _ctx()
        ctx.json(200, {"x": math.nan})
        assert ctx.writer.to_response().status == 500

    def test_failure_leaves_no_json_content_type(self) -> None:
        ctx = _ctx()
        ctx.json(200, {1, 2})
        assert ctx.writer.to_response().content_type != "application/json"

    def test_failure_after_committed_status_keeps_it(self) -> None:
        ctx = _ctx()
        ctx.status(201)
        ctx.json(200, {"value": object()})
        response = ctx.writer.to_response()

        assert response.status == 201
        assert ctx.status_code == 201
        assert "not JSON serializable" in response.text

    def test_failure_logged(self, caplog) -> None:
        ctx = _ctx(path="/broken")
        with caplog.at_level(logging.WARNING, logger="warble.server"):
            ctx.json(200, object())
        assert "JSON encoding failed for GET /broken" in caplog.text


class TestData:
    def test_raw_bytes_no_content_type(self) -> None:
        ctx = _ctx()
        ctx.data(200, b"\x00\x01binary")
        response = ctx.writer.to_response()

        assert response.status == 200
        assert response.body == b"\x00\x01binary"
        assert response.content_type is None

    def test_keeps_header_set_beforehand(self) -> None:
        ctx = _ctx()
        ctx.set_header("Content-Type", "image/png")
        ctx.data(200, b"png")
        assert ctx.writer.to_response().content_type == "image/png"


class TestHTML:
    def test_verbatim_markup(self) -> None:
        ctx = _ctx()
        ctx.html(200, "<h1>Hi & <b>bye</b></h1>")
        response = ctx.writer.to_response()

        assert response.status == 200
        assert response.content_type == "text/html"
        assert response.text == "<h1>Hi & <b>bye</b></h1>"


class TestFormatErrors:
    def test_mismatched_format_raises(self) -> None:
        ctx = _ctx()
        with pytest.raises(TypeError):
            ctx.string(200, "%d", "not a number")
