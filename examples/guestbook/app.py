"""Guestbook: form posts, JSON listings, and file uploads.

Demonstrates ``ctx.post_form()`` (body first, then query string),
dataclass payloads in ``ctx.json()``, raw bodies with ``ctx.data()``,
and multipart uploads through ``ctx.request.form.files``.

Entries live in memory; restarting the app clears them.

Run:
    python app.py
"""

from dataclasses import dataclass

import warble


@dataclass(frozen=True, slots=True)
class Entry:
    name: str
    message: str


entries: list[Entry] = []

engine = warble.new()


@engine.post("/sign")
def sign(ctx):
    name = ctx.post_form("name")
    message = ctx.post_form("message")
    if not name or not message:
        ctx.string(400, "name and message are required\n")
        return
    entries.append(Entry(name, message))
    ctx.json(201, {"entry": entries[-1], "count": len(entries)})


@engine.get("/entries")
def list_entries(ctx):
    ctx.json(200, entries)


@engine.post("/avatar")
def avatar(ctx):
    upload = ctx.request.form.files.get("avatar")
    if upload is None:
        ctx.string(400, "missing avatar\n")
        return
    ctx.set_header("Content-Type", upload.content_type)
    ctx.set_header("X-Filename", upload.filename)
    ctx.data(200, upload.content)


if __name__ == "__main__":
    engine.run(":8080")
