"""Hello World: the smallest warble app.

Demonstrates exact routes, text/JSON/HTML helpers, query lookups, a
custom status and header, and the built-in 404 fallback.

Run:
    python app.py
"""

import warble
from warble import H

engine = warble.new()


def ping(ctx):
    ctx.string(200, "pong")


engine.get("/ping", ping)


@engine.get("/")
def index(ctx):
    ctx.html(200, "<h1>Hello, World!</h1>")


@engine.get("/greet")
def greet(ctx):
    name = ctx.query("name") or "stranger"
    ctx.string(200, "Hello, %s!", name)


@engine.get("/api/status")
def status(ctx):
    ctx.json(200, H(status="ok", version=warble.__version__))


@engine.post("/custom")
def custom(ctx):
    ctx.set_header("X-Custom", "warble")
    ctx.string(201, "Created")


if __name__ == "__main__":
    engine.run(":8080")
