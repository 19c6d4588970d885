"""Tests for waypoint.app — registration, freezing, ASGI and lifespan."""

import threading

import pytest

from waypoint import App, AppConfig, json_response
from waypoint.errors import ConfigurationError, MalformedPatternError
from waypoint.testing import TestClient, build_request


class TestRegistration:
    def test_route_decorator_returns_function(self) -> None:
        app = App()

        @app.route("GET", "/")
        def root(request, params):
            return "root"

        assert root(None, {}) == "root"
        assert len(app.routes) == 1
        assert app.routes[0].name == "root"

    @pytest.mark.parametrize("verb", ["get", "post", "put", "patch", "delete"])
    def test_shortcuts(self, verb: str) -> None:
        app = App()

        @getattr(app, verb)("/items/:id")
        def handler(request, params):
            return "ok"

        assert app.routes[0].method == verb.upper()
        assert app.routes[0].pattern == "/items/:id"

    def test_add_route(self) -> None:
        app = App()
        route = app.add_route("get", "/", lambda request, params: "ok", name="root")
        assert route.method == "GET"
        assert route.name == "root"
        assert app.routes == (route,)

    def test_malformed_pattern_fails_at_decoration(self) -> None:
        app = App()
        with pytest.raises(MalformedPatternError):

            @app.get("items/:id")
            def handler(request, params):
                return "never"

        assert app.routes == ()

    def test_routes_listed_in_registration_order(self) -> None:
        app = App()
        app.get("/items/:id")(lambda request, params: "id")
        app.get("/items/latest")(lambda request, params: "latest")
        app.post("/items")(lambda request, params: "add")
        assert [(r.method, r.pattern) for r in app.routes] == [
            ("GET", "/items/:id"),
            ("GET", "/items/latest"),
            ("POST", "/items"),
        ]

    def test_default_config(self) -> None:
        app = App()
        assert app.config == AppConfig()

    def test_custom_config(self) -> None:
        config = AppConfig(debug=True, port=3000)
        assert App(config).config is config


class TestFreeze:
    async def test_cannot_register_after_dispatch(self) -> None:
        app = App()
        app.get("/")(lambda request, params: "root")
        await app.dispatch(build_request("GET", "/"))

        with pytest.raises(ConfigurationError, match="after it has started serving"):
            app.get("/late")(lambda request, params: "late")

    def test_freeze_builds_one_dispatcher(self) -> None:
        app = App()
        app.get("/")(lambda request, params: "root")
        barrier = threading.Barrier(8)
        seen = []

        def freeze() -> None:
            barrier.wait()
            seen.append(app._ensure_frozen())

        threads = [threading.Thread(target=freeze) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 8
        assert all(d is seen[0] for d in seen)

    def test_dispatcher_uses_config(self) -> None:
        app = App(AppConfig(debug=True, handler_timeout=2.5))
        dispatcher = app._ensure_frozen()
        assert dispatcher.debug is True
        assert dispatcher.handler_timeout == 2.5


class TestDispatch:
    async def test_direct_dispatch(self) -> None:
        app = App()

        @app.get("/items/:id")
        def get_item(request, params):
            return json_response({"id": params["id"]})

        response = await app.dispatch(build_request("GET", "/items/3"))
        assert response.json == {"id": "3"}

    async def test_end_to_end_via_client(self) -> None:
        app = App()
        items: list[dict] = []

        @app.get("/")
        def root(request, params):
            return "Hello world at root!"

        @app.get("/items")
        def list_items(request, params):
            return json_response(items)

        @app.get("/items/:id")
        def get_item(request, params):
            return json_response(items[int(params["id"])])

        @app.post("/items")
        async def add_item(request, params):
            items.append(await request.json())
            return "OK"

        async with TestClient(app) as client:
            assert (await client.get("/")).text == "Hello world at root!"
            assert (await client.post("/items", json={"name": "pen"})).text == "OK"

            listing = await client.get("/items")
            assert listing.content_type == "application/json"
            assert listing.json == [{"name": "pen"}]
            assert (await client.get("/items/0")).json == {"name": "pen"}
            assert (await client.get("/nope")).status == 404

    async def test_unencodable_header_is_500_over_asgi(self) -> None:
        app = App()
        app.get("/")(lambda request, params: ("priced", 200, {"X-Unit": "€"}))

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 500
            assert "latin-1" in response.text

    async def test_custom_headers_reach_client(self) -> None:
        app = App()
        app.get("/")(lambda request, params: ("created", 201, {"X-Item": "1"}))

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 201
            assert ("x-item", "1") in response.headers


class TestRun:
    def test_explicit_zero_port_is_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        monkeypatch.setattr(
            "waypoint.server.serve.run_server",
            lambda app, host, port, **kwargs: calls.append((host, port)),
        )
        App(AppConfig(port=9100)).run(port=0)
        assert calls == [("127.0.0.1", 0)]

    def test_defaults_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        monkeypatch.setattr(
            "waypoint.server.serve.run_server",
            lambda app, host, port, **kwargs: calls.append((host, port, kwargs["reload"])),
        )
        App(AppConfig(host="0.0.0.0", port=9100, debug=True)).run()
        assert calls == [("0.0.0.0", 9100, True)]


class TestLifespan:
    async def _run_lifespan(self, app: App) -> list[dict]:
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict] = []

        async def receive() -> dict:
            return incoming.pop(0)

        async def send(message: dict) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        return sent

    async def test_startup_and_shutdown(self) -> None:
        app = App()
        app.get("/")(lambda request, params: "root")

        sent = await self._run_lifespan(app)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert app._frozen is True

    async def test_startup_failure_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        app = App()

        def broken_freeze() -> None:
            raise ConfigurationError("broken table")

        monkeypatch.setattr(App, "_freeze", lambda self: broken_freeze())

        sent = await self._run_lifespan(app)
        assert sent == [{"type": "lifespan.startup.failed", "message": "broken table"}]

    async def test_non_http_scope_ignored(self) -> None:
        app = App()
        sent: list[dict] = []

        async def receive() -> dict:
            return {"type": "websocket.connect"}

        async def send(message: dict) -> None:
            sent.append(message)

        await app({"type": "websocket"}, receive, send)
        assert sent == []
