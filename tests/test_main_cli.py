"""
tests/test_main_cli.py -- Command-line entry point in main.py.

uvicorn.run is patched out; only argument handling and the endpoint banner
are exercised.
"""

from __future__ import annotations

from unittest.mock import patch

import main


def test_list_routes_prints_and_exits(capsys) -> None:
    with patch("main.uvicorn.run") as run:
        assert main.main(["--list-routes"]) == 0
    run.assert_not_called()
    out = capsys.readouterr().out
    assert out.startswith("Available endpoints:")
    assert "/api/products/category/{category}" in out
    assert "DELETE  /api/products/{id} (admin)" in out


def test_defaults_start_server() -> None:
    with patch("main.uvicorn.run") as run:
        assert main.main([]) == 0
    run.assert_called_once_with("asgi:app", host="0.0.0.0", port=8080, reload=False)


def test_host_port_reload_forwarded() -> None:
    with patch("main.uvicorn.run") as run:
        main.main(["--host", "127.0.0.1", "--port", "9000", "--reload"])
    run.assert_called_once_with("asgi:app", host="127.0.0.1", port=9000, reload=True)


def test_every_endpoint_is_routed() -> None:
    from api.main import app

    paths = app.openapi()["paths"]
    routed = {(method.upper(), path) for path, ops in paths.items() for method in ops}
    for method, path, _access in main.ENDPOINTS:
        assert (method, path.replace("{id}", "{product_id}")) in routed
