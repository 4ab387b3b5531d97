#!/usr/bin/env python3
"""
Inventory API -- catalog CRUD with bearer-token auth and admin-gated mutations.

Usage:
  python main.py                      # serve on 0.0.0.0:8080
  python main.py --port 9000
  python main.py --host 127.0.0.1 --reload
  python main.py --list-routes        # print the endpoint table and exit

Environment variables (see core/config.py for the full list):
  SECRET_KEY        Token signing key, at least 32 characters. Required unless DEBUG=true.
  DATABASE_URL      SQLAlchemy URL. Defaults to inventory.db next to this file.
  SEED_SAMPLE_DATA  Insert sample accounts and products into empty tables (default true).
"""

import argparse

import uvicorn

# (method, path, access) in the order they are documented to clients.
ENDPOINTS: list[tuple[str, str, str]] = [
    ("POST", "/api/login", "public"),
    ("POST", "/api/register", "public"),
    ("GET", "/api/profile", "authenticated"),
    ("GET", "/api/products", "public"),
    ("GET", "/api/products/{id}", "public"),
    ("GET", "/api/products/category/{category}", "public"),
    ("POST", "/api/products", "admin"),
    ("PUT", "/api/products/{id}", "admin"),
    ("DELETE", "/api/products/{id}", "admin"),
    ("GET", "/api/health", "public"),
]


def format_endpoints() -> str:
    width = max(len(method) for method, _, _ in ENDPOINTS)
    lines = ["Available endpoints:"]
    for method, path, access in ENDPOINTS:
        suffix = f" ({access})" if access != "public" else ""
        lines.append(f"  {method.ljust(width)}  {path}{suffix}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-api",
        description="Inventory API -- catalog CRUD with bearer-token auth.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Port to listen on (default: 8080)")
    parser.add_argument("--reload", action="store_true", help="Restart the server when source files change")
    parser.add_argument("--list-routes", action="store_true", help="Print the endpoint table and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    print(format_endpoints())
    if args.list_routes:
        return 0
    print(f"\nServer starting on {args.host}:{args.port}")
    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
