#!/usr/bin/env python3
"""Diagram graph CLI - subcommands for the graph backend. Every command prints one JSON document."""

import argparse
import json
import sys
import urllib.request
import urllib.error
import urllib.parse

from .config import get_settings


def _json_out(data):
    print(json.dumps(data))
    sys.exit(0)


def _api_request(method, endpoint, data=None, params=None):
    """Make a request to the diagram graph backend."""
    settings = get_settings()
    url = f"{settings.api_base}{endpoint}"

    if params:
        filtered = {k: v for k, v in params.items() if v is not None}
        if filtered:
            url = f"{url}?{urllib.parse.urlencode(filtered)}"

    headers = {"Content-Type": "application/json"}
    body = json.dumps(data).encode() if data is not None else None

    req = urllib.request.Request(url, data=body, headers=headers, method=method)

    try:
        with urllib.request.urlopen(req, timeout=settings.request_timeout) as response:
            return json.loads(response.read().decode())
    except urllib.error.HTTPError as e:
        error_body = e.read().decode()
        try:
            error_data = json.loads(error_body)
            _json_out({"status": "error", "error": f"API error: {error_data.get('detail', 'Unknown error')}"})
        except json.JSONDecodeError:
            _json_out({"status": "error", "error": f"API error ({e.code}): {error_body}"})
    except urllib.error.URLError as e:
        _json_out({"status": "error", "error": f"Connection failed: {e.reason}. Is the backend running?"})


def _fields(args, names):
    """Collect the given attributes of args into a dict, skipping unset ones."""
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


# ── Service ──────────────────────────────────────────────────────────────────

def cmd_serve(args):
    from .main import run
    run()


# ── Graph ────────────────────────────────────────────────────────────────────

def cmd_get(args):
    _json_out(_api_request("GET", "/graph"))


def cmd_new(args):
    _json_out(_api_request("POST", "/graph/new", params={"name": args.name}))


# ── Vertices ─────────────────────────────────────────────────────────────────

VERTEX_FIELDS = ("label", "shape", "color", "x", "y", "width", "height")


def cmd_add_vertex(args):
    _json_out(_api_request("POST", "/vertices", data=_fields(args, VERTEX_FIELDS)))


def cmd_update_vertex(args):
    _json_out(_api_request("PATCH", f"/vertices/{args.vertex_id}", data=_fields(args, VERTEX_FIELDS)))


def cmd_delete_vertex(args):
    _json_out(_api_request("DELETE", f"/vertices/{args.vertex_id}"))


def cmd_adjacent(args):
    _json_out(_api_request("GET", f"/vertices/{args.vertex_id}/adjacent"))


# ── Edges ────────────────────────────────────────────────────────────────────

def cmd_add_edge(args):
    data = {"source": args.source, "target": args.target, "label": args.label or ""}
    _json_out(_api_request("POST", "/edges", data=data))


def cmd_delete_edge(args):
    _json_out(_api_request("DELETE", f"/edges/{args.edge_id}"))


# ── Algorithms ───────────────────────────────────────────────────────────────

def cmd_traverse(args):
    params = {"start": args.start, "order": args.order, "mode": args.mode}
    _json_out(_api_request("GET", "/traversal", params=params))


def cmd_distance(args):
    params = {"origin": args.origin, "destination": args.destination}
    _json_out(_api_request("GET", "/distance", params=params))


def cmd_layout(args):
    _json_out(_api_request("POST", "/layout", data={"strategy": args.strategy, "root": args.root}))


# ── Analysis ─────────────────────────────────────────────────────────────────

def cmd_validate(args):
    _json_out(_api_request("GET", "/graph/validate"))


def cmd_summarize(args):
    _json_out(_api_request("GET", "/graph/summary"))


# ── Main ─────────────────────────────────────────────────────────────────────

def _add_vertex_options(parser):
    parser.add_argument("--label")
    parser.add_argument("--shape", choices=["ellipse", "rectangle", "rectangle_top_line"])
    parser.add_argument("--color")
    parser.add_argument("--x", type=float)
    parser.add_argument("--y", type=float)
    parser.add_argument("--width", type=float)
    parser.add_argument("--height", type=float)


def build_parser():
    parser = argparse.ArgumentParser(description="Diagram graph CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    # Service
    sub.add_parser("serve")

    # Graph
    sub.add_parser("get")
    p = sub.add_parser("new")
    p.add_argument("--name", default="Untitled Graph")

    # Vertices
    p = sub.add_parser("add-vertex")
    _add_vertex_options(p)

    p = sub.add_parser("update-vertex")
    p.add_argument("vertex_id")
    _add_vertex_options(p)

    p = sub.add_parser("delete-vertex")
    p.add_argument("vertex_id")

    p = sub.add_parser("adjacent")
    p.add_argument("vertex_id")

    # Edges
    p = sub.add_parser("add-edge")
    p.add_argument("source")
    p.add_argument("target")
    p.add_argument("--label")

    p = sub.add_parser("delete-edge")
    p.add_argument("edge_id")

    # Algorithms
    p = sub.add_parser("traverse")
    p.add_argument("--start", type=int, default=0)
    p.add_argument("--order", choices=["breadth_first", "depth_first"], default="breadth_first")
    p.add_argument("--mode", choices=["oriented", "undirected"], default="undirected")

    p = sub.add_parser("distance")
    p.add_argument("origin")
    p.add_argument("destination")

    p = sub.add_parser("layout")
    p.add_argument("--strategy", choices=["grid", "layered"], default="grid")
    p.add_argument("--root", type=int, default=0)

    # Analysis
    sub.add_parser("validate")
    sub.add_parser("summarize")

    return parser


COMMANDS = {
    "serve": cmd_serve,
    "get": cmd_get,
    "new": cmd_new,
    "add-vertex": cmd_add_vertex,
    "update-vertex": cmd_update_vertex,
    "delete-vertex": cmd_delete_vertex,
    "adjacent": cmd_adjacent,
    "add-edge": cmd_add_edge,
    "delete-edge": cmd_delete_edge,
    "traverse": cmd_traverse,
    "distance": cmd_distance,
    "layout": cmd_layout,
    "validate": cmd_validate,
    "summarize": cmd_summarize,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    COMMANDS[args.command](args)


if __name__ == "__main__":
    main()
