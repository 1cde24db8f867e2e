# main.py
import argparse
import json
import sys

from street_route.app.build import build
from street_route.domain.entities.geography import Point


def _load_config(path: str) -> dict:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Street routing over a configured graph")
    p.add_argument("config", help="JSON routing config (see street_route.config.models)")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("route", help="shortest path between two lon/lat points")
    r.add_argument("start", nargs=2, type=float, metavar=("LON", "LAT"))
    r.add_argument("dest", nargs=2, type=float, metavar=("LON", "LAT"))

    c = sub.add_parser("closest", help="closest routable node to a lon/lat point")
    c.add_argument("point", nargs=2, type=float, metavar=("LON", "LAT"))

    a = sub.add_parser("complete", help="location names starting with a prefix")
    a.add_argument("prefix")

    args = p.parse_args(argv)
    app = build(_load_config(args.config))

    if args.cmd == "route":
        route = app.router.route(Point(*args.start), Point(*args.dest))
        out = {
            "outcome": route.outcome.value,
            "nodes": route.node_ids,
            "length_m": route.length_m,
            "streets": route.streets,
            "states_explored": route.states_explored,
        }
    elif args.cmd == "closest":
        out = {"node": app.geocoder.closest(*args.point)}
    else:
        out = {"names": app.geocoder.locations_by_prefix(args.prefix)}

    json.dump(out, sys.stdout)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
