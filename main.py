import argparse
import json
import logging
import sys

from routica.core.analyzer import analyze_project
from routica.errors import AnalysisError
from routica.exporter.csv_exporter import export_to_csv
from routica.exporter.text_renderer import render_text


def build_parser():
    parser = argparse.ArgumentParser(
        prog="routica",
        description="List the HTTP routes an Express-style project registers.",
    )
    parser.add_argument("directory", help="project root directory")
    parser.add_argument("--csv", metavar="OUT", help="also write the routes to a CSV file")
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument("--neo4j", action="store_true", help="push the routes to Neo4j (NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = analyze_project(args.directory)
    except AnalysisError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_text(result))

    for diag in result.diagnostics:
        print(f"Skipped {diag.path} ({diag.kind}): {diag.message}", file=sys.stderr)

    if args.csv:
        export_to_csv(result.routes, args.csv)
        print(f"CSV written: {args.csv}", file=sys.stderr)

    if args.neo4j:
        from routica.core.neo4j_writer import push_to_neo4j
        push_to_neo4j(result.routes)


if __name__ == "__main__":
    main()
