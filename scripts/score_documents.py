"""Score a JSON document collection against a query and print the ranking.

Usage:
    python scripts/score_documents.py DOCUMENTS.json QUERY.json [--filter] [--top N] [--output PATH]

DOCUMENTS.json holds either a list of documents or an OData-style
``{"value": [...]}`` envelope. QUERY.json holds a query in mapping or
pair-list syntax.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Add src to path so the script runs from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from match_engine.batch import filter_all, rank_all
from match_engine.config.settings import Settings
from match_engine.exceptions import QueryError
from match_engine.observability.logger import setup_logging


def load_json(path: Path):
    with open(path) as f:
        return json.load(f)


def load_documents(path: Path) -> list[dict]:
    data = load_json(path)
    if isinstance(data, dict) and "value" in data:
        return data["value"]
    return data


def print_header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def print_ranking(documents: list[dict], match_key: str, top: int) -> None:
    print_header(f"TOP {min(top, len(documents))} OF {len(documents)} DOCUMENTS")
    for rank, doc in enumerate(documents[:top], start=1):
        record = doc[match_key]
        extras = {k: v for k, v in record.items() if k != "score"}
        label = doc.get("title") or doc.get("name") or doc.get("id") or "?"
        line = f"  {rank:>3}. {record['score']:>8.4f}  {label}"
        if extras:
            line += f"  {extras}"
        print(line)


def save_results(documents: list[dict], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(documents, f, indent=2, default=str)
    print(f"\nScored documents saved to {output_path}")


def main(args: argparse.Namespace) -> int:
    settings = Settings()
    setup_logging(settings.log_level, settings.json_logs)

    documents = load_documents(Path(args.documents))
    query = load_json(Path(args.query))

    try:
        if args.filter:
            matched = filter_all(documents, query, settings)
            results = sorted(matched, key=lambda d: d[settings.match_key]["score"], reverse=True)
        else:
            results = rank_all(documents, query, settings)
    except QueryError as e:
        print(f"Invalid query: {e}", file=sys.stderr)
        return 2

    print_ranking(results, settings.match_key, args.top)
    if args.output:
        save_results(results, Path(args.output))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Score documents against a match query")
    parser.add_argument("documents", help="Path to a JSON file of documents")
    parser.add_argument("query", help="Path to a JSON file holding the query")
    parser.add_argument(
        "--filter",
        action="store_true",
        help="Treat the query as a filter (implicit AND) and drop non-matches",
    )
    parser.add_argument("--top", type=int, default=10, help="Number of results to print")
    parser.add_argument("--output", default=None, help="Optional path to save scored JSON")
    sys.exit(main(parser.parse_args()))
