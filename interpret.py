"""CLI entry: print the structured filters for a free-text listing search."""

from __future__ import annotations

import argparse
import json

from hava_search.core.query_engine import QueryInterpreter
from hava_search.observability.logger import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Interpret a free-text property search")
    parser.add_argument("query", nargs="+", help="Search text, e.g. 3 bedroom flat in lekki under 20m")
    parser.add_argument("--log-level", default="WARNING", help="Log level for interpreter output")
    args = parser.parse_args()

    configure_logging(args.log_level)
    interpreted = QueryInterpreter().interpret(" ".join(args.query))
    print(json.dumps(interpreted.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
