from __future__ import annotations

import argparse
import logging

from linkedby6.core.logging import configure_logging
from linkedby6.db.neo4j.driver import neo4j_session
from linkedby6.db.neo4j.schema import SCHEMA_STATEMENTS

logger = logging.getLogger("init_graph_schema")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the Person/Business indexes the path query relies on.")
    parser.add_argument("--dry-run", action="store_true", help="Print statements without running them")
    args = parser.parse_args()
    configure_logging()

    if args.dry_run:
        for statement in SCHEMA_STATEMENTS:
            print(statement)
        return

    with neo4j_session() as session:
        if session is None:
            logger.warning("neo4j_uri_not_configured")
            return
        for statement in SCHEMA_STATEMENTS:
            session.run(statement)
            logger.info("graph_schema_statement_applied", extra={"statement": statement})


if __name__ == "__main__":
    main()
