"""
Create the OpenSearch indices used by the Pessoa API.

Creates the data index (with explicit field mappings) and the sequence index
holding the integer id counter. Existing indices are left untouched unless
--recreate is passed, which drops the data index first.

Usage:
    python -m scripts.create_index [--recreate]

Requires the OpenSearch environment variables from .env.
"""

import argparse
import logging
import sys

from opensearchpy.exceptions import OpenSearchException

from pessoa_api.config import index_name, opensearch_client, sequence_index_name
from pessoa_api.services.os_client import ensure_index

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the Pessoa OpenSearch indices")
    parser.add_argument("--recreate", action="store_true", help="Drop and recreate the data index")
    args = parser.parse_args()

    try:
        ensure_index(opensearch_client, index_name, sequence_index_name, recreate=args.recreate)
    except OpenSearchException:
        logger.exception("Failed to create indices %s / %s", index_name, sequence_index_name)
        sys.exit(1)

    logger.info("Indices ready: %s, %s", index_name, sequence_index_name)


if __name__ == "__main__":
    main()
