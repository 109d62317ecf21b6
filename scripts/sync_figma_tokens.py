#!/usr/bin/env python3
"""
Sync Figma design tokens into a Notion database

Fetches variables and styles from a Figma file (or reads pre-exported
variable definitions), classifies each token and upserts one Notion row per
token keyed by its Figma ID.

Usage:
    python scripts/sync_figma_tokens.py
    python scripts/sync_figma_tokens.py --variable-defs exports/variables.json --node-id 3049-19912
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import load_config
from token_sync.exceptions import ConfigurationError
from token_sync.sync import sync_figma_to_notion


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Sync Figma design tokens to Notion")
    parser.add_argument(
        "--variable-defs",
        help="JSON file of flat variable definitions to use instead of the Figma REST API",
    )
    parser.add_argument(
        "--node-id",
        help="Figma node the definitions were exported from (119-1410 or 119:1410)",
    )
    parser.add_argument("--no-swatches", action="store_true", help="Skip color swatch images")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Main entry point"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Node ids copied from a Figma URL use dashes
    node_id = args.node_id.replace("-", ":") if args.node_id else None

    try:
        config = load_config(variable_defs_path=args.variable_defs, node_id=node_id)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 1

    if args.no_swatches:
        config.enable_swatches = False

    try:
        result = await sync_figma_to_notion(config)
    except Exception as e:
        print(f"❌ Error during sync: {e}")
        return 1

    print("\n=== Sync Summary ===")
    print(f"Total tokens processed: {result.total}")
    print(f"Created: {result.created}")
    print(f"Updated: {result.updated}")
    if result.failed:
        print(f"Not synced: {result.failed} (see log for details)")
    print("===================\n")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
