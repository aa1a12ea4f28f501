#!/usr/bin/env python3
"""Trace the funding ancestry of seed addresses and print the resulting forest."""
import sys
import json
import logging
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fundtrace.addressbook.loader import AddressBookLoader
from fundtrace.ancestry.builder import ForestBuilder
from fundtrace.ancestry.export import forest_lines
from fundtrace.ledger.indexer import IndexerClient
from fundtrace.utils import Config, get_addressbook_path


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Walk each seed address back to its earliest funders and print the ancestry forest."
    )
    parser.add_argument(
        "--network",
        choices=["mainnet", "testnet"],
        default=None,
        help=f"Indexer network (default: {Config.INDEXER_NETWORK})"
    )
    parser.add_argument(
        "--indexer-url",
        default=None,
        help="Explicit indexer base URL (overrides --network)"
    )
    parser.add_argument(
        "--seeds-file",
        default=None,
        help="YAML file with a 'seeds' list (default: addressbook/seeds.yaml)"
    )
    parser.add_argument(
        "--exchanges-file",
        default=None,
        help="YAML file with an 'exchanges' mapping (default: addressbook/exchanges.yaml)"
    )
    parser.add_argument(
        "--address",
        action="append",
        default=[],
        help="Seed address to trace; repeatable, replaces the seeds file"
    )
    parser.add_argument(
        "--chain",
        default=None,
        metavar="ADDRESS",
        help="Print only the ancestry chain of one address"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the forest as JSON"
    )
    parser.add_argument(
        "--log-level",
        default=Config.LOG_LEVEL,
        help=f"Logging level (default: {Config.LOG_LEVEL})"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Build the forest and print it."""
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    loader = AddressBookLoader(
        config_dir=get_addressbook_path(),
        seeds_file=args.seeds_file,
        exchanges_file=args.exchanges_file
    )
    book = loader.load_all()
    seeds = args.address or book.seeds

    client = IndexerClient.from_config(network=args.network, url=args.indexer_url)
    print(f"🔌 Indexer: {client.base_url}", file=sys.stderr)
    print(f"   Known wallets: {len(book.known_wallets)}", file=sys.stderr)

    with ForestBuilder(client, known_wallets=book.known_wallets.keys()) as builder:
        if args.chain:
            chain = builder.trace(args.chain, include_terminus=True)
            for depth, address in enumerate(chain):
                print(f"{depth}: {book.label(address)}")
            return 0

        if not seeds:
            print("No seed addresses. Add some to the seeds file or pass --address.", file=sys.stderr)
            return 1

        print(f"🔍 Tracing {len(seeds)} seed addresses...", file=sys.stderr)
        report = builder.build(seeds)
        forest = builder.forest

    if args.json:
        print(json.dumps(forest.to_dict(), indent=2))
    else:
        print("TYPE: ITERATION: DEPTH: ADDRESS")
        for line in forest_lines(forest, label=book.label):
            print(line)

    metadata = report.metadata
    print(f"\n📊 Nodes: {metadata['total_nodes']}  Trees: {metadata['total_roots']}  "
          f"Terminal wallets: {metadata['total_ignored']}  Failures: {metadata['total_failures']}",
          file=sys.stderr)
    for address, message in report.failures.items():
        print(f"   ⚠️  {address}: {message}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
