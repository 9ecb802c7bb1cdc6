"""
Genius snapshot collector.

Usage:
    genius-collect
    genius-collect --chains bsc polygon --metrics tvl
    genius-collect --no-write --verbose
"""

import argparse
import sys
import time

from .adapters.genius import EXPORTS, METHODOLOGY
from .chain_api import ChainApi
from .collector import METRICS, collect_snapshot, save_snapshot
from .config.rpc_config import setup_web3


def connect(chain: str) -> ChainApi:
    """Connect to ``chain`` and pin the snapshot to the latest block."""
    w3 = setup_web3(chain)
    return ChainApi(w3, chain, block=w3.eth.block_number)


def _format_balances(balances):
    return ", ".join(f"{addr}: {amount:,}" for addr, amount in balances.items()) or "(empty)"


def run_chain(chain, metrics, out_root, no_write=False, verbose=False):
    api = connect(chain)
    record = collect_snapshot(api, metrics, verbose=verbose)

    for metric in metrics:
        print(f"   {metric}: {_format_balances(record[metric])}")

    if not no_write:
        path = save_snapshot(record, out_root)
        print(f"💾 Wrote snapshot → {path}")

    return record


def main(argv=None):
    parser = argparse.ArgumentParser(description='Collect Genius TVL and staking snapshots')
    parser.add_argument('--chains', nargs='+', choices=sorted(EXPORTS), help='Chains to collect (default: all)')
    parser.add_argument('--metrics', nargs='+', choices=METRICS, default=list(METRICS), help='Metrics to collect')
    parser.add_argument('--out-root', default='data/bronze', help='Root directory for snapshot JSON')
    parser.add_argument('--no-write', action='store_true', help='Do not write snapshot files; just print')
    parser.add_argument('--verbose', action='store_true', help='Print every balance contribution')

    args = parser.parse_args(argv)
    chains = args.chains or list(EXPORTS)

    print("=" * 60)
    print("Genius Snapshot Collection")
    print("=" * 60)
    print(METHODOLOGY.rstrip())
    print("=" * 60)

    start_time = time.time()
    failed = []

    for chain in chains:
        print(f"\n🔹 {chain.upper()}")
        try:
            run_chain(chain, args.metrics, args.out_root, no_write=args.no_write, verbose=args.verbose)
            print(f"✅ {chain}: done")
        except Exception as e:
            print(f"❌ {chain}: {e}")
            failed.append(chain)

    elapsed = time.time() - start_time
    print()
    print("=" * 60)
    print(f"✅ Completed: {len(chains) - len(failed)}/{len(chains)}")
    if failed:
        print(f"❌ Failed: {', '.join(failed)}")
    print(f"⏱️  Time: {elapsed:.1f}s")
    print("=" * 60)

    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
