"""
Snapshot collection for the Genius adapter.

A snapshot is one JSON record per chain:

    {
        'protocol': 'genius',
        'chain': 'bsc',
        'date': '2024-06-01',
        'timestamp': 1717200000,
        'block': 39000000,
        'tvl': {'0x4444...': 1234.5678},
        'staking': {'0x4444...': 9876543210},
    }

Records are written to <out_root>/genius/<chain>/<date>.json.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .adapters.genius import EXPORTS
from .chain_api import ChainApi

PROTOCOL = "genius"
METRICS = ("tvl", "staking")


def collect_snapshot(
    api: ChainApi,
    metrics: Sequence[str] = METRICS,
    verbose: bool = False,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Run the requested metric functions for ``api.chain`` and build a snapshot record."""
    chain = api.chain
    if chain not in EXPORTS:
        raise ValueError(f"Chain '{chain}' is not exported by the {PROTOCOL} adapter")

    now = now or datetime.now(timezone.utc)
    record: Dict[str, Any] = {
        'protocol': PROTOCOL,
        'chain': chain,
        'date': now.strftime("%Y-%m-%d"),
        'timestamp': int(now.timestamp()),
        'block': api.block,
    }

    for metric in metrics:
        fn = EXPORTS[chain].get(metric)
        if fn is None:
            raise ValueError(f"Unknown metric: {metric}")
        record[metric] = fn(api, verbose=verbose)

    return record


def save_snapshot(record: Dict[str, Any], out_root: str = "data/bronze") -> Path:
    output_dir = Path(out_root) / record['protocol'] / record['chain']
    output_dir.mkdir(parents=True, exist_ok=True)

    output_file = output_dir / f"{record['date']}.json"

    with open(output_file, 'w') as f:
        json.dump(record, f, indent=2, default=str)

    return output_file
