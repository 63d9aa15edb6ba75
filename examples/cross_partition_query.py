#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from laakhay.cosmos import CombineMode, CosmosClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a query against every partition range")
    p.add_argument("database")
    p.add_argument("collection")
    p.add_argument("query", nargs="?", default="SELECT * FROM c")
    p.add_argument("--sum", action="store_true", help="Sum the per-range values")
    p.add_argument("--url", default=os.environ.get("COSMOS_URL"))
    p.add_argument("--key", default=os.environ.get("COSMOS_KEY"))
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    mode = CombineMode.SUM if args.sum else CombineMode.CONCAT_ARRAYS

    async with CosmosClient(args.url, master_key=args.key) as client:
        result = await client.query_documents_containers_direct(
            args.database, args.collection, args.query, combine_mode=mode
        )

    print("=" * 65)
    print(f"Collection : {args.database}/{args.collection}")
    print(f"Ranges     : {result.ranges_queried}")
    print(f"Charge     : {result.request_charge:.2f} RU")
    print(f"Duration   : {result.request_duration_ms:.2f} ms")
    print("=" * 65)
    if mode is CombineMode.SUM:
        print(f"Total      : {result.data}")
    else:
        for doc in result.data:
            print(doc)


if __name__ == "__main__":
    asyncio.run(main())
