#!/usr/bin/env python3
"""
Time batch gender coding over synthetic names.

Compares the threaded batch path against a plain loop over `classify`, using
the configured dictionary (bundled seed tables when no CSV files exist).

Usage:
    python scripts/benchmark_batch.py --count 200000 --workers 8
"""

import argparse
import logging
import random
import time
from typing import List

from gendercoder.gender_names import GenderCoderConfig
from gendercoder.processor import GenderProcessor


def generate_test_names(processor: GenderProcessor, count: int) -> List[str]:
    """Mix of dictionary hits, compounds, initials and misses."""
    dictionary = processor.dictionary
    us_names = [e.pattern.title() for e in dictionary.us_names.entries] or ["John"]
    compounds = [e.pattern.replace("+", "-").title() for e in dictionary.wildcard_names.entries] or ["Mary-Jane"]
    foreign = [e.pattern.replace("+", "").title() for e in dictionary.foreign_names.entries] or ["Liu"]
    initials = "ABCDEFGHJKLMNPRSTW"

    names = []
    for _ in range(count):
        choice = random.random()
        if choice < 0.5:  # 50% plain US names
            names.append(random.choice(us_names))
        elif choice < 0.65:  # 15% compound names
            names.append(random.choice(compounds))
        elif choice < 0.8:  # 15% foreign names
            names.append(random.choice(foreign))
        elif choice < 0.9:  # 10% names with a trailing initial
            names.append(f"{random.choice(us_names)} {random.choice(initials)}.")
        else:  # 10% unknown names
            names.append("".join(random.choice("bcdfghklmnprstvz") for _ in range(6)).title())
    return names


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--count", type=int, default=100_000)
    parser.add_argument("--workers", type=int, default=None, help="worker threads (default: cpu count + 2)")
    parser.add_argument("--poll-interval", type=float, default=0.25)
    parser.add_argument("--seed", type=int, default=13)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    random.seed(args.seed)

    config = GenderCoderConfig.create_default().with_poll_interval(args.poll_interval).with_workers(args.workers)
    processor = GenderProcessor(config=config)
    processor.add_progress_listener(lambda fraction: print(f"  progress: {fraction:.1%}"))

    names = generate_test_names(processor, args.count)

    print(f"Testing with {len(names)} names...")
    start = time.perf_counter()
    for name in names:
        processor.classify(name)
    loop_time = time.perf_counter() - start
    print(f"Single-name loop: {len(names)} names in {loop_time:.3f}s ({len(names) / loop_time:.0f} names/second)")

    start = time.perf_counter()
    results = processor.classify_batch(names)
    batch_time = time.perf_counter() - start
    print(f"Batch: {len(results)} names in {batch_time:.3f}s ({len(results) / batch_time:.0f} names/second)")

    counts = {}
    for result in results:
        counts[result.gender.value] = counts.get(result.gender.value, 0) + 1
    for gender, count in sorted(counts.items()):
        print(f"  {gender:<14} {count:>8} ({count / len(results):.1%})")


if __name__ == "__main__":
    main()
