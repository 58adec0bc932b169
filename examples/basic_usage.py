#!/usr/bin/env python3
"""
Basic prdigest usage example.

Lists the pull requests of a repository opened or closed in the last day,
with their size class and the directories holding most of their changes.

Run with: python examples/basic_usage.py [owner/repo] [hours]
Set GITHUB_TOKEN to avoid the unauthenticated rate limit.
"""

import logging
import sys
from datetime import datetime, timedelta, timezone

from prdigest import PRDigestClient, PRDigestError, configure_logging, stats
from prdigest.timestamps import closed_at_str, created_at_str, merged_at_str

repo = sys.argv[1] if len(sys.argv) > 1 else "cockroachdb/cockroach"
hours = float(sys.argv[2]) if len(sys.argv) > 2 else 24

configure_logging(level=logging.INFO, format_string="*** %(message)s")

print(f"=== prdigest: {repo}, last {hours:g} hours ===\n")

try:
    with PRDigestClient.from_env() as client:
        result = client.query(repo, since=datetime.now(timezone.utc) - timedelta(hours=hours))
except PRDigestError as e:
    print(f"   Query failed: {e}")
    sys.exit(1)


def show(pr) -> None:
    changes = stats.total_changes(pr)
    print(f"   #{pr.number} [{stats.size_class(pr).value}] {pr.title} ({pr.author})")
    print(f"      created {created_at_str(pr)}", end="")
    if pr.closed_at:
        print(f", closed {closed_at_str(pr)}", end="")
    if pr.merged_at:
        print(f", merged {merged_at_str(pr)}", end="")
    print()
    print(f"      {changes:,} changes in {len(pr.files)} files")
    for sd in stats.subdirectories(pr):
        share = sd.total_changes / changes
        print(f"         {sd.name:<40} {sd.total_changes:>8,} ({share:.0%})")


print(f"1. Open pull requests ({len(result.open)})")
for pr in result.open:
    show(pr)

print(f"\n2. Closed pull requests ({len(result.closed)})")
for pr in result.closed:
    show(pr)

print("\n3. Size distribution")
counts = {size: 0 for size in stats.SizeClass}
for pr in result.open + result.closed:
    counts[stats.size_class(pr)] += 1
for size, count in counts.items():
    print(f"   {size.value:<8} {count}")

print(f"\n=== {result.total} pull requests ===")
