#!/usr/bin/env python3
"""Script to verify the records source is reachable and returns a usable payload."""

import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from tms_monitor.config import settings
from tms_monitor.data.records_repository import parse_payload
from tms_monitor.services.records import compute_summary
from tms_monitor.services.source import SourceClient, SourceReportedError, SourceUnavailableError


def main():
    print("=" * 60)
    print("Records Source Check")
    print("=" * 60)
    print()

    print("1. Checking configuration...")
    if not settings.source_url:
        print("   [ERROR] Source URL is not configured")
        print("   Please set TMS_SOURCE_URL in your .env file")
        return 1
    print(f"   [OK] Source URL: {settings.source_url}")
    print(f"   [OK] Refresh interval: {settings.refresh_interval_seconds:g}s")
    print()

    print("2. Fetching payload...")
    try:
        record_set = parse_payload(SourceClient().fetch())
    except SourceReportedError as e:
        print(f"   [ERROR] Source reported an error: {e.message}")
        return 1
    except SourceUnavailableError as e:
        print(f"   [ERROR] {e}")
        return 1

    vocabulary = record_set.vocabulary
    print(f"   [OK] {len(record_set.records)} records")
    print(
        f"   [OK] Filter options: {len(vocabulary.cars)} vehicles, "
        f"{len(vocabulary.customers)} customers, {len(vocabulary.statuses)} statuses"
    )
    print()

    print("3. Summary over all records...")
    summary = compute_summary(record_set.records)
    print(f"   Distance: {summary.total_distance_km:,.2f} km")
    print(f"   Cost: {summary.total_cost:,.2f}")
    print(f"   Delivered: {summary.delivered}  Cancelled: {summary.cancelled}  Total: {summary.count}")
    print()
    print("=" * 60)
    print("[SUCCESS] Source is reachable")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
