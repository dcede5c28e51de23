# scripts/upload_incidents.py
"""
Bulk-upload incidents from a JSON file into DynamoDB through IncidentStore.

Usage:
  python scripts/upload_incidents.py --file global_incidents.json [--dry-run] [--sleep 0.05]

Env vars (same as travelsafe/db/dynamo.py):
  AWS_REGION=eu-north-1
  INCIDENTS_TABLE=Incidents
"""
import argparse
import json
import os
import sys
import time

from pydantic import ValidationError

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.join(os.path.dirname(THIS_DIR), "backend")
if BACKEND_DIR not in sys.path:
    sys.path.append(BACKEND_DIR)

from travelsafe.models.incident import IncidentRecord  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Upload incidents JSON to DynamoDB.")
    parser.add_argument("--file", "-f", default="global_incidents.json",
                        help="Path to JSON file (list of incident objects).")
    parser.add_argument("--dry-run", action="store_true",
                        help="Validate and print, but do not write to DynamoDB.")
    parser.add_argument("--sleep", type=float, default=0.0,
                        help="Optional delay (seconds) between writes to be gentle.")
    args = parser.parse_args()

    path = os.path.abspath(args.file)
    if not os.path.exists(path):
        print(f"Error: file not found: {path}")
        sys.exit(1)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            print(f"JSON parse error: {e}")
            sys.exit(1)

    if not isinstance(data, list):
        print("Error: JSON root must be a list of incident objects.")
        sys.exit(1)

    store = None
    if not args.dry_run:
        # imported late so --dry-run works without AWS credentials
        from travelsafe.db.dynamo import IncidentStore
        store = IncidentStore()

    total = len(data)
    ok = 0
    skipped = 0
    for i, rec in enumerate(data, 1):
        try:
            record = IncidentRecord.model_validate(rec)
        except ValidationError as e:
            print(f"[{i}/{total}] SKIP (invalid record): {e.errors()[0]['msg']}")
            skipped += 1
            continue

        item = record.model_dump(mode="json", exclude_none=True)
        if store is None:
            print(f"[{i}/{total}] DRY-RUN put id='{record.id}' "
                  f"category='{record.category}' location='{record.location}'")
            ok += 1
            continue

        try:
            store.put(item)
            ok += 1
            if args.sleep > 0:
                time.sleep(args.sleep)
        except Exception as e:
            print(f"[{i}/{total}] ERROR {e} for record: {record.id}")

    print(f"\nDone. Success: {ok}  Skipped: {skipped}  Total read: {total}")


if __name__ == "__main__":
    main()
