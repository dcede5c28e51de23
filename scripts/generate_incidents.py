# scripts/generate_incidents.py
"""
Write a synthetic scam-incident dataset to JSON (seed data for the
Incidents table or for offline demos).

Usage:
  python scripts/generate_incidents.py --count 500 --seed 7 --out global_incidents.json
"""
import argparse
import json
import os
import sys

# Allow running from a checkout without installing the package
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.join(os.path.dirname(THIS_DIR), "backend")
if BACKEND_DIR not in sys.path:
    sys.path.append(BACKEND_DIR)

from travelsafe.services.advisory import AdvisoryRefresher  # noqa: E402
from travelsafe.services.generator import generate_incidents  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Generate synthetic scam incidents as JSON.")
    parser.add_argument("--count", "-n", type=int, default=500,
                        help="Upper bound on the number of records.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for a reproducible dataset.")
    parser.add_argument("--refresh", action="store_true",
                        help="Also run the advisory refresh over the generated records.")
    parser.add_argument("--out", "-o", default="global_incidents.json",
                        help="Output path.")
    args = parser.parse_args()

    if args.count < 0:
        print("Error: --count must be >= 0")
        sys.exit(1)

    records = generate_incidents(args.count, seed=args.seed)
    if args.refresh:
        records = AdvisoryRefresher().refresh(records)

    payload = [r.model_dump(mode="json", exclude_none=True) for r in records]
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    print(f"Generated {len(payload)} incidents → {args.out}")


if __name__ == "__main__":
    main()
