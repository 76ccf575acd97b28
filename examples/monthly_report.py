"""
Example: run every analyzer over a small in-memory record set.

Run:
    python examples/monthly_report.py
"""

import json
import logging
from datetime import date

from spendsight import SpendAnalytics
from spendsight.models.financial import MonetaryRecord

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

RECORDS = [
    MonetaryRecord(id="1", amount=12.0, category="meals", occurred_on=date(2025, 1, 4)),
    MonetaryRecord(id="2", amount=9.5, category="meals", occurred_on=date(2025, 1, 11)),
    MonetaryRecord(id="3", amount=1200.0, category="rent", occurred_on=date(2025, 1, 28)),
    MonetaryRecord(id="4", amount=11.0, category="meals", occurred_on=date(2025, 2, 3)),
    MonetaryRecord(id="5", amount=10.0, category="meals", occurred_on=date(2025, 2, 14)),
    MonetaryRecord(id="6", amount=1200.0, category="rent", occurred_on=date(2025, 2, 28)),
    MonetaryRecord(id="7", amount=13.0, category="meals", occurred_on=date(2025, 3, 6)),
    MonetaryRecord(id="8", amount=95.0, category="meals", occurred_on=date(2025, 3, 20)),
    MonetaryRecord(id="9", amount=1250.0, category="rent", occurred_on=date(2025, 3, 28)),
]


def main() -> None:
    analytics = SpendAnalytics.from_config(None, clustering={"k": 2, "seed": 42})
    snapshot = analytics.snapshot(RECORDS)
    print(json.dumps(snapshot.to_dict(), indent=2))


if __name__ == "__main__":
    main()
