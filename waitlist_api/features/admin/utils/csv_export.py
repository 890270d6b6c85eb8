import csv
import io
from datetime import date, datetime, timezone
from typing import Iterable

from waitlist_api.features.waitlist.models.waitlist import WaitlistEntry
from waitlist_api.platform.utils.dates import utc_isoformat

CSV_HEADER = ["Email", "Created At", "Source", "IP Address", "User Agent"]


def entry_to_row(entry: WaitlistEntry) -> list[str]:
    return [
        entry.email or "",
        utc_isoformat(entry.created_at),
        entry.source or "",
        entry.ip_address or "",
        (entry.user_agent or "").replace(",", ";"),
    ]


def entries_to_csv(entries: Iterable[WaitlistEntry]) -> str:
    """
    Serialize entries with the header on its own unquoted line and every
    data field double-quoted. Embedded quotes are doubled and commas in
    the user agent become semicolons.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for entry in entries:
        writer.writerow(entry_to_row(entry))

    return buffer.getvalue()


def export_filename(today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"waitlist-export-{today.isoformat()}.csv"
