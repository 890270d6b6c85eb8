import csv
import io
from datetime import date, datetime, timezone

from waitlist_api.features.admin.utils.csv_export import (
    CSV_HEADER,
    entries_to_csv,
    export_filename,
)
from waitlist_api.features.waitlist.models.waitlist import WaitlistEntry


def _entry(**overrides) -> WaitlistEntry:
    fields = {
        "id": "0190c2a0-0000-7000-8000-000000000001",
        "email": "alice@example.com",
        "created_at": datetime(2025, 3, 4, 5, 6, 7, 890000, tzinfo=timezone.utc),
        "source": "landing-page",
        "ip_address": "10.0.0.1",
        "user_agent": "Mozilla/5.0",
    }
    fields.update(overrides)
    return WaitlistEntry(**fields)


def test_header_only_when_empty():
    assert entries_to_csv([]) == "Email,Created At,Source,IP Address,User Agent\n"


def test_every_field_is_quoted():
    csv_text = entries_to_csv([_entry()])

    assert csv_text.splitlines()[1] == (
        '"alice@example.com","2025-03-04T05:06:07.890Z","landing-page","10.0.0.1","Mozilla/5.0"'
    )


def test_user_agent_commas_become_semicolons():
    csv_text = entries_to_csv([_entry(user_agent="Mozilla/5.0 (KHTML, like Gecko), Safari")])

    row = list(csv.reader(io.StringIO(csv_text)))[1]
    assert row[4] == "Mozilla/5.0 (KHTML; like Gecko); Safari"
    assert len(row) == len(CSV_HEADER)


def test_embedded_quotes_are_escaped():
    csv_text = entries_to_csv([_entry(user_agent='Bot "v2"')])

    assert '"Bot ""v2"""' in csv_text
    assert list(csv.reader(io.StringIO(csv_text)))[1][4] == 'Bot "v2"'


def test_missing_metadata_is_empty():
    csv_text = entries_to_csv([_entry(ip_address=None, user_agent=None)])

    assert csv_text.splitlines()[1].endswith(',"",""')


def test_naive_timestamps_are_treated_as_utc():
    csv_text = entries_to_csv([_entry(created_at=datetime(2025, 1, 1, 12, 0, 0))])

    assert '"2025-01-01T12:00:00.000Z"' in csv_text


def test_export_filename():
    assert export_filename(date(2025, 7, 1)) == "waitlist-export-2025-07-01.csv"
    assert export_filename().startswith("waitlist-export-")
