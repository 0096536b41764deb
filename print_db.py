"""Print recent scan history stored in the project's SQLite database.

It reuses the application's `DATABASE_DIR` setting via `Settings.from_env()`.

Run: set the `DATABASE_DIR` environment variable and run
      `python print_db.py [limit]`.
"""
import asyncio
import sys
from typing import List

from dotenv import load_dotenv

from dal.scan_dal import ScanDAL
from models.scan_record import ScanRecord
from utils.database_init import AsyncDatabaseInitializer
from utils.settings import Settings


def format_record(record: ScanRecord) -> str:
    """Render one scan as a single line."""
    size = f"{record.width}x{record.height}" if record.width and record.height else "?"
    mode = " [sandbox]" if record.sandbox else ""
    return (
        f"{record.created_at}  {record.scan_id}  {record.filename!r}  "
        f"AI {record.ai_pct}% / human {record.human_pct}%  {size}{mode}"
    )


async def main(limit: int = 100) -> None:
    """Print the newest `limit` scans, or a notice when history is disabled."""
    settings = Settings.from_env()
    if settings.database_dir is None:
        print("DATABASE_DIR is not set; no scan history to print.")
        return
    records: List[ScanRecord] = await ScanDAL(
        AsyncDatabaseInitializer(settings.database_dir)
    ).list_recent(limit)
    if not records:
        print("No scans recorded.")
        return
    for record in records:
        print(format_record(record))


if __name__ == "__main__":
    load_dotenv()
    asyncio.run(main(int(sys.argv[1]) if len(sys.argv) > 1 else 100))
