from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class ScanRecord:
    """In-memory representation of a row in the scans table.

    Attributes:
        id: Primary key (None for new records).
        scan_id: Identifier the scan was submitted under.
        filename: Original filename of the uploaded image.
        ai_pct: Percentage judged AI-generated.
        human_pct: Percentage judged human-made.
        width: Image width reported upstream, if any.
        height: Image height reported upstream, if any.
        sandbox: Whether the scan ran in sandbox mode.
        created_at: ISO-8601 UTC timestamp of the insert.
    """

    id: Optional[int]
    scan_id: str
    filename: str
    ai_pct: float
    human_pct: float
    width: Optional[int] = None
    height: Optional[int] = None
    sandbox: bool = False
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
