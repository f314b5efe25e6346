# football_guesser/badges/ledger.py
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

REPORT_TITLE = "MISSING TEAM BADGES"
REMEDIATION_HINT = "add a search alias for this team or check its name on TheSportsDB"


class MissingTeamLedger:
    """Teams that were shown with a placeholder instead of a real badge.

    Insertion ordered and deduplicated. Diagnostic only, nothing in the game
    reads it back.
    """

    def __init__(self):
        self._teams: Dict[str, None] = {}

    def record(self, name: str) -> bool:
        """Adds ``name`` if it is not present yet; returns whether it was added."""
        if name in self._teams:
            return False
        self._teams[name] = None
        logger.info(f"Recorded missing badge for '{name}' ({len(self._teams)} so far)")
        return True

    def list(self) -> List[str]:
        return list(self._teams)

    def __len__(self) -> int:
        return len(self._teams)

    def __contains__(self, name: object) -> bool:
        return name in self._teams

    def export(self, generated_at: Optional[datetime] = None) -> str:
        """Plain-text report: header with timestamp and count, one numbered line per team."""
        generated_at = generated_at or datetime.now(timezone.utc)
        lines = [
            "=" * 40,
            REPORT_TITLE,
            "=" * 40,
            f"Generated: {generated_at.isoformat(timespec='seconds')}",
            f"Total missing: {len(self._teams)}",
            "",
        ]
        for index, name in enumerate(self._teams, start=1):
            lines.append(f"{index}. {name} - {REMEDIATION_HINT}")
        return "\n".join(lines) + "\n"

    def write(self, path: Path, generated_at: Optional[datetime] = None) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.export(generated_at), encoding="utf-8")
        logger.info(f"Wrote missing-team report with {len(self._teams)} team(s) to {path}")
        return path
