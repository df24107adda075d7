"""
In-memory food log, newest entry first
"""
from datetime import date
from typing import Dict, List, Optional

from bigback.database.models import FoodLogEntry


class FoodLog:
    """Ordered list of logged foods; lives as long as the process"""

    def __init__(self):
        self._entries: List[FoodLogEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[FoodLogEntry]:
        return list(self._entries)

    def add(self, entry: FoodLogEntry):
        self._entries.insert(0, entry)

    def get(self, entry_id: str) -> Optional[FoodLogEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def remove(self, entry_id: str) -> bool:
        """Remove an entry by id; False if it is not in the log"""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                del self._entries[index]
                return True
        return False

    def entries_for_date(self, day: date) -> List[FoodLogEntry]:
        return [entry for entry in self._entries if entry.timestamp.date() == day]

    def summary_for_date(self, day: date) -> Dict:
        """Totals for one day"""
        logs = self.entries_for_date(day)

        total = {
            "calories": 0.0,
            "protein": 0.0,
            "fat": 0.0,
            "carbs": 0.0,
            "count": len(logs)
        }

        for log in logs:
            total["calories"] += log.macros.calories
            total["protein"] += log.macros.protein
            total["fat"] += log.macros.fat
            total["carbs"] += log.macros.carbs

        return total
