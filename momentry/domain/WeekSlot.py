"""WeekSlot domain entity: derived state of one circle in a year grid."""
from momentry.logic.calendar.iso_week import WeekRange


class WeekSlot:
    def __init__(self, slot_index: int, year: int, date_range: WeekRange, weeks_since_birth: int,
                 is_before_birth: bool = False, is_past: bool = False, is_current_week: bool = False,
                 has_data: bool = False, row: int = 0, column: int = 0):
        self.slot_index = slot_index
        self.year = year
        # cached: fixed for a given (slot_index, year, birth)
        self.date_range = date_range
        self.weeks_since_birth = weeks_since_birth
        self.is_before_birth = is_before_birth
        # re-derived on refresh
        self.is_past = is_past
        self.is_current_week = is_current_week
        self.has_data = has_data
        # honeycomb position
        self.row = row
        self.column = column

    @property
    def week_number(self) -> int:
        return self.slot_index + 1

    @property
    def is_interactive(self) -> bool:
        return not self.is_before_birth

    @property
    def is_goal(self) -> bool:
        """Future week carrying data (shown as a goal rather than a memory)."""
        return self.has_data and not self.is_past and not self.is_current_week

    def state(self) -> tuple:
        return (self.has_data, self.is_past, self.is_current_week)

    def __str__(self) -> str:
        return (f"Week {self.week_number}/{self.year} #{self.weeks_since_birth} "
                f"({self.date_range.monday} - {self.date_range.sunday})")

    __repr__ = __str__

    def to_dict(self):
        return {
            "slot_index": self.slot_index,
            "week_number": self.week_number,
            "year": self.year,
            "date_range": self.date_range.to_dict(),
            "weeks_since_birth": self.weeks_since_birth,
            "is_before_birth": self.is_before_birth,
            "is_past": self.is_past,
            "is_current_week": self.is_current_week,
            "has_data": self.has_data,
            "is_goal": self.is_goal,
            "row": self.row,
            "column": self.column,
        }
