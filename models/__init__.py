from models.weekday import Weekday
from models.group import Group, Level, Shift
from models.course import Course
from models.schedule_entry import ScheduleEntry

__all__ = [
    "Weekday",
    "Group",
    "Level",
    "Shift",
    "Course",
    "ScheduleEntry",
]
