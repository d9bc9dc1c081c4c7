from models.subject import Subject, SubjectCategory
from models.topic import Topic
from models.weekly_slot import WeeklySlot
from models.topic_progress import TopicProgress
from models.catalog import Catalog
from models.planner_state import PlannerState

__all__ = [
    "Subject",
    "SubjectCategory",
    "Topic",
    "WeeklySlot",
    "TopicProgress",
    "Catalog",
    "PlannerState",
]
