from .models import JoinStep, Plan, Selection
from .planner import plan_joins
from .selection import toggle_selection

__all__ = ["JoinStep", "Plan", "Selection", "plan_joins", "toggle_selection"]
