from typing import Dict, List, Optional

from models.state import GOAL_REVENUE, GOAL_TYPES, finite_number, new_id, required_text, round_half_up

def new_goal(title: str, target_amount, deadline: str, goal_type: str = GOAL_REVENUE,
             goal_id: Optional[str] = None) -> Dict:
    title = required_text(title, "Goal title")
    deadline = required_text(deadline, "Goal deadline")
    if goal_type not in GOAL_TYPES:
        raise ValueError(f"Unknown goal type: {goal_type}")
    target = finite_number(target_amount, "target amount")
    if target <= 0:
        raise ValueError("Target amount must be positive")
    return {
        "id": goal_id or new_id("g"),
        "title": title,
        "targetAmount": target,
        # progress only counts sales recorded after the goal exists
        "currentAmount": 0,
        "deadline": deadline,
        "type": goal_type,
    }

def add_goal(state: Dict, goal: Dict) -> Dict:
    return {**state, "goals": [*state["goals"], goal]}

def goal_percentage(goal: Dict) -> int:
    """Completion percentage clamped to 100; 0 when the target is not positive."""
    target = goal["targetAmount"]
    if target <= 0:
        return 0
    # halves round up
    return round_half_up(min(100, goal["currentAmount"] / target * 100))

def goal_progress(goals: List[Dict]) -> List[Dict]:
    return [{**g, "percentage": goal_percentage(g)} for g in goals]
