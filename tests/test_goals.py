import pytest

from models.goals import add_goal, goal_percentage, goal_progress, new_goal
from models.state import empty_state

def _goal(current, target):
    return {"id": "g", "title": "t", "targetAmount": target, "currentAmount": current, "deadline": "2030-01-01", "type": "revenue"}

def test_goal_percentage():
    assert goal_percentage(_goal(65, 100)) == 65
    assert goal_percentage(_goal(120, 100)) == 100
    assert goal_percentage(_goal(1, 8)) == 13  # 12.5 rounds up

def test_goal_percentage_non_positive_target():
    assert goal_percentage(_goal(50, 0)) == 0
    assert goal_percentage(_goal(50, -10)) == 0

def test_new_goal_starts_at_zero():
    g = new_goal("Q4", "5000", "2030-12-31", "revenue")
    assert g["currentAmount"] == 0
    assert g["targetAmount"] == 5000.0

@pytest.mark.parametrize("title,target,deadline,kind", [
    ("", 10, "2030-01-01", "revenue"),
    ("Q4", 0, "2030-01-01", "revenue"),
    ("Q4", 10, "", "revenue"),
    ("Q4", 10, "2030-01-01", "profit"),
])
def test_new_goal_rejects_bad_input(title, target, deadline, kind):
    with pytest.raises(ValueError):
        new_goal(title, target, deadline, kind)

def test_add_goal_appends_without_backfill():
    state = empty_state()
    state["sales"] = [{"id": "s1", "totalAmount": 500.0}]
    state = add_goal(state, new_goal("A", 10, "2030-01-01"))
    state = add_goal(state, new_goal("B", 10, "2030-01-01", "sales_count"))
    assert [g["title"] for g in state["goals"]] == ["A", "B"]
    assert all(g["currentAmount"] == 0 for g in state["goals"])
    assert [g["percentage"] for g in goal_progress(state["goals"])] == [0, 0]

@pytest.mark.parametrize("target", ["nan", float("nan"), "inf", float("-inf")])
def test_new_goal_rejects_non_finite_target(target):
    with pytest.raises(ValueError):
        new_goal("Q4", target, "2030-01-01")
