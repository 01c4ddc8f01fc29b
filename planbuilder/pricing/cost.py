from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence


@dataclass(frozen=True)
class Feature:
    id: str
    name: str
    description: str
    category: str
    base_cost: int
    selected: bool = False


# Starting catalog; the first three are selected by default
DEFAULT_FEATURES: List[Feature] = [
    Feature("1", "User Authentication", "Secure login and registration system with email verification", "Core", 1200, True),
    Feature("2", "Database & API Setup", "Backend infrastructure with RESTful API endpoints", "Core", 2500, True),
    Feature("3", "Mobile Responsive Design", "Optimized interface for all screen sizes and devices", "Frontend", 1800, True),
    Feature("4", "Admin Dashboard", "Control panel for managing users, content, and settings", "Admin", 2200),
    Feature("5", "Payment Processing", "Integration with Stripe, PayPal, or other payment gateways", "E-commerce", 1500),
    Feature("6", "Social Media Integration", "Login with social accounts and sharing capabilities", "Integration", 900),
    Feature("7", "Real-time Chat", "Instant messaging between users or with support", "Communication", 2800),
    Feature("8", "Push Notifications", "Real-time alerts and updates to engage users", "Engagement", 1200),
    Feature("9", "Search Functionality", "Advanced search with filters and autocompletion", "Utility", 1600),
    Feature("10", "Performance Optimization", "Code and asset optimization for faster loading", "Performance", 1800),
]


def total_cost(features: Iterable[Feature]) -> int:
    return sum(f.base_cost for f in features if f.selected)


def selected_features(features: Iterable[Feature]) -> List[Feature]:
    return [f for f in features if f.selected]


def toggle_feature(features: Sequence[Feature], feature_id: str) -> List[Feature]:
    """Returns a new list; unknown ids leave the selection unchanged."""
    return [replace(f, selected=not f.selected) if f.id == feature_id else f for f in features]


def with_selection(features: Sequence[Feature], selected_ids: Iterable[str]) -> List[Feature]:
    """
    Restore a saved selection on top of the catalog. Defaults stay selected,
    matching how a previously saved plan is reopened.
    """
    ids = set(selected_ids)
    return [replace(f, selected=f.selected or f.id in ids) for f in features]


def categories(features: Iterable[Feature]) -> List[str]:
    seen: List[str] = []
    for f in features:
        if f.category not in seen:
            seen.append(f.category)
    return seen


def filter_by_category(features: Iterable[Feature], category: str) -> List[Feature]:
    if category == "All":
        return list(features)
    return [f for f in features if f.category == category]
