from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..core.constants import PRIORITY_MUST_HAVE, PRIORITY_NICE_TO_HAVE


@dataclass(frozen=True)
class ProjectTypeInfo:
    id: str
    name: str
    description: str
    timeline: str = ""
    key_features: List[str] = field(default_factory=list)


PROJECT_TYPES: List[ProjectTypeInfo] = [
    ProjectTypeInfo(
        "website",
        "Website",
        "A standard website for presenting information, typically with multiple pages.",
        "Typically 2-6 weeks depending on complexity and content",
        ["Multiple content pages", "Contact forms", "Responsive design", "SEO optimization"],
    ),
    ProjectTypeInfo(
        "webapp",
        "Web Application",
        "Interactive applications with user accounts, data persistence, and complex functionality.",
        "Usually 1-6 months depending on complexity",
        ["User authentication", "Database integration", "Interactive UI components", "API integrations"],
    ),
    ProjectTypeInfo(
        "mobile",
        "Mobile App",
        "Native or cross-platform applications for iOS and/or Android devices.",
        "2-8 months for initial release",
        ["Platform-specific UI", "Push notifications", "Offline functionality", "App store deployment"],
    ),
    ProjectTypeInfo(
        "ecommerce",
        "E-commerce",
        "Online stores with product catalogs, carts, checkout and order management.",
        "2-6 months depending on catalog size and integrations",
        ["Product catalog", "Shopping cart", "Payment processing", "Order management"],
    ),
]

PROJECT_SCALES = ["small", "medium", "large"]

TIMELINE_OPTIONS = ["1-3 months", "3-6 months", "6-12 months", "1+ year"]

BUDGET_OPTIONS = ["Under $10,000", "$10,000 - $50,000", "$50,000 - $100,000", "$100,000+"]

SOCIAL_PLATFORMS = ["twitter", "instagram", "linkedin", "facebook"]


@dataclass(frozen=True)
class FeatureOption:
    id: str
    name: str
    description: str
    category: str


FEATURE_OPTIONS: List[FeatureOption] = [
    FeatureOption("auth", "User Authentication", "User registration, login, and profile management", "Users & Authentication"),
    FeatureOption("roles", "User Roles & Permissions", "Different access levels and permissions for users", "Users & Authentication"),
    FeatureOption("payments", "Payment Processing", "Ability to accept payments and manage transactions", "E-commerce"),
    FeatureOption("cart", "Shopping Cart", "Allow users to add items and checkout", "E-commerce"),
    FeatureOption("inventory", "Inventory Management", "Track and manage product inventory", "E-commerce"),
    FeatureOption("search", "Search Functionality", "Allow users to search content within the app", "Content"),
    FeatureOption("notifications", "Notifications", "Send alerts and notifications to users", "Communication"),
    FeatureOption("messaging", "Messaging/Chat", "Allow users to communicate with each other", "Communication"),
    FeatureOption("analytics", "Analytics Dashboard", "Track and visualize user activity and business metrics", "Admin"),
    FeatureOption("admin", "Admin Portal", "Backend interface for managing the application", "Admin"),
    FeatureOption("file-upload", "File Upload & Storage", "Allow users to upload and store files", "Content"),
    FeatureOption("social", "Social Media Integration", "Connect with social platforms for sharing or login", "Integration"),
    FeatureOption("mobile", "Mobile App Version", "Native mobile application for iOS/Android", "Platform"),
    FeatureOption("offline", "Offline Functionality", "App works without internet connection", "Technical"),
    FeatureOption("ai", "AI/ML Features", "Smart features powered by artificial intelligence", "Technical"),
    FeatureOption("reports", "Reporting & Exports", "Generate reports and export data", "Content"),
]


def feature_option(feature_id: str) -> Optional[FeatureOption]:
    for f in FEATURE_OPTIONS:
        if f.id == feature_id:
            return f
    return None


def project_type_name(type_id: str) -> str:
    for p in PROJECT_TYPES:
        if p.id == type_id:
            return p.name
    return type_id


def initial_feature_map() -> Dict[str, Dict[str, Any]]:
    return {f.id: {"selected": False, "priority": PRIORITY_NICE_TO_HAVE} for f in FEATURE_OPTIONS}


def toggle_selected(features: Mapping[str, Any], feature_id: str) -> Dict[str, Dict[str, Any]]:
    """Returns a new feature map with `feature_id` flipped; priority is kept."""
    current = dict(features.get(feature_id) or {})
    out = {k: dict(v) for k, v in features.items()}
    out[feature_id] = {
        "selected": not bool(current.get("selected")),
        "priority": current.get("priority") or PRIORITY_NICE_TO_HAVE,
    }
    return out


def toggle_priority(features: Mapping[str, Any], feature_id: str) -> Dict[str, Dict[str, Any]]:
    """must-have <-> nice-to-have; selection is kept."""
    current = dict(features.get(feature_id) or {})
    priority = current.get("priority") or PRIORITY_NICE_TO_HAVE
    out = {k: dict(v) for k, v in features.items()}
    out[feature_id] = {
        "selected": bool(current.get("selected")),
        "priority": PRIORITY_NICE_TO_HAVE if priority == PRIORITY_MUST_HAVE else PRIORITY_MUST_HAVE,
    }
    return out
