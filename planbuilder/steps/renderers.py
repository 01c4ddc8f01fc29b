"""
Step renderers: one Streamlit form per wizard step.

Each renderer owns one slice of the form data. It reads the slice, pushes
edits through `update(partial)` and reports its own validity through
`mark_complete(bool)`. No renderer looks at another step's slice, except the
summary, which only displays them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional, Type

import streamlit as st

from ..core.constants import (
    PRIORITY_MUST_HAVE,
    STEP_BUSINESS_CONTEXT,
    STEP_FEATURES,
    STEP_PROJECT_TYPE,
    STEP_TIMELINE_BUDGET,
)
from ..core.types import StepKind, WizardError
from ..export.formatters import format_priority
from ..llm.context_builder import SECTION_LABELS, selected_feature_labels
from .catalog import (
    BUDGET_OPTIONS,
    FEATURE_OPTIONS,
    PROJECT_SCALES,
    PROJECT_TYPES,
    SOCIAL_PLATFORMS,
    TIMELINE_OPTIONS,
    initial_feature_map,
    project_type_name,
    toggle_priority,
    toggle_selected,
)

Update = Callable[[Any], None]
MarkComplete = Callable[[bool], None]


def _filled(section: Mapping[str, Any], *keys: str) -> bool:
    return all(str(section.get(k) or "").strip() for k in keys)


def _section(form_data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = form_data.get(key)
    return dict(value) if isinstance(value, Mapping) else {}


def _option_index(options, value) -> Optional[int]:
    return options.index(value) if value in options else None


class StepRenderer(ABC):
    section_key: Optional[str] = None

    @abstractmethod
    def is_complete(self, form_data: Mapping[str, Any]) -> bool:
        ...

    @abstractmethod
    def render(self, form_data: Mapping[str, Any], update: Update, mark_complete: MarkComplete) -> None:
        ...

    def _report(self, form_data: Mapping[str, Any], mark_complete: MarkComplete) -> None:
        mark_complete(self.is_complete(form_data))


class WelcomeRenderer(StepRenderer):
    def is_complete(self, form_data):
        return True

    def render(self, form_data, update, mark_complete):
        st.subheader("Let's scope your project")
        st.write(
            "A few quick questions about what you want to build, who it is for, "
            "and the timeline and budget you have in mind. Your answers are saved "
            "as you go, so you can come back later."
        )


class ProjectTypeRenderer(StepRenderer):
    section_key = STEP_PROJECT_TYPE

    def is_complete(self, form_data):
        return _filled(_section(form_data, self.section_key), "type")

    def render(self, form_data, update, mark_complete):
        section = _section(form_data, self.section_key)
        ids = [p.id for p in PROJECT_TYPES]

        st.subheader("What are you building?")
        chosen = st.radio(
            "Project type",
            ids,
            index=_option_index(ids, section.get("type")),
            format_func=project_type_name,
            key="wiz_project_type",
        )
        scale = st.select_slider(
            "Project scale",
            options=PROJECT_SCALES,
            value=section.get("scale") or "medium",
            key="wiz_project_scale",
        )

        info = next((p for p in PROJECT_TYPES if p.id == chosen), None)
        if info:
            st.caption(info.description)
            if info.timeline:
                st.caption(f"Timeline: {info.timeline}")

        changes = {}
        if chosen and chosen != section.get("type"):
            changes["type"] = chosen
        if scale != section.get("scale"):
            changes["scale"] = scale
        if changes:
            update(changes)
            section.update(changes)

        self._report({self.section_key: section}, mark_complete)


class BusinessContextRenderer(StepRenderer):
    section_key = STEP_BUSINESS_CONTEXT
    required = ("companyName", "industry")

    def is_complete(self, form_data):
        return _filled(_section(form_data, self.section_key), *self.required)

    def render(self, form_data, update, mark_complete):
        section = _section(form_data, self.section_key)

        st.subheader("Tell us about your business")
        values = {
            "companyName": st.text_input("Company name *", section.get("companyName", ""), key="wiz_company"),
            "industry": st.text_input(
                "Industry *",
                section.get("industry", ""),
                placeholder="Technology, Healthcare, Education, etc.",
                key="wiz_industry",
            ),
            "website": st.text_input("Website", section.get("website", ""), key="wiz_website"),
            "targetAudience": st.text_area(
                "Target audience",
                section.get("targetAudience", ""),
                placeholder="Describe your ideal customers or users",
                key="wiz_audience",
            ),
            "teamSize": st.text_input("Team size", section.get("teamSize", ""), key="wiz_team_size"),
        }

        socials = dict(section.get("socialLinks") or {})
        with st.expander("Social media"):
            new_socials = {
                p: st.text_input(p.capitalize(), socials.get(p, ""), key=f"wiz_social_{p}")
                for p in SOCIAL_PLATFORMS
            }

        changes = {k: v for k, v in values.items() if v != section.get(k, "")}
        if new_socials != {p: socials.get(p, "") for p in SOCIAL_PLATFORMS}:
            changes["socialLinks"] = new_socials
        if changes:
            update(changes)
            section.update(changes)

        if not self.is_complete({self.section_key: section}):
            st.caption("Company name and industry are required.")
        self._report({self.section_key: section}, mark_complete)


class TimelineBudgetRenderer(StepRenderer):
    section_key = STEP_TIMELINE_BUDGET

    def is_complete(self, form_data):
        return _filled(_section(form_data, self.section_key), "timeline", "budget")

    def render(self, form_data, update, mark_complete):
        section = _section(form_data, self.section_key)

        st.subheader("Project timeline & budget")
        values = {
            "timeline": st.radio(
                "Timeline",
                TIMELINE_OPTIONS,
                index=_option_index(TIMELINE_OPTIONS, section.get("timeline")),
                horizontal=True,
                key="wiz_timeline",
            ),
            "budget": st.radio(
                "Budget",
                BUDGET_OPTIONS,
                index=_option_index(BUDGET_OPTIONS, section.get("budget")),
                horizontal=True,
                key="wiz_budget",
            ),
            "goals": st.text_area("Main goal", section.get("goals", ""), key="wiz_goals"),
        }

        changes = {k: v for k, v in values.items() if v is not None and v != section.get(k)}
        if changes:
            update(changes)
            section.update(changes)

        self._report({self.section_key: section}, mark_complete)


class FeaturesRenderer(StepRenderer):
    section_key = STEP_FEATURES

    def is_complete(self, form_data):
        features = form_data.get(self.section_key) or {}
        return bool(selected_feature_labels(features))

    def render(self, form_data, update, mark_complete):
        features = dict(form_data.get(self.section_key) or {})
        if not features:
            features = initial_feature_map()
            update(features)

        st.subheader("What features do you need?")
        categories = []
        for f in FEATURE_OPTIONS:
            if f.category not in categories:
                categories.append(f.category)

        for tab, category in zip(st.tabs(categories), categories):
            with tab:
                for option in (f for f in FEATURE_OPTIONS if f.category == category):
                    current = features.get(option.id) or {}
                    c1, c2 = st.columns([3, 1])
                    with c1:
                        selected = st.checkbox(
                            option.name,
                            value=bool(current.get("selected")),
                            help=option.description,
                            key=f"wiz_feature_{option.id}",
                        )
                    with c2:
                        must = st.toggle(
                            "Must have",
                            value=current.get("priority") == PRIORITY_MUST_HAVE,
                            disabled=not selected,
                            key=f"wiz_priority_{option.id}",
                        )
                    if selected != bool(current.get("selected")):
                        features = toggle_selected(features, option.id)
                    if must != (features[option.id].get("priority") == PRIORITY_MUST_HAVE):
                        features = toggle_priority(features, option.id)

        if features != form_data.get(self.section_key):
            update(features)

        self._report({self.section_key: features}, mark_complete)


class SummaryRenderer(StepRenderer):
    def __init__(self, on_edit: Optional[Callable[[str], Any]] = None):
        self.on_edit = on_edit

    def is_complete(self, form_data):
        return True

    def render(self, form_data, update, mark_complete):
        st.subheader("Review your project")

        for key, label in SECTION_LABELS.items():
            with st.container(border=True):
                c1, c2 = st.columns([5, 1])
                with c1:
                    st.markdown(f"**{label}**")
                    self._render_section(key, form_data.get(key))
                with c2:
                    if self.on_edit and st.button("Edit", key=f"wiz_edit_{key}"):
                        self.on_edit(key)
                        st.rerun()

    def _render_section(self, key: str, value: Any) -> None:
        if not value:
            st.caption("(not provided)")
            return
        if key == STEP_FEATURES:
            for feature_id, v in value.items():
                if isinstance(v, Mapping) and v.get("selected"):
                    st.write(f"- {feature_id} ({format_priority(v.get('priority'))})")
            return
        if key == STEP_PROJECT_TYPE and isinstance(value, Mapping):
            st.write(f"{project_type_name(value.get('type', ''))} ({value.get('scale') or 'medium'})")
            return
        if isinstance(value, Mapping):
            for k, v in value.items():
                if v and not isinstance(v, Mapping):
                    st.write(f"{k}: {v}")
            return
        st.write(str(value))


RENDERER_TYPES: Dict[StepKind, Type[StepRenderer]] = {
    StepKind.WELCOME: WelcomeRenderer,
    StepKind.PROJECT_TYPE: ProjectTypeRenderer,
    StepKind.BUSINESS_CONTEXT: BusinessContextRenderer,
    StepKind.TIMELINE_BUDGET: TimelineBudgetRenderer,
    StepKind.FEATURES: FeaturesRenderer,
    StepKind.SUMMARY: SummaryRenderer,
}

_missing = set(StepKind) - set(RENDERER_TYPES)
if _missing:
    raise WizardError(f"No renderer for step kinds: {sorted(k.value for k in _missing)}")


def build_renderers(on_edit: Optional[Callable[[str], Any]] = None) -> Dict[StepKind, StepRenderer]:
    renderers: Dict[StepKind, StepRenderer] = {}
    for kind, cls in RENDERER_TYPES.items():
        renderers[kind] = cls(on_edit) if cls is SummaryRenderer else cls()
    return renderers
