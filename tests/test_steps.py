from __future__ import annotations

import unittest

from planbuilder.core.types import StepKind
from planbuilder.steps.catalog import (
    FEATURE_OPTIONS,
    initial_feature_map,
    project_type_name,
    toggle_priority,
    toggle_selected,
)
from planbuilder.steps.renderers import RENDERER_TYPES, SummaryRenderer, build_renderers


class TestFeatureMap(unittest.TestCase):
    def test_initial_map_covers_catalog(self) -> None:
        features = initial_feature_map()
        self.assertEqual(set(features), {f.id for f in FEATURE_OPTIONS})
        self.assertFalse(any(v["selected"] for v in features.values()))

    def test_toggles_return_new_maps(self) -> None:
        features = initial_feature_map()
        selected = toggle_selected(features, "payments")
        self.assertTrue(selected["payments"]["selected"])
        self.assertFalse(features["payments"]["selected"])

        prioritised = toggle_priority(selected, "payments")
        self.assertEqual(prioritised["payments"], {"selected": True, "priority": "must-have"})
        self.assertEqual(toggle_priority(prioritised, "payments")["payments"]["priority"], "nice-to-have")
        self.assertEqual(toggle_selected(selected, "payments"), features)

    def test_project_type_names(self) -> None:
        self.assertEqual(project_type_name("webapp"), "Web Application")
        self.assertEqual(project_type_name("custom"), "custom")


class TestRenderers(unittest.TestCase):
    def setUp(self) -> None:
        self.renderers = build_renderers()

    def test_every_step_kind_has_a_renderer(self) -> None:
        self.assertEqual(set(RENDERER_TYPES), set(StepKind))
        self.assertEqual(set(self.renderers), set(StepKind))

    def test_summary_receives_edit_callback(self) -> None:
        edits = []
        renderers = build_renderers(on_edit=edits.append)
        summary = renderers[StepKind.SUMMARY]
        self.assertIsInstance(summary, SummaryRenderer)
        summary.on_edit("features")
        self.assertEqual(edits, ["features"])

    def test_required_fields(self) -> None:
        r = self.renderers
        self.assertTrue(r[StepKind.WELCOME].is_complete({}))
        self.assertTrue(r[StepKind.SUMMARY].is_complete({}))

        self.assertFalse(r[StepKind.PROJECT_TYPE].is_complete({}))
        self.assertTrue(r[StepKind.PROJECT_TYPE].is_complete({"projectType": {"type": "mobile"}}))

        business = r[StepKind.BUSINESS_CONTEXT]
        self.assertFalse(business.is_complete({"businessContext": {"companyName": "Acme", "industry": "  "}}))
        self.assertTrue(business.is_complete({"businessContext": {"companyName": "Acme", "industry": "Retail"}}))

        timeline = r[StepKind.TIMELINE_BUDGET]
        self.assertFalse(timeline.is_complete({"timelineBudget": {"timeline": "1-3 months"}}))
        self.assertTrue(
            timeline.is_complete({"timelineBudget": {"timeline": "1-3 months", "budget": "$100,000+"}})
        )

    def test_features_need_one_selection(self) -> None:
        features = self.renderers[StepKind.FEATURES]
        self.assertFalse(features.is_complete({"features": initial_feature_map()}))
        self.assertTrue(features.is_complete({"features": toggle_selected(initial_feature_map(), "auth")}))


if __name__ == "__main__":
    unittest.main()
