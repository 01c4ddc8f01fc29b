from __future__ import annotations

import unittest

from planbuilder.llm.context_builder import (
    PLAN_REQUEST,
    build_form_context,
    build_plan_prompt,
    selected_feature_labels,
)

FORM = {
    "projectType": {"type": "ecommerce", "scale": "medium"},
    "businessContext": {
        "companyName": "Acme",
        "industry": "Retail",
        "website": "https://acme.example",
        "socialLinks": {"instagram": "@acme", "twitter": ""},
    },
    "timelineBudget": {"timeline": "3-6 months", "budget": "$10,000 - $50,000", "goals": "Sell online"},
    "features": {
        "cart": {"selected": True, "priority": "must-have"},
        "search": {"selected": False, "priority": "nice-to-have"},
        "payments": {"selected": True},
    },
}


class TestFormContext(unittest.TestCase):
    def test_sections_in_wizard_order(self) -> None:
        text = build_form_context(FORM)
        lines = text.split("\n")
        self.assertTrue(lines[0].startswith("- Project Type: type: ecommerce"))
        self.assertIn("- Business Context: companyName: Acme", lines)
        self.assertEqual(lines[-1], "- Features: cart (must-have), payments (nice-to-have)")

    def test_total_budget_is_respected(self) -> None:
        text = build_form_context(FORM, max_chars=60)
        self.assertLessEqual(len(text), 60)
        self.assertEqual(build_form_context({}), "")

    def test_long_values_are_clipped(self) -> None:
        text = build_form_context({"timelineBudget": {"goals": "x" * 1000}}, max_chars_per_field=50)
        self.assertTrue(text.endswith("…"))

    def test_selected_feature_labels(self) -> None:
        self.assertEqual(selected_feature_labels(FORM["features"]), ["cart (must-have)", "payments (nice-to-have)"])
        self.assertEqual(selected_feature_labels(None), [])


class TestPlanPrompt(unittest.TestCase):
    def test_includes_answers_and_request(self) -> None:
        prompt = build_plan_prompt(FORM)
        self.assertIn("Company Name: Acme", prompt)
        self.assertIn("Website: https://acme.example", prompt)
        self.assertIn("instagram: @acme", prompt)
        self.assertNotIn("twitter", prompt)
        self.assertIn("Main Goal: Sell online", prompt)
        self.assertIn("Project Type: ecommerce (medium)", prompt)
        self.assertIn("Selected Features: cart (must-have), payments (nice-to-have)", prompt)
        self.assertTrue(prompt.endswith(PLAN_REQUEST))

    def test_missing_answers_say_not_specified(self) -> None:
        prompt = build_plan_prompt({})
        self.assertIn("Company Name: Not specified", prompt)
        self.assertIn("Target Audience: Not specified", prompt)


if __name__ == "__main__":
    unittest.main()
