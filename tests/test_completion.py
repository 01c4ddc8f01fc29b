from __future__ import annotations

import unittest

from planbuilder.scoring.completion import compute_completion, merge_project_data


class TestCompletion(unittest.TestCase):
    def test_empty_is_zero(self) -> None:
        result = compute_completion({})
        self.assertEqual(result.percentage, 0)
        self.assertEqual(len(result.missing), 6)

    def test_partial(self) -> None:
        result = compute_completion(
            {
                "title": "Shop",
                "businessContext": {"industry": "Retail"},
                "budget": {"estimated_total": 0},
            }
        )
        self.assertEqual(result.present, ["title", "businessContext"])
        self.assertEqual(result.percentage, 33)

    def test_all_fields(self) -> None:
        data = {
            "title": "Shop",
            "description": "Online store",
            "businessContext": {"companyName": "Acme"},
            "goals": "Sell online",
            "features": {"core": ["Cart"]},
            "budget": {"estimated_total": 10000, "currency": "USD"},
        }
        self.assertEqual(compute_completion(data).percentage, 100)

    def test_merge_tracks_last_field_and_percentage(self) -> None:
        current = {"title": "Shop"}
        merged = merge_project_data(current, {"goals": "Sell online", "budget": {"estimated_total": 5}})

        self.assertEqual(merged["lastUpdatedField"], "goals")
        self.assertEqual(merged["completionPercentage"], 50)
        self.assertEqual(current, {"title": "Shop"})

    def test_merge_replaces_top_level_keys(self) -> None:
        merged = merge_project_data({"budget": {"estimated_total": 5, "currency": "EUR"}}, {"budget": {"estimated_total": 9}})
        self.assertEqual(merged["budget"], {"estimated_total": 9})


if __name__ == "__main__":
    unittest.main()
