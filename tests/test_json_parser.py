from __future__ import annotations

import unittest

from planbuilder.llm.json_parser import (
    NO_BLOCK,
    JSONParseError,
    extract_structured_data,
    find_json_block,
    parse_json_block,
)


class TestExtractStructuredData(unittest.TestCase):
    def test_first_fenced_block_is_parsed(self) -> None:
        text = (
            "Here is your plan.\n"
            "```json\n{\"title\": \"Shop\", \"budget\": {\"estimated_total\": 5000}}\n```\n"
            "```json\n{\"title\": \"Second\"}\n```"
        )
        result = extract_structured_data(text)
        self.assertTrue(result.ok)
        self.assertEqual(result.data["title"], "Shop")
        self.assertIsNone(result.error)

    def test_no_block(self) -> None:
        result = extract_structured_data("Just prose, no data.")
        self.assertFalse(result.ok)
        self.assertEqual(result.error, NO_BLOCK)
        self.assertIsNone(find_json_block(""))

    def test_malformed_block_fails_without_raising(self) -> None:
        result = extract_structured_data("```json\n{title: nope\n```")
        self.assertFalse(result.ok)
        self.assertIsNone(result.data)
        self.assertIn("Failed to parse JSON", result.error)

    def test_common_model_slips_are_repaired(self) -> None:
        data = parse_json_block('{"ready": True, "score": .7, "items": [1, 2,],}')
        self.assertEqual(data, {"ready": True, "score": 0.7, "items": [1, 2]})

    def test_non_object_json_is_rejected(self) -> None:
        with self.assertRaises(JSONParseError):
            parse_json_block("[1, 2, 3]")
        with self.assertRaises(JSONParseError):
            parse_json_block("   ")

    def test_fence_tag_is_case_insensitive(self) -> None:
        self.assertEqual(find_json_block("```JSON\r\n{\"a\": 1}\r\n```"), '{"a": 1}')


if __name__ == "__main__":
    unittest.main()
