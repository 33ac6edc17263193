import dataclasses
import unittest

from figma_changelog.grouping.group_model import ComponentChange, GroupedEntry, Report


class TestGroupModel(unittest.TestCase):
    def test_component_grouping_key(self) -> None:
        self.assertEqual(ComponentChange("Size=S", "C1", set_name="Button").grouping_key, "Button")
        self.assertEqual(ComponentChange("Icon", "C2").grouping_key, "Icon")
        self.assertEqual(ComponentChange("Icon", "C2").variant_count, 1)

    def test_grouped_entry_defaults(self) -> None:
        entry = GroupedEntry("Button")
        self.assertEqual(entry.variant_count, 1)
        self.assertIsNone(entry.node_id)
        self.assertEqual(entry.grouping_key, "Button")

    def test_report_is_frozen(self) -> None:
        report = Report(file_key="F")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            report.version = "1.0.0"  # type: ignore[misc]
        self.assertEqual(dataclasses.replace(report, version="1.0.0").version, "1.0.0")
        self.assertIsNone(report.version)


if __name__ == "__main__":
    unittest.main()
