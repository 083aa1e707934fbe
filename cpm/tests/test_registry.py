import unittest
from cpm.domain.activity import Activity, ValidationError
from cpm.domain.registry import ActivityRegistry


class ActivityRegistryTestCase(unittest.TestCase):
    def setUp(self):
        self.registry = ActivityRegistry()

    def test_add_activity_appends_in_order(self):
        self.registry.add_activity("B", "None", 3)
        self.registry.add_activity("A", "", "5")
        self.registry.add_activity("C", "A,B", 2)

        self.assertEqual(len(self.registry), 3)
        self.assertEqual([a.name for a in self.registry], ["B", "A", "C"])
        self.assertEqual(self.registry.names(), ["B", "A", "C"])
        self.assertEqual(self.registry.index_of("C"), 2)
        self.assertIn("A", self.registry)
        self.assertNotIn("Z", self.registry)

    def test_get(self):
        activity = self.registry.add_activity("A", "None", 5)
        self.assertIs(self.registry.get("A"), activity)
        self.assertIsNone(self.registry.get("Z"))

    def test_invalid_input_leaves_registry_unchanged(self):
        self.registry.add_activity("A", "None", 5)

        with self.assertRaises(ValidationError):
            self.registry.add_activity("", "None", 5)
        with self.assertRaises(ValidationError):
            self.registry.add_activity("B", "A", "0")
        with self.assertRaises(ValidationError):
            self.registry.add_activity("B", "A", "three")

        self.assertEqual(self.registry.names(), ["A"])

    def test_unreferenceable_names_rejected(self):
        with self.assertRaises(ValidationError):
            self.registry.add_activity("None", "", 2)
        with self.assertRaises(ValidationError):
            self.registry.add_activity("X,Y", "", 2)

        self.assertEqual(len(self.registry), 0)

    def test_duplicate_name_rejected_by_default(self):
        self.registry.add_activity("A", "None", 5)
        with self.assertRaises(ValidationError):
            self.registry.add_activity("A", "None", 2)
        self.assertEqual(len(self.registry), 1)

    def test_duplicate_name_kept_when_allowed(self):
        registry = ActivityRegistry(allow_duplicate_names=True)
        first = registry.add_activity("A", "None", 5)

        with self.assertLogs("cpm.domain.registry", level="WARNING"):
            second = registry.add_activity("A", "None", 2)

        self.assertEqual(len(registry), 2)
        self.assertIs(registry.get("A"), first)
        self.assertEqual(registry.unique_activities(), [first])
        self.assertEqual(registry.duplicates(), [second])

    def test_add_rejects_non_activity(self):
        with self.assertRaises(ValidationError):
            self.registry.add({"name": "A"})

    def test_activities_is_a_copy(self):
        self.registry.add(Activity("A", 1))
        self.registry.activities.append(Activity("B", 1))
        self.assertEqual(len(self.registry), 1)


if __name__ == "__main__":
    unittest.main()
