import unittest
from cpm.domain.activity import (
    Activity,
    ValidationError,
    parse_duration,
    parse_predecessors,
)


class ParsePredecessorsTestCase(unittest.TestCase):
    def test_empty_and_none_mean_no_predecessors(self):
        for text in ["", "   ", None, "None", "none", "NONE", " nOnE "]:
            with self.subTest(text=text):
                self.assertEqual(parse_predecessors(text), [])

    def test_comma_separated_names_are_trimmed(self):
        self.assertEqual(parse_predecessors("A, B ,C"), ["A", "B", "C"])

    def test_empty_items_are_dropped(self):
        self.assertEqual(parse_predecessors("A,,B,"), ["A", "B"])

    def test_repeated_names_collapse(self):
        self.assertEqual(parse_predecessors("B,A,B"), ["B", "A"])

    def test_non_string_is_rejected(self):
        with self.assertRaises(ValidationError):
            parse_predecessors(["A"])


class ParseDurationTestCase(unittest.TestCase):
    def test_valid_values(self):
        self.assertEqual(parse_duration(5), 5)
        self.assertEqual(parse_duration("7"), 7)
        self.assertEqual(parse_duration(" 12 "), 12)
        self.assertEqual(parse_duration(3.0), 3)

    def test_invalid_values(self):
        for value in [0, -1, "0", "-3", "abc", "", "2.5", 2.5, None, True]:
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    parse_duration(value)


class ActivityTestCase(unittest.TestCase):
    def test_initialization(self):
        activity = Activity("C", "5", "A, B")

        self.assertEqual(activity.name, "C")
        self.assertEqual(activity.id, "C")
        self.assertEqual(activity.duration, 5)
        self.assertEqual(activity.predecessor_text, "A, B")
        self.assertEqual(activity.predecessors, ["A", "B"])
        self.assertTrue(activity.has_predecessors())

    def test_initialization_validation(self):
        """Test validation during activity initialization."""
        # Invalid name
        with self.assertRaises(ValidationError):
            Activity("", 5)
        with self.assertRaises(ValidationError):
            Activity("   ", 5)
        with self.assertRaises(ValidationError):
            Activity(None, 5)

        # Invalid duration
        with self.assertRaises(ValidationError):
            Activity("A", 0)
        with self.assertRaises(ValidationError):
            Activity("A", "x")

    def test_names_predecessor_text_cannot_refer_to(self):
        for name in ["X,Y", "A,", "None", "none", " NONE "]:
            with self.subTest(name=name):
                with self.assertRaises(ValidationError):
                    Activity(name, 2)

        # Names merely containing the token are fine
        self.assertEqual(Activity("Nonesuch", 2).name, "Nonesuch")

    def test_name_is_trimmed(self):
        self.assertEqual(Activity("  A ", 1).name, "A")

    def test_no_predecessors(self):
        activity = Activity("A", 3, "None")
        self.assertEqual(activity.predecessors, [])
        self.assertFalse(activity.has_predecessors())
        self.assertEqual(activity.predecessor_text, "None")

    def test_dict_conversion(self):
        activity = Activity("C", 2, "A,B")
        data = activity.to_dict()

        self.assertEqual(
            data,
            {
                "name": "C",
                "duration": 2,
                "predecessor_text": "A,B",
                "predecessors": ["A", "B"],
            },
        )
        self.assertEqual(Activity.from_dict(data), activity)

        rebuilt = Activity.from_dict({"name": "D", "duration": 1, "predecessors": ["C"]})
        self.assertEqual(rebuilt.predecessors, ["C"])

    def test_repr(self):
        self.assertEqual(
            repr(Activity("B", 3, "A")),
            "Activity(name=B, duration=3, predecessors=[A])",
        )
        self.assertEqual(
            repr(Activity("A", 5)),
            "Activity(name=A, duration=5, predecessors=[None])",
        )


if __name__ == "__main__":
    unittest.main()
