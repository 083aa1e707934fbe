import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from cpm.__main__ import main, parse_activity


class CommandLineTestCase(unittest.TestCase):
    def tearDown(self):
        plt.close("all")

    def run_main(self, argv):
        out = io.StringIO()
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_parse_activity(self):
        self.assertEqual(parse_activity("C:A,B:2"), ("C", "A,B", "2"))
        self.assertEqual(parse_activity("A::5"), ("A", "", "5"))

    def test_schedule_from_arguments(self):
        code, out, _ = self.run_main(
            ["-a", "A:None:4", "-a", "B:None:3", "-a", "C:A,B:2"]
        )

        self.assertEqual(code, 0)
        self.assertIn("Critical Paths (6 days):", out)
        self.assertIn("  B -> C (5 days)", out)
        self.assertIn("####", out)

    def test_insertion_order_flag(self):
        _, topological, _ = self.run_main(["-a", "B:A:3", "-a", "A:None:5"])
        _, insertion, _ = self.run_main(
            ["--order", "insertion", "-a", "B:A:3", "-a", "A:None:5"]
        )

        self.assertIn("Project Duration: 8 days", topological)
        self.assertIn("Project Duration: 5 days", insertion)

    def test_invalid_activity(self):
        code, _, err = self.run_main(["-a", "A:None:zero"])

        self.assertEqual(code, 1)
        self.assertIn("Invalid activity 'A'", err)

    def test_cycle_exits_with_error(self):
        code, out, _ = self.run_main(["-a", "A:B:1", "-a", "B:A:1"])

        self.assertEqual(code, 1)
        self.assertIn("cycle", out)

    def test_no_arguments_prints_help(self):
        code, out, _ = self.run_main([])

        self.assertEqual(code, 1)
        self.assertIn("usage:", out)

    def test_non_positive_limits_are_usage_errors(self):
        for argv in [
            ["--max-paths", "0", "-a", "A:None:1"],
            ["--max-paths", "-3", "-a", "A:None:1"],
            ["--max-depth", "0", "-a", "A:None:1"],
            ["--max-depth", "deep", "-a", "A:None:1"],
        ]:
            with self.subTest(argv=argv):
                with self.assertRaises(SystemExit) as ctx:
                    self.run_main(argv)
                self.assertEqual(ctx.exception.code, 2)

    def test_max_depth_flag(self):
        code, out, _ = self.run_main(
            ["--max-depth", "1", "-a", "A:None:5", "-a", "B:A:3"]
        )

        self.assertEqual(code, 1)
        self.assertIn("exceeds the maximum depth of 1", out)

    def test_example_writes_network_diagram(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            filename = os.path.join(temp_dir, "network.png")
            code, out, _ = self.run_main(["--example", "--network", filename])

            self.assertEqual(code, 0)
            self.assertTrue(os.path.exists(filename))
            self.assertIn(f"Network diagram saved to {filename}", out)

    def test_example(self):
        code, out, _ = self.run_main(["--example"])

        self.assertEqual(code, 0)
        self.assertIn("Running example project...", out)
        self.assertIn("Critical Paths", out)


if __name__ == "__main__":
    unittest.main()
