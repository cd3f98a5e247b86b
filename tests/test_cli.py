"""
Test suite for the sysml-parse command.

Author: xwest
"""

import json
import os
import sys
import unittest

from click.testing import CliRunner

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from sysml.cli import main, node_label
from sysml.parser import ASTNode, NodeType


MODEL = """package Plant {
  part Pump specializes Machine {
    attribute flow : Real = 12.5;
  }
  use case Operate { }
}
"""


class TestCli(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    def _invoke(self, args, source=MODEL):
        with self.runner.isolated_filesystem():
            with open("model.sysml", "w", encoding="utf-8") as f:
                f.write(source)
            return self.runner.invoke(main, args + ["model.sysml"])

    def test_tree_output(self):
        result = self._invoke([])
        self.assertEqual(result.exit_code, 0, result.output)
        for name in ("Plant", "Pump", "flow", "Operate"):
            self.assertIn(name, result.output)
        self.assertIn("4 elements", result.output)

    def test_json_output(self):
        result = self._invoke(["--format", "json"])
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["type"], "root")
        package = data["children"][0]
        self.assertEqual(package["properties"], {"name": "Plant"})
        self.assertEqual(package["children"][0]["properties"]["specializes"], "Machine")

    def test_json_output_with_malformed_number(self):
        result = self._invoke(["--format", "json"], source="attribute a = 1.2.3;")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn("NaN", result.output)
        data = json.loads(result.output)
        self.assertEqual(data["children"][0]["properties"]["defaultValue"], {"$float": "nan"})

    def test_file_with_byte_order_mark(self):
        with self.runner.isolated_filesystem():
            with open("model.sysml", "w", encoding="utf-8-sig") as f:
                f.write("package P { part A; }")
            result = self.runner.invoke(main, ["--format", "json", "model.sysml"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output)["children"][0]["properties"], {"name": "P"})

    def test_tokens_output(self):
        result = self._invoke(["--format", "tokens"], source="part A;")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("KEYWORD", result.output)
        self.assertIn("IDENTIFIER", result.output)
        self.assertIn("EOF", result.output)

    def test_parse_error_exits_with_status_1(self):
        result = self._invoke(["--format", "json", "-q"], source="part Ok; package A {")
        self.assertEqual(result.exit_code, 1)

    def test_reads_stdin(self):
        result = self.runner.invoke(main, ["--format", "json"], input="part FromStdin;")
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["children"][0]["properties"]["name"], "FromStdin")

    def test_rejects_unknown_format(self):
        result = self.runner.invoke(main, ["--format", "xml"], input="")
        self.assertNotEqual(result.exit_code, 0)


class TestNodeLabel(unittest.TestCase):

    def test_label_includes_type_and_details(self):
        node = ASTNode(NodeType.ATTRIBUTE, {"name": "mass", "type": "Real", "defaultValue": 1500.0})
        self.assertEqual(node_label(node).plain, "«attribute» mass  propType='Real' defaultValue=1500.0")

    def test_use_case_and_unnamed(self):
        self.assertEqual(node_label(ASTNode(NodeType.USECASE)).plain, "«use case» Unnamed")


if __name__ == "__main__":
    unittest.main()
