import io
import unittest
from unittest import mock
import numpy as np

from arraylang import interpret, interpret_sync, Outcome, ERROR
from arraylang import syntax
from builders import (
	located, program, assign, ref, tensor, function, apply, compose,
	binary, unary, implicit,
)

def _always_fails(arg):
	raise RuntimeError("no can do")

FAILING = {name: _always_fails for name in ("Add", "Tensor", "Negative", "Mean")}

SAMPLE = program(
	assign("w", implicit(tensor([[1, 2], [3, 4]]))),
	assign("v", binary("@", ref("w"), tensor([[1], [1]]))),
	assign("m", apply("Mean", ref("v"))),
	assign("n", located(binary("/", tensor([1.0]), tensor([0.0])), 4, 5, 14)),
	assign("back", unary("'", ref("v"))),
)

@mock.patch("sys.stderr", new_callable=io.StringIO)
class InterpretSyncTests(unittest.TestCase):

	def test_default_runtime(self, stderr):
		outcome = interpret_sync(SAMPLE)
		self.assertIsInstance(outcome, Outcome)
		np.testing.assert_array_equal([[3], [7]], outcome.result["v"])
		self.assertEqual(5.0, outcome.result["m"])
		self.assertEqual([[3], [7]], outcome.result["back"])
		self.assertIs(ERROR, outcome.result["n"])
		[issue] = outcome.issues
		self.assertEqual((4, 5, 4, 14), (issue.start_line, issue.start_column, issue.end_line, issue.end_column))

	def test_state_holds_every_binding(self, stderr):
		outcome = interpret_sync(SAMPLE)
		self.assertEqual({"w", "v", "m", "n", "back"}, set(outcome.state))

	def test_accepts_decoded_tokens(self, stderr):
		outcome = interpret_sync(syntax.decode(program(assign("x", tensor(1)))))
		self.assertEqual({"x": 1}, outcome.result)

	def test_never_raises_on_failing_runtime(self, stderr):
		outcome = interpret_sync(program(
			assign("a", binary("+", tensor(1), tensor(2))),
			assign("b", implicit(tensor(3))),
			assign("c", unary("-", ref("a"))),
			assign("d", apply("Mean", ref("b"))),
		), FAILING)
		self.assertTrue(all(v is ERROR for v in outcome.result.values()))
		self.assertEqual(4, len(outcome.issues))
		self.assertEqual({"no can do"}, {i.message for i in outcome.issues})

	def test_fresh_state_per_call(self, stderr):
		interpret_sync(program(assign("secret", tensor(1))))
		outcome = interpret_sync(program(assign("y", ref("secret"))))
		self.assertIsNone(outcome.result["y"])
		self.assertNotIn("secret", outcome.state)

	def test_repeatable(self, stderr):
		first = interpret_sync(SAMPLE)
		second = interpret_sync(SAMPLE)
		self.assertEqual(first.issues, second.issues)
		self.assertEqual(set(first.result), set(second.result))
		self.assertEqual(first.result["m"], second.result["m"])
		self.assertEqual(first.result["back"], second.result["back"])

	def test_composition_with_default_runtime(self, stderr):
		outcome = interpret_sync(program(
			assign("pipeline", compose("Sum", "Transpose", "Tensor")),
			assign("total", apply("pipeline", tensor([[1, 2], [3, 4]]))),
		))
		self.assertEqual(10, outcome.result["total"])

	def test_function_with_default_runtime(self, stderr):
		outcome = interpret_sync(program(
			assign("square", function("x", binary("*", ref("x"), ref("x")))),
			assign("nine", apply("square", tensor(3))),
		))
		self.assertEqual(9, outcome.result["nine"])

	def test_as_dict(self, stderr):
		outcome = interpret_sync(program(assign("x", apply("Mean", tensor("text")))))
		shaped = outcome.as_dict()["success"]
		self.assertEqual({"result", "issues", "state"}, set(shaped))
		self.assertEqual("error", shaped["issues"][0]["severity"])
		self.assertIn("startLineNumber", shaped["issues"][0])

	def test_verbose_says_more(self, stderr):
		interpret_sync(program(), verbose=1)
		self.assertIn("Evaluated Program", stderr.getvalue())

	def test_deep_nesting_from_mappings(self, stderr):
		expr = tensor(1)
		for _ in range(1000): expr = binary("+", expr, tensor(1))
		outcome = interpret_sync(program(assign("s", expr)))
		self.assertIs(ERROR, outcome.result)
		[issue] = outcome.issues
		self.assertIn("nests too deeply", issue.message)

	def test_deep_nesting_from_tokens(self, stderr):
		expr = syntax.Tensor(1)
		for _ in range(1000): expr = syntax.BinaryOperation("+", expr, syntax.Tensor(1))
		root = syntax.Program([syntax.Assignment(syntax.Path(["s"]), expr)])
		outcome = interpret_sync(root)
		self.assertTrue(outcome.issues)

	def test_closures_report_into_outcome_after_run(self, stderr):
		outcome = interpret_sync(program(assign("f", function("v", apply("Mean", ref("v"))))))
		self.assertEqual([], outcome.issues)
		self.assertIs(ERROR, outcome.state["f"]("text"))
		self.assertEqual(1, len(outcome.issues))
		self.assertIn("Cannot make a tensor", outcome.issues[0].message)

class InterpretTests(unittest.IsolatedAsyncioTestCase):

	async def test_deferred_result(self):
		outcome = await interpret(program(assign("x", binary("+", tensor(1), tensor(2)))))
		self.assertEqual(3, outcome.result["x"])
		self.assertEqual([], outcome.issues)

	@mock.patch("sys.stderr", new_callable=io.StringIO)
	async def test_deferred_failures(self, stderr):
		outcome = await interpret(program(assign("x", binary("+", tensor(1), tensor(2)))), FAILING)
		self.assertIs(ERROR, outcome.result["x"])
		self.assertEqual(1, len(outcome.issues))


if __name__ == '__main__':
	unittest.main()
