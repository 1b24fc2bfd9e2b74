"""
The tree-walker proper.

One `visit_` method per kind of token. The evaluator itself only knows which
runtime it reads and which report it writes; the environment gets threaded
through every call, because function bodies run in environments of their own.
"""
from typing import Any
from boozetools.support.foundation import Visitor

from . import syntax
from .diagnostics import Report
from .foreign import ENV, RUNTIME, merged, resolve, operator_name, safe_call
from .values import Closure, Composition

TENSOR = "Tensor"

def _key(name) -> str:
	# Names are strings, whatever the path expression produced.
	return name if isinstance(name, str) else str(name)

class Evaluator(Visitor):
	def __init__(self, runtime:RUNTIME, report:Report):
		self.runtime = runtime
		self.report = report

	def evaluate(self, token:syntax.Token, environment:ENV) -> Any:
		assert isinstance(environment, dict), environment
		return self.visit(token, environment)

	def _scope(self, environment:ENV) -> ENV:
		return merged(environment, self.runtime)

	def _call_runtime(self, name, arg, token:syntax.Token):
		fn = resolve(name, self.runtime, self.report)
		return safe_call(fn, arg, self.report, token.span)

	def visit_Program(self, token:syntax.Program, environment:ENV):
		aggregate = {}
		for assignment in token.value:
			aggregate.update(self.evaluate(assignment, environment))
		return aggregate

	def visit_Assignment(self, token:syntax.Assignment, environment:ENV):
		key = _key(self.evaluate(token.path, environment))
		value = self.evaluate(token.value, environment)
		environment[key] = value
		return {key: value}

	def visit_Reference(self, token:syntax.Reference, environment:ENV):
		key = _key(self.evaluate(token.value, environment))
		scope = self._scope(environment)
		if key in scope: return scope[key]
		self.report.warn('Cannot resolve "%s".' % key)
		return None

	def visit_Path(self, token:syntax.Path, environment:ENV):
		return "/".join(token.value)

	def visit_Function(self, token:syntax.Function, environment:ENV):
		return Closure(token.argument, token.value, environment, self)

	def visit_FunctionApplication(self, token:syntax.FunctionApplication, environment:ENV):
		value = self.evaluate(token.argument, environment)
		fn = resolve(token.function_name, self._scope(environment), self.report)
		return safe_call(fn, value, self.report, token.span)

	def visit_FunctionComposition(self, token:syntax.FunctionComposition, environment:ENV):
		scope = self._scope(environment)
		fns = [resolve(name, scope, self.report) for name in token.list]
		return Composition(token.list, fns)

	def visit_BinaryOperation(self, token:syntax.BinaryOperation, environment:ENV):
		a = self.evaluate(token.left, environment)
		b = self.evaluate(token.right, environment)
		name = operator_name(token.operator, 2, self.report)
		return self._call_runtime(name, {"a": a, "b": b}, token)

	def visit_UnaryOperation(self, token:syntax.UnaryOperation, environment:ENV):
		value = self.evaluate(token.value, environment)
		name = operator_name(token.operator, 1, self.report)
		return self._call_runtime(name, value, token)

	def visit_ImplicitConversion(self, token:syntax.ImplicitConversion, environment:ENV):
		value = self.evaluate(token.value, environment)
		return self._call_runtime(TENSOR, value, token)

	def visit_Tensor(self, token:syntax.Tensor, environment:ENV):
		return token.value

	def visit_Object(self, token:syntax.Object, environment:ENV):
		# Structural literals are not modeled yet; the wrapped value passes straight through.
		return self.evaluate(token.value, environment)

	def visit_Unrecognized(self, token:syntax.Unrecognized, environment:ENV):
		return "Unrecognized token: %s, rest: %r" % (token.kind(), token.raw)
