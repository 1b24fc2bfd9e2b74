"""
This is the overall control for one evaluation.
Each call gets a brand-new environment and report, so no two runs can see each other's state.
"""
from typing import Any, Mapping, NamedTuple, Optional, Union

from . import syntax
from .diagnostics import Issue, Report
from .evaluator import Evaluator
from .foreign import ENV, RUNTIME, ERROR
from .location import Span
from .runtime import default_runtime

class Outcome(NamedTuple):
	"""
	`issues` is the run's own list, not a copy: closures left in `state` keep
	reporting into it when a caller invokes them after the run.
	"""
	result: Any
	issues: list[Issue]
	state: ENV

	def as_dict(self) -> dict:
		""" What the editor side consumes. """
		return {
			"success": {
				"result": self.result,
				"issues": [i.as_marker() for i in self.issues],
				"state": self.state,
			}
		}

def interpret_sync(ast:Union[syntax.Token, Mapping], runtime:Optional[RUNTIME]=None, *, verbose:int=0) -> Outcome:
	if runtime is None: runtime = default_runtime()
	state = {}
	report = Report(verbose=verbose)
	root = None
	try:
		root = syntax.decode(ast)
		result = Evaluator(runtime, report).evaluate(root, state)
	except RecursionError as ex:
		span = Span.nowhere() if root is None else root.span
		report.issue(span, "Program nests too deeply to evaluate: %s" % ex)
		return Outcome(ERROR, report.issues, state)
	report.info("Evaluated %s with %d issue(s)." % (root.kind(), len(report.issues)))
	return Outcome(result, report.issues, state)

async def interpret(ast:Union[syntax.Token, Mapping], runtime:Optional[RUNTIME]=None, *, verbose:int=0) -> Outcome:
	"""
	For callers that expect a deferred result.
	Nothing here actually suspends; the evaluation is synchronous from start to finish.
	"""
	return interpret_sync(ast, runtime, verbose=verbose)
