"""
Everything the evaluator does NOT compute for itself gets found here by name:
user functions, runtime capabilities, and the functions behind operator symbols.
Resolution never fails outright. It warns and passes the argument through instead.
"""
from typing import Any, Callable, Mapping, Optional
from .diagnostics import Report
from .location import Span

ENV = dict[str, Any]
RUNTIME = Mapping[str, Callable]

class _Failure:
	""" Stands in for the value of a call that raised. """
	def __repr__(self): return "ERROR"
	def __str__(self): return "ERROR"

ERROR = _Failure()

OPERATORS = {
	1: {
		"'": "ConvertToNative",
		"-": "Negative",
		"/": "Reciprocal",
	},
	2: {
		"+": "Add",
		"-": "Subtract",
		"*": "Multiply",
		"×": "Multiply",
		"/": "Divide",
		"÷": "Divide",
		"^": "Power",
		"%": "Modulus",
		"@": "MatrixMultiply",
		# TODO: strict versions (++, --, **, //) once the runtime offers them.
	},
}

def pass_through(arg):
	return arg

def merged(environment:ENV, runtime:RUNTIME) -> ENV:
	""" Runtime bindings shadow the program's own names. """
	return {**environment, **runtime}

def resolve(name:Optional[str], environment:Mapping[str, Any], report:Report) -> Callable:
	if name is not None and name in environment:
		return environment[name]
	report.warn('Foreign function "%s" not found! Passing through...' % name, "Properties: %s" % ", ".join(sorted(map(str, environment))))
	return pass_through

def operator_name(symbol:str, arity:int, report:Report) -> Optional[str]:
	try: return OPERATORS[arity][symbol]
	except KeyError:
		report.warn('Operator "%s" does not have an associated function for arity %s.' % (symbol, arity))
		return None

def compose(*fns:Callable) -> Callable:
	"""
	Right to left, as in f∘g∘h: the last function takes the initial arguments,
	and each one before it takes the previous result. No functions means identity.
	"""
	if not fns: return pass_through
	def composition(*args):
		result = fns[-1](*args)
		for fn in reversed(fns[:-1]):
			result = fn(result)
		return result
	return composition

def safe_call(fn:Callable, arg:Any, report:Report, span:Span) -> Any:
	try: return fn(arg)
	except Exception as ex:
		report.issue(span, str(ex) or type(ex).__name__)
		return ERROR
