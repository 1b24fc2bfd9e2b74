"""
A default runtime environment: the built-in capabilities a program can name.

Binary capabilities receive {"a": left, "b": right}; everything else gets its bare argument.
Numeric faults are raised rather than quietly turned into inf or nan,
so the evaluator can report them against the offending expression.
"""
from types import MappingProxyType
from typing import Callable, Mapping
import numpy as np

def _strict(fn:Callable) -> Callable:
	def strict(*args):
		with np.errstate(divide="raise", invalid="raise", over="raise"):
			return fn(*args)
	strict.__name__ = fn.__name__
	strict.__doc__ = fn.__doc__
	return strict

def _binary(fn:Callable) -> Callable:
	fn = _strict(fn)
	def binary(operands):
		try: a, b = operands["a"], operands["b"]
		except (KeyError, TypeError):
			raise TypeError("%s needs a left and a right operand." % fn.__name__) from None
		return fn(tensor(a), tensor(b))
	binary.__name__ = fn.__name__
	binary.__doc__ = fn.__doc__
	return binary

def tensor(value):
	""" Coerce a literal (number or nested lists of numbers) into an array. """
	if isinstance(value, np.ndarray): return value
	it = np.asarray(value)
	if not (np.issubdtype(it.dtype, np.number) or it.dtype == np.bool_):
		raise TypeError("Cannot make a tensor from %r." % (value,))
	return it

def convert_to_native(value):
	""" Turn an array back into plain numbers and lists. """
	return tensor(value).tolist()

def _reciprocal(x):
	return np.divide(1.0, x)

def _divide(a, b):
	return np.true_divide(a, b)

def _modulus(a, b):
	return np.mod(a, b)

def _matrix_multiply(a, b):
	return np.matmul(a, b)

def _unary(fn:Callable) -> Callable:
	fn = _strict(fn)
	def unary(x): return fn(tensor(x))
	unary.__name__ = fn.__name__
	unary.__doc__ = fn.__doc__
	return unary

BUILT_IN = {
	"Tensor": tensor,
	"ConvertToNative": convert_to_native,
	"Negative": _unary(np.negative),
	"Reciprocal": _unary(_reciprocal),
	"Add": _binary(np.add),
	"Subtract": _binary(np.subtract),
	"Multiply": _binary(np.multiply),
	"Divide": _binary(_divide),
	"Power": _binary(np.power),
	"Modulus": _binary(_modulus),
	"MatrixMultiply": _binary(_matrix_multiply),
	"Mean": _unary(np.mean),
	"Sum": _unary(np.sum),
	"Transpose": _unary(np.transpose),
	"Shape": lambda x: list(tensor(x).shape),
}

def default_runtime() -> Mapping[str, Callable]:
	""" Read-only, so one copy can serve any number of evaluations. """
	return MappingProxyType(BUILT_IN)
