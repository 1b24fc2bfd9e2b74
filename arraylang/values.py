"""
This module defines the specialized value-types that the evaluator operates in terms of.
Numbers and arrays play themselves (the runtime makes them), but closures need more help.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence, TYPE_CHECKING
from . import syntax
from .foreign import ENV, compose

if TYPE_CHECKING:
	from .evaluator import Evaluator

class Function(ABC):
	""" A run-time object that can be applied to one argument. """
	@abstractmethod
	def __call__(self, arg) -> Any: pass

class Closure(Function):
	"""
	The run-time manifestation of a function literal: a callable value tied to its natal environment.
	The environment is held by reference, so assignments made before the call are visible.
	"""
	def __init__(self, argument:str, body:syntax.Token, environment:ENV, evaluator:"Evaluator"):
		self._argument = argument
		self._body = body
		self._environment = environment
		self._evaluator = evaluator

	def __call__(self, arg):
		inner = dict(self._environment)
		inner[self._argument] = arg
		return self._evaluator.evaluate(self._body, inner)

	def __repr__(self):
		return "<Closure %s -> %s>" % (self._argument, self._body.kind())

class Composition(Function):
	""" A pipeline of foreign functions, applied right-to-left. Nothing runs until it is called. """
	def __init__(self, names:Sequence[str], fns:Sequence[Callable]):
		assert len(names) == len(fns)
		self.names = tuple(names)
		self._fn = compose(*fns)

	def __call__(self, *args):
		return self._fn(*args)

	def __repr__(self):
		return "<Composition %s>" % " ∘ ".join(self.names)
