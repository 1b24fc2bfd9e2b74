"""
The set of parse-nodes in simple form.
The parser hands these over as tagged mappings, one per node: {"type": "Kind", ...fields}.
Function `decode` turns that shape into the classes below, bottom-up.
Each class keeps the parser's field names, except that `functionName` becomes `function_name`.
"""
import json
from typing import Any, Mapping, Sequence, Optional
from .location import Span, cover

class MalformedToken(ValueError):
	""" The parser broke its side of the bargain: something is not a tagged mapping. """
	pass

class Token:
	""" Any node of the parsed tree. """
	span: Span = Span.nowhere()

	def kind(self) -> str: return type(self).__name__

	def children(self) -> Sequence["Token"]: return ()

	def locate(self, span:Optional[Span]):
		if span is None:
			span = Span.nowhere()
			for child in self.children(): span = cover(span, child.span)
		self.span = span
		return self

	def __repr__(self):
		return "<%s %s>" % (self.kind(), self.span)

class Program(Token):
	def __init__(self, value:Sequence[Token]):
		self.value = list(value)
	def children(self): return self.value

class Assignment(Token):
	def __init__(self, path:Token, value:Token):
		self.path, self.value = path, value
	def children(self): return self.path, self.value

class Reference(Token):
	def __init__(self, value:Token):
		self.value = value
	def children(self): return self.value,

class Path(Token):
	def __init__(self, value:Sequence[str]):
		self.value = [str(segment) for segment in value]
	def __repr__(self): return "<Path %s>" % "/".join(self.value)

class Function(Token):
	def __init__(self, argument:str, value:Token):
		self.argument, self.value = argument, value
	def children(self): return self.value,

class FunctionApplication(Token):
	def __init__(self, function_name:str, argument:Token):
		self.function_name, self.argument = function_name, argument
	def children(self): return self.argument,

class FunctionComposition(Token):
	def __init__(self, list:Sequence[str]): # NOQA
		self.list = [str(name) for name in list]

class BinaryOperation(Token):
	def __init__(self, operator:str, left:Token, right:Token):
		self.operator, self.left, self.right = operator, left, right
	def children(self): return self.left, self.right

class UnaryOperation(Token):
	def __init__(self, operator:str, value:Token):
		self.operator, self.value = operator, value
	def children(self): return self.value,

class ImplicitConversion(Token):
	def __init__(self, value:Token):
		self.value = value
	def children(self): return self.value,

class Tensor(Token):
	""" The literal is already in its concrete form; nothing below it gets decoded. """
	def __init__(self, value:Any):
		self.value = value

class Object(Token):
	def __init__(self, value:Token):
		self.value = value
	def children(self): return self.value,

class Unrecognized(Token):
	""" Whatever the parser produced that this evaluator does not model (yet). """
	def __init__(self, kind:str, raw:Any=None):
		self._kind = kind
		self.raw = raw
	def kind(self): return self._kind
	def __str__(self): return "%s %r" % (self._kind, self.raw)

###############################################################################

def _sub(field:str):
	return lambda tagged: decode(tagged[field])

def _subs(field:str):
	return lambda tagged: [decode(t) for t in tagged[field]]

def _raw(field:str, default=None):
	return lambda tagged: tagged.get(field, default)

FIELDS = {
	Program: [_subs("value")],
	Assignment: [_sub("path"), _sub("value")],
	Reference: [_sub("value")],
	Path: [_raw("value", ())],
	Function: [_raw("argument"), _sub("value")],
	FunctionApplication: [_raw("functionName"), _sub("argument")],
	FunctionComposition: [_raw("list", ())],
	BinaryOperation: [_raw("operator"), _sub("left"), _sub("right")],
	UnaryOperation: [_raw("operator"), _sub("value")],
	ImplicitConversion: [_sub("value")],
	Tensor: [_raw("value")],
	Object: [_sub("value")],
}
KINDS = {cls.__name__: cls for cls in FIELDS}

def decode(tagged:Mapping[str, Any]) -> Token:
	""" Build a token tree from the parser's tagged-mapping shape. """
	if isinstance(tagged, Token): return tagged
	if not isinstance(tagged, Mapping) or "type" not in tagged:
		raise MalformedToken("Expected a mapping with a 'type' tag, got %r" % (tagged,))
	location = tagged.get("location")
	try: span = Span.from_mapping(location) if location else None
	except (AttributeError, TypeError, ValueError):
		raise MalformedToken("Bad location %r on %s token" % (location, tagged["type"])) from None
	try: cls = KINDS[tagged["type"]]
	except KeyError: return Unrecognized(str(tagged["type"]), dict(tagged)).locate(span)
	try: args = [extract(tagged) for extract in FIELDS[cls]]
	except KeyError as ex:
		raise MalformedToken("%s token lacks field %s" % (cls.__name__, ex)) from None
	return cls(*args).locate(span)

def load(text:str) -> Token:
	return decode(json.loads(text))
