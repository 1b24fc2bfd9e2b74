"""
Two kinds of complaint come out of an evaluation:

* Issues: a foreign function blew up. These are data, positioned at the guilty token,
  and they travel back to the caller (usually an editor) with the result.
* Warnings: a name or operator did not resolve. Evaluation carries on with a stand-in,
  so these only go to the console.
"""
import sys
from functools import lru_cache
from typing import NamedTuple, Any, Optional
from boozetools.support.failureprone import SourceText, illustration

from .location import Span

ERROR_SEVERITY = "error"

class Issue(NamedTuple):
	start_line: int
	start_column: int
	end_line: int
	end_column: int
	message: str
	severity: str = ERROR_SEVERITY

	@classmethod
	def at(cls, span:Span, message:str, severity:str=ERROR_SEVERITY) -> "Issue":
		return cls(*span, message, severity)

	def span(self) -> Span:
		return Span(self.start_line, self.start_column, self.end_line, self.end_column)

	def as_marker(self) -> dict:
		""" The shape an editor wants for a squiggly underline. """
		return {
			"startLineNumber": self.start_line,
			"startColumn": self.start_column,
			"endLineNumber": self.end_line,
			"endColumn": self.end_column,
			"message": self.message,
			"severity": self.severity,
		}

	def illustrate(self, text:str) -> str:
		span = self.span()
		if not span.is_known(): return self.message
		source = _fetch(text)
		row, col = source.find_row_col(_offset(text, span))
		single_line = source.line_of_text(row)
		return illustration(single_line, col, span.width(), prefix='% 6d |' % span.start_line, caption=self.message)

class Report:
	""" The issues and warnings of exactly one evaluation. Never share one between runs. """
	issues : list[Issue]
	warnings : list[str]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self.issues = []
		self.warnings = []

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	def issue(self, span:Span, message:str):
		self.issues.append(Issue.at(span, message))

	def warn(self, message:str, *details:Any):
		self.warnings.append(message)
		print(message, file=sys.stderr)
		if self._verbose:
			for d in details: print("   ", d, file=sys.stderr)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self, text:Optional[str]=None):
		""" Emit all the issues to the console, illustrated if the source text is at hand. """
		complain_to_console(self.issues, text)

def _offset(text:str, span:Span) -> int:
	lines = text.splitlines(keepends=True)
	before = sum(len(line) for line in lines[:span.start_line-1])
	return min(before + max(span.start_column-1, 0), max(len(text)-1, 0))

@lru_cache(5)
def _fetch(text:str) -> SourceText:
	return SourceText(text)

def complain_to_console(issues, text:Optional[str]=None):
	""" Emit the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print("%d issue(s) during evaluation." % len(issues), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		if text is None: print("%s: %s" % (i.span(), i.message), file=sys.stderr)
		else: print(i.illustrate(text), file=sys.stderr)
	sys.stderr.flush()
