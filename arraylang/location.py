"""
Positions in the source text, as the parser reports them.
Lines and columns follow the editor's convention: both start at one.
"""
from typing import NamedTuple, Mapping, Any

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	start_line: int
	start_column: int
	end_line: int
	end_column: int
	
	@classmethod
	def nowhere(cls) -> "Span":
		return cls(0, 0, 0, 0)
	
	@classmethod
	def from_mapping(cls, where:Mapping[str, Any]) -> "Span":
		start_line = int(where.get("startLine", 0))
		start_column = int(where.get("startColumn", 0))
		end_line = int(where.get("endLine", start_line))
		end_column = int(where.get("endColumn", start_column))
		return cls(start_line, start_column, end_line, end_column)
	
	def is_known(self) -> bool:
		return self.start_line > 0
	
	def width(self) -> int:
		if self.start_line != self.end_line: return 1
		return max(self.end_column - self.start_column, 1)
	
	def __str__(self):
		return "%d:%d-%d:%d" % self

def cover(first:Span, last:Span) -> Span:
	if not first.is_known(): return last
	if not last.is_known(): return first
	return Span(first.start_line, first.start_column, last.end_line, last.end_column)
