"""
This is an evaluator for a small array-oriented expression language.

{0}

For example:

    arraylang program.json

will evaluate the parsed program in program.json and print each binding.

    arraylang program.json --source program.txt

will also illustrate any issues against the original text.

    arraylang -h

will explain all the arguments.
"""
import sys, json, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="arraylang",
	description="Evaluator for parsed array-language programs.",
)
parser.add_argument("program", help="a parsed program, as tagged JSON.")
parser.add_argument('-s', "--source", help="the source text the program was parsed from, for illustrating issues.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what happens, especially about names that fail to resolve.")
parser.add_argument('-m', "--markers", action="store_true", help="Print issues as editor markers (JSON) on stdout instead of illustrating them.")

def _display(value):
	if hasattr(value, "tolist"): return value.tolist()
	return value

def run(args):
	from .syntax import load, MalformedToken
	from .executive import interpret_sync
	try:
		text = Path(args.program).read_text(encoding="utf-8")
		ast = load(text)
	except FileNotFoundError:
		print("I see no file called %s" % args.program, file=sys.stderr)
		return 1
	except (json.JSONDecodeError, MalformedToken) as ex:
		print("Something went pear-shaped while trying to read %s: %s" % (args.program, ex), file=sys.stderr)
		return 1
	outcome = interpret_sync(ast, verbose=args.verbose)
	if isinstance(outcome.result, dict):
		for key, value in outcome.result.items():
			print("%s = %s" % (key, _display(value)))
	else:
		print(_display(outcome.result))
	if args.markers:
		print(json.dumps([i.as_marker() for i in outcome.issues]))
	elif outcome.issues:
		source = Path(args.source).read_text(encoding="utf-8") if args.source else None
		from .diagnostics import complain_to_console
		complain_to_console(outcome.issues, source)
	return 1 if outcome.issues else 0

def main(argv=None):
	argv = sys.argv[1:] if argv is None else argv
	if argv:
		return run(parser.parse_args(argv))
	else:
		print(__doc__.strip().format(parser.format_usage()))
		return 0
