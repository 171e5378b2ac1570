import argparse
import itertools
import json
import os
import sys

from amb.debug import log
from amb.desugar import desugar
from amb.errors import AmbCompileError, AmbConfigError
from amb.introspection import bound_names, choice_dimensions, describe_program
from amb.runtime.config import load_run_config
from compiler import compile_source, set_verbose

EXAMPLE_SOURCE = """// Pairs that add up to five
amb {
    let x = choice(1..=5);
    let y = choice(1..=5);
    require(x + y == 5);
    (x, y)
}
"""


def parse_assignment(text):
    """Parse NAME=VALUE; VALUE is JSON when it parses, a string otherwise."""
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    name, raw = text.split("=", 1)
    name = name.strip()
    if not name.isidentifier():
        raise argparse.ArgumentTypeError(f"'{name}' is not a valid name")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return name, value


def parse_limit(text):
    """Parse a non-negative result limit."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got '{text}'")
    if value < 0:
        raise argparse.ArgumentTypeError(f"limit must be 0 or more, got {value}")
    return value


def read_program(filepath, verbose=False):
    set_verbose(verbose)

    if filepath is None or filepath == "-":
        source_code = sys.stdin.read()
        filepath = "<stdin>"
    elif not os.path.exists(filepath):
        print(f"Error: File '{filepath}' not found.", file=sys.stderr)
        sys.exit(1)
    else:
        with open(filepath, 'r') as f:
            source_code = f.read()

    try:
        return compile_source(filepath, source_code)
    except AmbCompileError as e:
        print(f"Error: Compilation Failed:\n{e}", file=sys.stderr)
        sys.exit(1)


def cmd_run(args):
    try:
        config = load_run_config(args.config)
    except AmbConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    program = read_program(args.filename, verbose=args.verbose)
    search = desugar(program)

    context = dict(config.context)
    context.update(dict(args.set or []))
    limit = args.limit if args.limit is not None else config.limit
    count_only = args.count or config.count_only

    results = search(context)
    if limit is not None:
        results = itertools.islice(results, limit)

    try:
        if count_only:
            print(sum(1 for _ in results))
        else:
            for result in results:
                print(result)
    except Exception as e:
        print(f"Error: Search failed: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_check(args):
    program = read_program(args.filename, verbose=args.verbose)
    rows = describe_program(program)
    if not rows:
        log("Empty program: the search yields nothing.")
        return

    print(f"{'LINE':<6}{'KIND':<9}SUMMARY")
    for row in rows:
        line = row["line"] if row["line"] is not None else "-"
        print(f"{str(line):<6}{row['kind']:<9}{row['summary']}")

    dimensions = choice_dimensions(program)
    print()
    print(f"Choice dimensions (outermost first): {', '.join(dimensions) if dimensions else 'none'}")
    names = bound_names(program)
    print(f"Bound names: {', '.join(names) if names else 'none'}")


def cmd_init(args):
    log("Initializing project...")
    if os.path.exists("main.amb"):
        log("main.amb already exists, leaving it untouched")
        return
    with open("main.amb", "w") as f:
        f.write(EXAMPLE_SOURCE)
    log("Created main.amb")


def main(argv=None):
    parser = argparse.ArgumentParser(description="amb search compiler CLI")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    subparsers = parser.add_subparsers(dest="command")

    run = subparsers.add_parser("run", help="Run a search and print its results")
    run.add_argument("filename", nargs="?", default="-", help="File to run (default: read from stdin)")
    run.add_argument("--limit", type=parse_limit, help="Stop after this many results")
    run.add_argument("--count", action="store_true", help="Print only the number of results")
    run.add_argument("--set", action="append", type=parse_assignment, metavar="NAME=VALUE",
                     help="Bind a context name visible to every step (repeatable)")
    run.add_argument("--config", help="Configuration file (default: amb.json or ~/.amb/config.json)")

    check = subparsers.add_parser("check", help="Compile a file and show its steps")
    check.add_argument("filename")

    subparsers.add_parser("init", help="Create an example main.amb")

    args = parser.parse_args(argv)

    if args.command == "run": cmd_run(args)
    elif args.command == "check": cmd_check(args)
    elif args.command == "init": cmd_init(args)
    else: parser.print_help()


if __name__ == "__main__":
    main()
