import sys
import json
import logging
import argparse

from renparse_logger import get_logger, set_console_level
logger = get_logger("main")

import renparse_config as config
from renparse_enums import TabPolicy
from renparse_exceptions import RenParseError
from renparse_settings import load_settings
from parser.core import parse_file


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Parse a visual-novel script and print its AST (RenParse).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
    parser.add_argument(
        "input_file",
        help="Path to the script file to parse."
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the AST and errors as JSON instead of one node per line."
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with status 1 if any parse error was found."
    )
    parser.add_argument(
        "--show-source",
        action="store_true",
        default=None,
        help="Print the offending line and a caret under each error."
    )
    parser.add_argument(
        "--tab-policy",
        choices=[p.value for p in TabPolicy],
        default=None,
        help="How tabs in indentation are handled (default from settings)."
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log pipeline details to the console."
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {config.VERSION}"
    )
    return parser


def print_tree(nodes, indent=0, out=None):
    """Print one node per line, label bodies indented under their label."""
    out = out or sys.stdout
    for node in nodes:
        body = getattr(node, 'body', None)
        if body is not None:
            print(f"{'    ' * indent}{type(node).__name__}(line={node.line}, name={node.name!r}, "
                  f"parameters={node.parameters!r})", file=out)
            print_tree(body, indent + 1, out)
        else:
            print(f"{'    ' * indent}{node!r}", file=out)


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        set_console_level(logging.DEBUG)

    settings = load_settings()
    tab_policy = args.tab_policy or settings["tab_policy"]
    strict = settings["strict"] if args.strict is None else args.strict
    show_source = settings["show_source"] if args.show_source is None else args.show_source

    try:
        result = parse_file(args.input_file, tab_policy=tab_policy, tab_width=settings["tab_width"])
    except RenParseError as e:
        logger.critical(f"Cannot parse {args.input_file}: {e.message}")
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_tree(result.nodes)

    for error in result.errors:
        print(error.format(show_source=show_source), file=sys.stderr)

    if result.errors:
        logger.info(f"{len(result.errors)} parse errors in {result.source_name}")
        if strict:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
