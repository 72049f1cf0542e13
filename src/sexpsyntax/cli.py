"""Command-line interface for sexpsyntax."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sexpsyntax.errors import LexError, ParseError
from sexpsyntax.parser import ParseOptions

CONFIG_NAME = "sexpsyntax.toml"

_END = object()


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    parse_options: ParseOptions
    tokens: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="sexpsyntax",
        description="Tokenize and parse bracketed s-expression text",
    )
    p.add_argument("input", help="Input file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--tokens", action="store_true", help="Emit the token list instead of trees")
    p.add_argument(
        "--no-comments",
        dest="include_comments",
        action="store_const",
        const=False,
        default=None,
        help="Drop comments from the tree",
    )
    p.add_argument(
        "--no-whitespace",
        dest="include_whitespace",
        action="store_const",
        const=False,
        default=None,
        help="Drop whitespace from the tree",
    )
    p.add_argument(
        "--no-delimiters",
        dest="include_list_delimiters",
        action="store_const",
        const=False,
        default=None,
        help="Drop list delimiters from the tree",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens and trees to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    flags = {
        "include_comments": True,
        "include_whitespace": True,
        "include_list_delimiters": True,
    }
    cfg_parse = config.get("parse")
    if isinstance(cfg_parse, dict):
        for name in flags:
            value = cfg_parse.get(name)
            if isinstance(value, bool):
                flags[name] = value
    for name in flags:
        value = getattr(args, name)
        if value is not None:
            flags[name] = value

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        parse_options=ParseOptions(**flags),
        tokens=args.tokens,
        debug=args.debug,
    )


def encode_trees(trees: list[Any], indent: int = 2) -> str:
    """Serialize simplified trees as indented JSON.

    Produces the same text as ``json.dumps(trees, indent=indent,
    ensure_ascii=False)`` but walks the lists with its own stack, so deeply
    nested input does not hit the interpreter recursion limit.
    """
    parts: list[str] = []
    # Each frame: remaining items, depth, whether an item was written yet.
    stack: list[list[Any]] = []

    def open_list(items: list[Any], depth: int) -> None:
        if not items:
            parts.append("[]")
            return
        parts.append("[")
        stack.append([iter(items), depth, False])

    open_list(trees, 0)
    while stack:
        frame = stack[-1]
        items, depth, started = frame
        item = next(items, _END)
        if item is _END:
            stack.pop()
            parts.append("\n" + " " * (indent * depth) + "]")
            continue
        parts.append(("," if started else "") + "\n" + " " * (indent * (depth + 1)))
        frame[2] = True
        if isinstance(item, list):
            open_list(item, depth + 1)
        else:
            parts.append(json.dumps(item, ensure_ascii=False))

    return "".join(parts)


def process_file(options: CliOptions) -> str:
    """Read, tokenize or parse, and serialize a file to JSON.

    Raises LexError or ParseError on malformed input.
    """
    from sexpsyntax.debug import dump_tokens, dump_tree
    from sexpsyntax.lexer import tokenize
    from sexpsyntax.parser import parse
    from sexpsyntax.simplify import to_simplified_parse_trees

    text = options.input_file.read_text(encoding="utf-8")

    if options.tokens:
        tokens = tokenize(text).unwrap()
        if options.debug:
            dump_tokens(text, tokens)
        records = [
            {
                "type": tok.type.name,
                "offset": tok.offset,
                "length": tok.length,
                "line": tok.line,
                "column": tok.column,
                "lexeme": tok.lexeme(text),
            }
            for tok in tokens
        ]
        return json.dumps(records, indent=2, ensure_ascii=False) + "\n"

    opts = options.parse_options
    trees = parse(text, options=opts).unwrap()
    if options.debug:
        dump_tree(text, trees)
    simplified = to_simplified_parse_trees(
        text, trees, opts.include_comments, opts.include_whitespace
    )
    return encode_trees(simplified) + "\n"


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    try:
        output = process_file(options)
    except (LexError, ParseError) as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
