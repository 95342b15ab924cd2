"""
yelang CLI Entrypoint.

This module is the driver around the yelang core: it resolves paths and the
target language, reads the source, runs lex → parse → emit, and writes the
generated code. The core itself performs no I/O; everything touching files,
stdout and exit codes lives here.

Features:
    - Read source from a file, or inline with `-s`.
    - Pick the target from `-t`, else from the extension of `-o`, else JavaScript.
    - Derive the output path from the input path when `-o` is not given.
    - Dump tokens and the AST (as JSON) for inspection.
    - Load extra keyword spellings from a JSON file.
    - Report any failure as a logged error and a non-zero exit status.

Example usage:
    yelang hello.ye                 # writes hello.js
    yelang hello.ye -o hello.rs     # target taken from the extension
    yelang hello.ye -t py --stdout
    yelang -s "ye x = 5; bol x" -t c --stdout

Functions:
    resolve_target(target, out) -> str
    resolve_output(source_path, out, target) -> str
    run_yelang(...) -> str
    main(argv=None) -> int
"""

import argparse
import json
import logging
import os
import sys

from yelang.emitters.descriptors import DEFAULT_TARGET, TARGETS, get_descriptor
from yelang.emitters.generic_emitter import UnsupportedNodePolicy
from yelang.yelang_errors import YelangError
from yelang.yelang_keywords import KeywordTable
from yelang.yelang_lexer import tokenize
from yelang.yelang_parser import parse
from yelang.yelang_transpile import Transpiler

logger = logging.getLogger(__name__)


def resolve_target(target: str | None = None, out: str | None = None) -> str:
    """Chooses the target: explicit flag, then output extension, then the default."""
    if target:
        return get_descriptor(target).name
    if out:
        extension = os.path.splitext(out)[1].lstrip(".")
        if extension:
            return get_descriptor(extension).name
    return DEFAULT_TARGET


def resolve_output(source_path: str, out: str | None, target: str) -> str:
    """Returns `out`, or `source_path` with its extension replaced by the target's."""
    if out:
        return out
    stem, _ = os.path.splitext(source_path)
    return f"{stem}.{get_descriptor(target).name}"


def run_yelang(
    source: str,
    is_string: bool = False,
    target: str | None = None,
    out: str | None = None,
    to_stdout: bool = False,
    dump_tokens: bool = False,
    dump_ast: bool = False,
    keywords_path: str | None = None,
    strict: bool = True,
    policy: UnsupportedNodePolicy = UnsupportedNodePolicy.FAIL,
) -> str:
    """
    Run the yelang toolchain: lex, parse, emit, then print or write the result.

    Args:
        source: Path to a source file, or raw code when `is_string` is True.
        is_string: Treat `source` as inline code. Output then goes to stdout
            unless `out` is given.
        target: Target name or alias; None means "from `out`, else js".
        out: Output file path.
        to_stdout: Print the generated code instead of writing a file.
        dump_tokens: Print the token sequence before emitting.
        dump_ast: Print the AST as JSON before emitting.
        keywords_path: JSON file with extra keyword spellings.
        strict: Reject tokens that cannot begin a statement.
        policy: Unsupported-node policy for the emitter.

    Returns:
        The generated code.

    Raises:
        YelangError: On any lexing, parsing, target or emission failure.
        OSError: If the source cannot be read or the output cannot be written.
    """
    resolved = resolve_target(target, out)
    transpiler = Transpiler(resolved, policy)

    keywords = KeywordTable.from_json(keywords_path) if keywords_path else None

    if is_string:
        text = source
    else:
        with open(source, encoding="utf-8") as f:
            text = f.read()

    tokens = tokenize(text, keywords)
    if dump_tokens:
        print("Tokens:")
        for tok in tokens:
            print(f"  {tok.type:<12} {tok.value!r}")

    program = parse(tokens, strict=strict)
    if dump_ast:
        print("AST:")
        print(json.dumps(program.to_dict(), indent=2))

    code = transpiler.transpile(program)

    if to_stdout or (is_string and not out):
        print(code, end="")
    else:
        path = resolve_output(source, out, resolved)
        with open(path, "w", encoding="utf-8") as f:
            f.write(code)
        logger.info("Code saved to %s", path)
    return code


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yelang",
        description="Translate yelang source into JavaScript, C, C++, Go, Rust, Kotlin, Java or Python.",
    )
    parser.add_argument("source", help="Source file, or raw code with -s")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal code"
    )
    parser.add_argument(
        "-t",
        "--target",
        type=str.lower,
        choices=sorted(TARGETS),
        help=f"Target language (default: from -o extension, else {DEFAULT_TARGET})",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output file")
    parser.add_argument(
        "--stdout", action="store_true", help="Print generated code instead of writing a file"
    )
    parser.add_argument("--dump-tokens", action="store_true", help="Print the token sequence")
    parser.add_argument("--dump-ast", action="store_true", help="Print the AST as JSON")
    parser.add_argument(
        "--keywords", metavar="JSON", help="JSON file with extra keyword spellings"
    )
    parser.add_argument(
        "--permissive",
        action="store_true",
        help=(
            "Skip tokens that cannot start a statement instead of failing; "
            "a block missing at end of input is still an error"
        ),
    )
    parser.add_argument(
        "--on-unsupported",
        choices=[p.value for p in UnsupportedNodePolicy],
        default=UnsupportedNodePolicy.FAIL.value,
        help="Fail on, or comment out, nodes a target cannot render",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the yelang CLI.

    Returns:
        0 on success, 1 if compilation or I/O failed. argparse exits with 2 on
        usage errors.
    """
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        run_yelang(
            source=args.source,
            is_string=args.string,
            target=args.target,
            out=args.out,
            to_stdout=args.stdout,
            dump_tokens=args.dump_tokens,
            dump_ast=args.dump_ast,
            keywords_path=args.keywords,
            strict=not args.permissive,
            policy=UnsupportedNodePolicy(args.on_unsupported),
        )
    except YelangError as e:
        logger.error("Compilation error: %s", e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
