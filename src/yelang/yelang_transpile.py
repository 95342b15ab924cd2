"""
Provides the `Transpiler` class and the pipeline entry points for yelang.

Classes and Features:
    - Transpiler: Binds one target descriptor (e.g. "js", "c", "py") and emits
      Programs through the generic emitter.
    - tokenize / parse / emit: The three core stages, re-exported here.
    - compile_source: Runs the whole pipeline on source text.

Usage:
    >>> compile_source('ye x = 5; bol x;', "py")
    'def main():\\n    x = 5\\n    print(x)\\n\\nif __name__ == "__main__":\\n    main()\\n'

Raises:
    UnsupportedTargetError: If the target language is not registered.
    LexError: If the source cannot be tokenized.
    ParseError: If the tokens do not match the grammar.
    UnsupportedNodeError: If the emitter meets a node it cannot render (FAIL policy).
"""

import logging

from yelang.emitters.descriptors import DEFAULT_TARGET, TargetDescriptor, get_descriptor
from yelang.emitters.generic_emitter import UnsupportedNodePolicy, emit_program
from yelang.yelang_ast import Program
from yelang.yelang_keywords import KeywordTable
from yelang.yelang_lexer import tokenize
from yelang.yelang_parser import parse

logger = logging.getLogger(__name__)


class Transpiler:
    """Renders yelang Programs for one target language.

    The descriptor is resolved at construction, so an unknown target fails
    before any source is lexed or parsed.

    Attributes:
        descriptor (TargetDescriptor): Rendering rules of the selected target.
        policy (UnsupportedNodePolicy): Handling of nodes without a rendering rule.
    """

    def __init__(
        self,
        target: str = DEFAULT_TARGET,
        policy: UnsupportedNodePolicy = UnsupportedNodePolicy.FAIL,
    ) -> None:
        """Initializes the transpiler with the desired output target.

        Args:
            target: Target name or alias ("js", "python", "rs", ...), case-insensitive.
            policy: Unsupported-node policy applied to every target alike.

        Raises:
            UnsupportedTargetError: If the target language is not registered.
        """
        self.descriptor: TargetDescriptor = get_descriptor(target)
        self.policy = UnsupportedNodePolicy(policy)
        logger.debug("Selected target %s", self.descriptor.name)

    def transpile(self, program: Program) -> str:
        """Transpiles a Program into source code for the selected target.

        Raises:
            UnsupportedNodeError: Under the FAIL policy, if `program` holds a node
                outside the AST variant set (or is not a Program at all).
        """
        return emit_program(program, self.descriptor, self.policy)


def emit(
    program: Program,
    target: str,
    policy: UnsupportedNodePolicy = UnsupportedNodePolicy.FAIL,
) -> str:
    """Renders `program` for `target`.

    Raises:
        UnsupportedTargetError: If `target` has no registered descriptor.
    """
    return Transpiler(target, policy).transpile(program)


def compile_source(
    source: str,
    target: str = DEFAULT_TARGET,
    keywords: KeywordTable | None = None,
    strict: bool = True,
    policy: UnsupportedNodePolicy = UnsupportedNodePolicy.FAIL,
) -> str:
    """Lexes, parses and emits `source` for `target` in one atomic run.

    The target is resolved first; nothing is lexed for an unknown target.
    """
    transpiler = Transpiler(target, policy)
    tokens = tokenize(source, keywords)
    program = parse(tokens, strict=strict)
    return transpiler.transpile(program)


__all__ = ["Transpiler", "compile_source", "emit", "parse", "tokenize"]
