from typing import FrozenSet, Union

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from routica.errors import ParseError

JS_LANGUAGE = Language(tree_sitter_javascript.language())
TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

# Declarations that only exist at type level; they never register routes.
TS_TYPE_ONLY_NODES = frozenset({
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
})


class SyntaxTree:
    """One parsed file. Dropped once its routes have been extracted."""

    def __init__(self, tree, filename, skipped_types=frozenset()):
        self.tree = tree
        self.filename = filename
        self.skipped_types = skipped_types

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def walk(self):
        """
        Depth-first, children left to right, every node after its children.
        Subtrees rooted at a skipped type are not entered.
        """
        stack = [(self.root, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                yield node
                continue
            if node.type in self.skipped_types:
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))


def _first_error(node):
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


class SyntaxParser:
    language = None
    skipped_types: FrozenSet[str] = frozenset()
    name = "syntax"

    def __init__(self):
        self._parser = Parser(self.language)

    def parse(self, source: Union[str, bytes], filename: str = "<memory>") -> SyntaxTree:
        if isinstance(source, str):
            source = source.encode("utf-8")
        tree = self._parser.parse(source)
        if tree.root_node.has_error:
            raise ParseError(filename, self._describe_error(tree.root_node))
        return SyntaxTree(tree, filename, self.skipped_types)

    def _describe_error(self, root):
        bad = _first_error(root) or root
        line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
        if bad.is_missing:
            return f"{self.name} syntax error: missing {bad.type!r} at line {line}, column {column}"
        return f"{self.name} syntax error at line {line}, column {column}"


class JavaScriptParser(SyntaxParser):
    language = JS_LANGUAGE
    name = "JavaScript"


class TypeScriptParser(SyntaxParser):
    language = TS_LANGUAGE
    skipped_types = TS_TYPE_ONLY_NODES
    name = "TypeScript"


def select_parser(is_typescript):
    if is_typescript:
        return TypeScriptParser()
    return JavaScriptParser()
