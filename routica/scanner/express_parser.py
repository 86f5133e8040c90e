import re
from typing import List, NamedTuple, Optional

from tree_sitter import Node

from routica.errors import ParseError
from routica.models.route import Route
from routica.scanner.grammar import SyntaxTree, select_parser

METHODS = ("get", "post", "put", "delete", "patch")

IDENTIFIER_TYPES = ("identifier", "undefined")

RE_JS_ESCAPE = re.compile(
    r"\\(?:u\{(?P<codepoint>[0-9a-fA-F]+)\}|u(?P<u4>[0-9a-fA-F]{4})|x(?P<x2>[0-9a-fA-F]{2})|(?P<nl>\r\n|[\n\r\u2028\u2029])|(?P<char>.))",
    re.DOTALL,
)

SINGLE_CHAR_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class CallSite(NamedTuple):
    """The parts of a `<object>.<verb>(...)` call that route extraction reads."""

    verb: str
    arguments: List[Node]


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _unescape(match):
    if match.group("codepoint"):
        codepoint = int(match.group("codepoint"), 16)
        if codepoint > 0x10FFFF:
            raise ValueError(f"invalid escape \\u{{{match.group('codepoint')}}}: code point out of range")
        return chr(codepoint)
    if match.group("u4"):
        return chr(int(match.group("u4"), 16))
    if match.group("x2"):
        return chr(int(match.group("x2"), 16))
    if match.group("nl") is not None:
        # line continuation
        return ""
    char = match.group("char")
    return SINGLE_CHAR_ESCAPES.get(char, char)


def _string_value(node: Node) -> Optional[str]:
    if node.type != "string":
        return None
    raw = _text(node)[1:-1]
    value = RE_JS_ESCAPE.sub(_unescape, raw)
    # "\uD83D\uDE00" pairs become one character, lone surrogates become U+FFFD
    return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


def _unwrap(node: Node) -> Node:
    # (auth) is still the identifier auth
    while node.type == "parenthesized_expression" and node.named_child_count == 1:
        node = node.named_children[0]
    return node


def call_site(node: Node) -> Optional[CallSite]:
    """
    Returns the call site when `node` has the route-registration shape, None otherwise.
    Every missing piece of the shape simply means "not a route".
    """
    if node.type != "call_expression":
        return None
    callee = node.child_by_field_name("function")
    args = node.child_by_field_name("arguments")
    if callee is None or args is None:
        return None
    if callee.type != "member_expression" or args.type != "arguments":
        return None
    prop = callee.child_by_field_name("property")
    if prop is None or prop.type != "property_identifier":
        return None
    verb = _text(prop)
    if verb not in METHODS:
        return None
    arguments = [child for child in args.named_children if child.type != "comment"]
    return CallSite(verb, arguments)


def _route_path(arguments: List[Node]) -> str:
    if not arguments:
        return ""
    value = _string_value(arguments[0])
    return value if value is not None else ""


def _middleware(arguments: List[Node]) -> List[str]:
    names = []
    # everything between the path and the final handler
    for arg in arguments[1:-1]:
        arg = _unwrap(arg)
        if arg.type in IDENTIFIER_TYPES:
            names.append(_text(arg))
    return names


def extract_routes(tree: SyntaxTree) -> List[Route]:
    routes: List[Route] = []
    for node in tree.walk():
        site = call_site(node)
        if site is None:
            continue
        try:
            path = _route_path(site.arguments)
        except ValueError as e:
            line = node.start_point[0] + 1
            raise ParseError(tree.filename, f"line {line}: {e}") from e
        routes.append(Route(
            method=site.verb.upper(),
            path=path,
            middleware=tuple(_middleware(site.arguments)),
        ))
    return routes


def parse_express_code(code, is_typescript: bool = False, filename: str = "<memory>") -> List[Route]:
    tree = select_parser(is_typescript).parse(code, filename)
    return extract_routes(tree)
