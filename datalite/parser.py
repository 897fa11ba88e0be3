"""
Parser for the Datalite text syntax.

    parent(alice, bob).
    ancestor(X, Y) :- parent(X, Y).
    ancestor(X, Z) :- parent(X, Y), ancestor(Y, Z).
    - ancestor(alice, Who)?

Identifiers starting with an uppercase letter are variables, all others are
symbols. ``\\+ atom`` is accepted in rule bodies and kept on the rule as a
negated literal. ``%`` starts a comment running to the end of the line.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, Union

from .terms import Atom, Term
from .knowledge import Rule, Program
from .factories import term
from .query import make_query_rule, query_atom_of
from .errors import ParseError


class Token(NamedTuple):
    kind: str
    text: str
    line: int
    column: int


_TOKEN_PATTERNS = [
    ("COMMENT", r"%[^\n]*"),
    ("NEWLINE", r"\n"),
    ("SKIP", r"[ \t\r]+"),
    ("IDENT", r"[A-Za-z][A-Za-z0-9_]*"),
    ("IMPLIES", r":-"),
    ("NOT", r"\\\+"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("COMMA", r","),
    ("DOT", r"\."),
    ("DASH", r"-"),
    ("QUESTION", r"\?"),
    ("MISMATCH", r"."),
]
_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS))


def tokenize(text: str) -> List[Token]:
    """Split source text into tokens, dropping whitespace and comments"""
    tokens = []
    line = 1
    line_start = 0
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        column = match.start() - line_start + 1
        if kind == "NEWLINE":
            line += 1
            line_start = match.end()
            continue
        if kind in ("SKIP", "COMMENT"):
            continue
        if kind == "MISMATCH":
            raise ParseError(f"Unexpected character {match.group()!r}", line, column)
        tokens.append(Token(kind, match.group(), line, column))
    tokens.append(Token("EOF", "", line, len(text) - line_start + 1))
    return tokens


@dataclass(frozen=True)
class ParsedSource:
    """A parsed program and its optional query rule"""
    program: Program
    query: Optional[Rule] = None

    @property
    def query_atom(self) -> Optional[Atom]:
        """The atom the user asked about, if there is a query"""
        if self.query is None:
            return None
        return query_atom_of(self.query)


class _Parser:
    """Recursive descent over a token list"""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != "EOF":
            self.pos += 1
        return token

    def expect(self, kind: str, description: str) -> Token:
        token = self.peek()
        if token.kind != kind:
            found = token.text or "end of input"
            raise ParseError(f"Expected {description}, found {found!r}", token.line, token.column)
        return self.advance()

    def parse(self) -> ParsedSource:
        rules: List[Rule] = []
        query = None
        while self.peek().kind != "EOF":
            if self.peek().kind == "DASH":
                query = self.parse_query()
                token = self.peek()
                if token.kind != "EOF":
                    raise ParseError("The query must be the last statement", token.line, token.column)
            else:
                rules.append(self.parse_rule())
        return ParsedSource(Program(rules), query)

    def parse_query(self) -> Rule:
        self.expect("DASH", "'-'")
        query_atom = self.parse_atom()
        self.expect("QUESTION", "'?'")
        return make_query_rule(query_atom)

    def parse_rule(self) -> Rule:
        head = self.parse_atom()
        body: List[Atom] = []
        negated: List[Atom] = []
        if self.peek().kind == "IMPLIES":
            self.advance()
            while True:
                is_negated, literal = self.parse_literal()
                (negated if is_negated else body).append(literal)
                if self.peek().kind != "COMMA":
                    break
                self.advance()
        self.expect("DOT", "'.'")
        return Rule(head, body, negated)

    def parse_literal(self) -> Tuple[bool, Atom]:
        if self.peek().kind == "NOT":
            self.advance()
            return True, self.parse_atom()
        return False, self.parse_atom()

    def parse_atom(self) -> Atom:
        predicate = self.expect("IDENT", "a predicate name")
        if predicate.text[0].isupper():
            raise ParseError(
                f"Predicate names must not start with an uppercase letter: {predicate.text}",
                predicate.line, predicate.column
            )
        self.expect("LPAREN", "'('")
        terms: List[Term] = [self.parse_term()]
        while self.peek().kind == "COMMA":
            self.advance()
            terms.append(self.parse_term())
        self.expect("RPAREN", "')'")
        return Atom(predicate.text, terms)

    def parse_term(self) -> Term:
        return term(self.expect("IDENT", "a term").text)


def parse_program(text: str) -> ParsedSource:
    """
    Parse Datalite source text.

    Raises:
        ParseError: if the text is not valid syntax

    Examples:
        >>> parsed = parse_program("first(a). second(X) :- first(X). - second(Y)?")
        >>> len(parsed.program), str(parsed.query_atom)
        (2, 'second(Y)')
    """
    return _Parser(tokenize(text)).parse()


def parse_atom(text: str) -> Atom:
    """Parse a single atom such as ``likes(alice, Y)``"""
    parser = _Parser(tokenize(text))
    result = parser.parse_atom()
    token = parser.peek()
    if token.kind != "EOF":
        raise ParseError(f"Unexpected {token.text!r} after atom", token.line, token.column)
    return result


def parse_file(path: Union[str, Path]) -> ParsedSource:
    """Read and parse a Datalite source file"""
    with open(path, 'r') as f:
        return parse_program(f.read())
