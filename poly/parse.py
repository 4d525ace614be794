"""The poly parser.

The parser uses parsy, a parser combinator library, directly over the source
text. The grammar is a small s-expression language:

expression = literal | primitive | name | list | parenthesized ;
literal = INTEGER | 'true' | 'false' ;
primitive = '+' | '-' | '*' | '==' | 'null' | 'map' | 'foldl' | 'pair'
          | 'fst' | 'snd' | 'cons' | 'nil' ;
list = '[', expression*, ']' ;
parenthesized = '(', ( lambda | let | if | fix | application ), ')' ;
lambda = 'lam', '[', name, ']', expression ;
let = 'let', '(', '[', name, expression, ']', ')', expression ;
if = 'if', expression, expression, expression ;
fix = 'fix', expression ;
application = expression, expression+ ;
program = definition*, expression ;
definition = '(', 'def', name, expression, ')' ;

Whitespace and comments (from ';' to the end of the line) may appear between
any two tokens.

Only tokens are given descriptions. A description on a parser built from
several tokens would report its failures where that parser started instead of
at the token that failed.
"""

import parsy

from poly.syntax import (
    BooleanNode,
    DefinitionNode,
    ExpressionNode,
    FixNode,
    IfNode,
    IntegerNode,
    LambdaNode,
    LetNode,
    ListNode,
    Primitive,
    PrimitiveNode,
    ProgramNode,
    VariableNode,
    application,
)

KEYWORDS = frozenset(['lam', 'let', 'if', 'fix', 'def', 'true', 'false'])

_primitive_names = {p.value: p for p in Primitive}

whitespace = parsy.regex(r'(\s|;[^\n]*)*').desc('whitespace')


def lexeme(parser: parsy.Parser) -> parsy.Parser:
    return parser << whitespace


def symbol(text: str) -> parsy.Parser:
    return lexeme(parsy.string(text))


def keyword(word: str) -> parsy.Parser:
    return lexeme(parsy.regex(word + r'(?![A-Za-z0-9_])')).desc(word)


_word = lexeme(parsy.regex(r'[A-Za-z_][A-Za-z0-9_]*'))


@parsy.generate('name')
def name():
    word = yield _word
    if word in KEYWORDS or word in _primitive_names:
        return (yield parsy.fail('name'))
    return word


integer = (
    lexeme(parsy.regex(r'-?[0-9]+').desc('integer'))
    .map(int)
    .map(IntegerNode)
)

boolean = parsy.alt(
    keyword('true').result(BooleanNode(True)),
    keyword('false').result(BooleanNode(False)),
)

operator = parsy.alt(
    symbol('=='),
    symbol('+'),
    symbol('-'),
    symbol('*'),
).map(lambda text: PrimitiveNode(_primitive_names[text]))

named_primitive = parsy.alt(
    *(
        keyword(p.value).result(PrimitiveNode(p))
        for p in Primitive
        if p.value.isalpha()
    )
)

variable = name.map(VariableNode)


@parsy.generate
def list_expression():
    yield symbol('[')
    elements = yield expression.many()
    yield symbol(']')
    return ListNode(elements)


@parsy.generate
def lambda_expression():
    yield keyword('lam')
    yield symbol('[')
    parameter = yield name
    yield symbol(']')
    body = yield expression
    return LambdaNode(parameter, body)


@parsy.generate
def let_expression():
    yield keyword('let')
    yield symbol('(')
    yield symbol('[')
    bound_name = yield name
    value = yield expression
    yield symbol(']')
    yield symbol(')')
    body = yield expression
    return LetNode(bound_name, value, body)


@parsy.generate
def if_expression():
    yield keyword('if')
    test = yield expression
    then = yield expression
    else_ = yield expression
    return IfNode(test, then, else_)


@parsy.generate
def fix_expression():
    yield keyword('fix')
    body = yield expression
    return FixNode(body)


@parsy.generate
def application_expression():
    function = yield expression
    arguments = yield expression.at_least(1)
    return application(function, *arguments)


@parsy.generate
def parenthesized():
    yield symbol('(')
    inner = yield parsy.alt(
        lambda_expression,
        let_expression,
        if_expression,
        fix_expression,
        application_expression,
    )
    yield symbol(')')
    return inner


@parsy.generate
def expression():
    # integers come before operators so that -1 is a number, not (-) 1
    return (
        yield parsy.alt(
            integer,
            operator,
            boolean,
            named_primitive,
            variable,
            list_expression,
            parenthesized,
        )
    )


@parsy.generate
def definition():
    yield symbol('(')
    yield keyword('def')
    defined_name = yield name
    value = yield expression
    yield symbol(')')
    return DefinitionNode(defined_name, value)


@parsy.generate
def program():
    definitions = yield definition.many()
    body = yield expression
    return ProgramNode(definitions, body)


def parse_expression(text: str) -> ExpressionNode:
    """Parse a single expression; raises parsy.ParseError on failure."""
    return (whitespace >> expression).parse(text)


def parse_program(text: str) -> ProgramNode:
    """Parse a program; raises parsy.ParseError on failure."""
    return (whitespace >> program).parse(text)


def parse_definition_or_expression(text: str):
    """Parse a line of REPL input."""
    return (whitespace >> (definition | expression)).parse(text)
