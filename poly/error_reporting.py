import parsy

from poly.typecheck.errors import StaticAnalysisError


def get_line_at(text: str, line_number: int) -> str:
    """Get a line of text; line numbers start at zero."""
    lines = text.splitlines()
    if line_number < len(lines):
        return lines[line_number]
    return ''


def create_parsing_failure_message(
    text: str, error: parsy.ParseError
) -> str:
    line, column = parsy.line_info_at(text, error.index)
    source_line = get_line_at(text, line)
    message = (
        f'Expected {_format_expected(error.expected)} at line {line + 1}, '
        f'column {column + 1}:\n'
        f'{source_line.rstrip()}\n'
        f'{" " * column + "^"}'
    )
    return message


def create_type_error_message(error: StaticAnalysisError) -> str:
    return f'{type(error).__name__}: {error}'


def _format_expected(expected: frozenset) -> str:
    if len(expected) == 1:
        return next(iter(expected))
    return 'one of ' + ', '.join(sorted(expected))
