"""An interactive loop that prints the type and value of each expression it
reads.

Definitions entered with (def name expression) are added to the environments
used for later input."""

import sys
from typing import Dict, Optional

import parsy

import poly
import poly.typecheck
from poly.error_reporting import (
    create_parsing_failure_message,
    create_type_error_message,
)
from poly.eval import EvaluationError, Value, evaluate
from poly.parse import parse_definition_or_expression
from poly.pretty import pretty_constraints, pretty_substitution
from poly.syntax import DefinitionNode


def print_exit_message() -> None:
    print('Bye!')


def repl(
    env: Optional[poly.typecheck.Environment] = None,
    show_constraints: bool = False,
    values: Optional[Dict[str, Value]] = None,
) -> poly.typecheck.Environment:
    """Run the REPL until end of input. Returns the final environment.

    values holds the values of the names env gives types to."""
    if env is None:
        env = poly.typecheck.Environment()
    values = {} if values is None else dict(values)
    intro_message = 'poly REPL (version {} on Python {}).'.format(
        poly.version, sys.version
    )
    print(intro_message)
    prompt = '>>> '
    try:
        env = _do_repl_loop(prompt, env, values, show_constraints)
    except KeyboardInterrupt:
        # catch ctrl-c to cleanly exit
        pass
    print_exit_message()
    return env


def _do_repl_loop(
    prompt: str,
    env: poly.typecheck.Environment,
    values: Dict[str, Value],
    show_constraints: bool,
) -> poly.typecheck.Environment:
    while True:
        print(prompt, end='', flush=True)
        try:
            line = input()
        except EOFError:
            print()
            return env
        if not line.strip():
            continue
        try:
            form = parse_definition_or_expression(line)
            if isinstance(form, DefinitionNode):
                scheme = poly.typecheck.infer_expression(form.value, env)
                values[form.name] = evaluate(form.value, values)
                env = env.extend(form.name, scheme)
                print(form.name, ':', scheme)
            else:
                result = poly.typecheck.infer_with_details(form, env)
                if show_constraints:
                    print_inference_details(result)
                print(':', result.scheme)
                print('=', evaluate(form, values))
        except parsy.ParseError as e:
            print('Syntax error:\n')
            print(create_parsing_failure_message(line, e))
        except poly.typecheck.StaticAnalysisError as e:
            print('Type error:\n')
            print(create_type_error_message(e))
        except EvaluationError as e:
            print('Evaluation error:\n')
            print(e)


def print_inference_details(
    result: poly.typecheck.InferenceResult,
) -> None:
    print('Constraints:')
    print(pretty_constraints(result.constraints))
    print('Substitution:')
    print(pretty_substitution(result.substitution))
    print('Type:', result.type)
