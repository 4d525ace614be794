"""Infer the types of a poly program, then evaluate it."""

import argparse
import logging
import sys
from typing import IO, Callable, List, Optional

import parsy

import poly.typecheck
from poly.error_reporting import (
    create_parsing_failure_message,
    create_type_error_message,
)
from poly.eval import EvaluationError, evaluate_program
from poly.logging import JSONFormatter
from poly.parse import parse_program
import poly.repl


def file_type(mode: str) -> Callable[[str], IO[str]]:
    def func(name: str) -> IO[str]:
        return open(name, mode=mode)

    return func


arg_parser = argparse.ArgumentParser(
    prog='poly', description='Infer the types of a poly program and run it.'
)
arg_parser.add_argument(
    'file',
    nargs='?',
    type=file_type('r'),
    default=sys.stdin,
    help='file to check (a terminal starts the REPL)',
)
arg_parser.add_argument(
    '--verbose',
    action='store_true',
    default=False,
    help='print internal logs and error tracebacks',
)
arg_parser.add_argument(
    '--show-constraints',
    action='store_true',
    default=False,
    help='print the constraints, substitution and unnormalized type',
)
arg_parser.add_argument(
    '--log-file',
    default=None,
    help='write JSON log records to this file',
)


def _configure_logging(args: argparse.Namespace) -> None:
    logger = logging.getLogger('poly')
    if args.verbose:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter('%(levelname)s %(name)s: %(message)s')
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    if args.log_file is not None:
        file_handler = logging.FileHandler(args.log_file)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)


def batch_main(args: argparse.Namespace) -> int:
    text = args.file.read()
    try:
        program = parse_program(text)
        env, scheme = poly.typecheck.infer_program(program)
        for name in dict.fromkeys(d.name for d in program.definitions):
            print(name, ':', env[name])
        if args.show_constraints:
            poly.repl.print_inference_details(
                poly.typecheck.infer_with_details(program.body, env)
            )
        print(':', scheme)
        _, value = evaluate_program(program)
    except parsy.ParseError as e:
        print('Parse Error:')
        print(create_parsing_failure_message(text, e))
        return 1
    except poly.typecheck.StaticAnalysisError as e:
        print('Type Error:')
        print(create_type_error_message(e))
        if args.verbose:
            raise
        return 1
    except EvaluationError as e:
        print('Evaluation Error:')
        print(e)
        if args.verbose:
            raise
        return 1
    except Exception:
        print('An internal error has occurred.')
        print('This is a bug in poly.')
        raise
    print('=', value)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = arg_parser.parse_args(argv)
    _configure_logging(args)
    try:
        # interactive mode
        if args.file.isatty():
            poly.repl.repl(show_constraints=args.show_constraints)
            return 0
        return batch_main(args)
    finally:
        args.file.close()


if __name__ == '__main__':
    sys.exit(main())
