"""
Test the main driver that you would run with `python -m poly`.
"""

import json
import os
import os.path
import subprocess
import sys
import tempfile
import unittest
from typing import List

_project_root = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)


def run_poly(
    *args: str, input: str = ''
) -> 'subprocess.CompletedProcess[str]':
    return subprocess.run(
        [sys.executable, '-m', 'poly', *args],
        input=input,
        capture_output=True,
        text=True,
        cwd=_project_root,
        timeout=60,
    )


class TestBatchMode(unittest.TestCase):
    def test_prints_definitions_and_body(self) -> None:
        process = run_poly(input='(def id (lam [x] x))\n(id true)\n')
        self.assertEqual(0, process.returncode, msg=process.stderr)
        self.assertEqual(
            ['id : forall a. a -> a', ': Bool', '= true'],
            process.stdout.splitlines(),
        )

    def test_redefinition_prints_latest_scheme(self) -> None:
        process = run_poly(
            input='(def x 1)\n(def y x)\n(def x true)\n(pair x y)\n'
        )
        self.assertEqual(0, process.returncode, msg=process.stderr)
        self.assertEqual(
            ['x : Bool', 'y : Int', ': (Bool, Int)', '= (pair true 1)'],
            process.stdout.splitlines(),
        )

    def test_evaluation_error(self) -> None:
        process = run_poly(input='(fix (lam [x] (+ x 1)))')
        self.assertEqual(1, process.returncode)
        self.assertEqual(
            [
                ': Int',
                'Evaluation Error:',
                '+ cannot be applied to <<closure>>',
            ],
            process.stdout.splitlines(),
        )

    def test_type_error(self) -> None:
        process = run_poly(input='(+ true)')
        self.assertEqual(1, process.returncode)
        self.assertEqual(
            ['Type Error:', 'UnificationError: cannot unify Int with Bool'],
            process.stdout.splitlines(),
        )

    def test_unbound_name(self) -> None:
        process = run_poly(input='(f 1)')
        self.assertEqual(1, process.returncode)
        self.assertIn("name 'f' not previously defined", process.stdout)

    def test_parse_error(self) -> None:
        process = run_poly(input='(lam [x]')
        self.assertEqual(1, process.returncode)
        self.assertTrue(process.stdout.startswith('Parse Error:'))

    def test_show_constraints(self) -> None:
        process = run_poly('--show-constraints', input='((+ 4) 9)')
        self.assertEqual(0, process.returncode, msg=process.stderr)
        lines: List[str] = process.stdout.splitlines()
        self.assertEqual('Constraints:', lines[0])
        self.assertIn('Type: Int', lines)
        self.assertEqual([': Int', '= 13'], lines[-2:])

    def test_file_argument(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'program.poly')
            with open(path, 'w') as file:
                file.write('; pairs\n(pair 1 [true])\n')
            process = run_poly(path)
        self.assertEqual(0, process.returncode, msg=process.stderr)
        self.assertEqual(
            [': (Int, [Bool])', '= (pair 1 [true])'],
            process.stdout.splitlines(),
        )

    def test_log_file_is_json_lines(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            log_path = os.path.join(directory, 'poly.log')
            process = run_poly('--log-file', log_path, input='(lam [x] x)')
            with open(log_path) as log_file:
                records = [json.loads(line) for line in log_file]
        self.assertEqual(0, process.returncode, msg=process.stderr)
        self.assertTrue(records)
        for record in records:
            self.assertTrue(record['name'].startswith('poly'))
            self.assertEqual('DEBUG', record['level_name'])
        self.assertIn(
            'generated 0 constraints', [r['message'] for r in records]
        )
