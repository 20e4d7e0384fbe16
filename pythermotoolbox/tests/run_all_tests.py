#!/usr/bin/env python3
"""
Runs every test_*.py module in this directory without pytest.

    python3 pythermotoolbox/tests/run_all_tests.py             # whole suite
    python3 pythermotoolbox/tests/run_all_tests.py eos mslv    # tests whose module or name contains a pattern

Exit status is 1 when any test fails.
"""

import glob
import importlib.util
import os
import sys
import time
import traceback

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.dirname(os.path.dirname(TESTS_DIR)))


def discover(patterns):
    """ (module name, [(test name, function)]) for each module holding a selected test """
    for path in sorted(glob.glob(os.path.join(TESTS_DIR, 'test_*.py'))):
        module_name = os.path.splitext(os.path.basename(path))[0]
        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        tests = [(name, func) for name, func in vars(module).items()
                 if name.startswith('test_') and callable(func)
                 and (not patterns or any(p in module_name or p in name for p in patterns))]
        if tests:
            yield module_name, sorted(tests)


def main(patterns):
    failures = []
    n_run = 0
    for module_name, tests in discover(patterns):
        start = time.perf_counter()
        n_failed = 0
        for name, func in tests:
            n_run += 1
            try:
                func()
            except Exception as e:
                n_failed += 1
                failures.append((f"{module_name}::{name}", e))
                print(f"  FAIL {module_name}::{name}: {e}")
                traceback.print_exc(limit=-1)
        elapsed = time.perf_counter() - start
        print(f"{module_name:<20} {len(tests) - n_failed:>3}/{len(tests):<3} passed  {elapsed:6.2f} s")

    print(f"\n{n_run - len(failures)} passed, {len(failures)} failed")
    for label, e in failures:
        print(f"  - {label}: {type(e).__name__}: {e}")
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
