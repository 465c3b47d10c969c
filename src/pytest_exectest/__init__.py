"""Pytest plugin for declarative testing of external executables.

The `pytest_exectest` package interprets a small line-oriented scheme
describing the fixture files, arguments, environment, stdin and the
expected stdout, stderr and exit code of a single program invocation,
runs the program and reports every mismatch with a readable diff.

Key features:
- `exectest` fixture running inline schemes or scheme files;
- collection of `test_*.scheme` files as pytest test items;
- `{dir}` placeholder expanded to the per-invocation fixture root;
- optional strict mode reporting unknown directives and duplicates.
"""
