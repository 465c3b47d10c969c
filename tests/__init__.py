"""Test suite for the pytest-exectest package.

This package contains unit and integration tests validating scheme
interpretation, fixture materialization, process execution, assertion
reporting and the pytest integration.
"""
