"""Shared test fixtures."""

import io

import pytest
from rich.console import Console

from javaslice.audit import AuditLogger

CALCULATOR = """package com.example;

import java.util.List;

/**
 * Calculator.
 */
public class Calculator {

    // adds
    public int add(int a, int b) {
        return a + b;
    }

    public int sub(int a, int b) {
        if (a > b) {
            return a - b;
        }
        return b - a;
    }
}
"""

MIXED_VISIBILITY = """class Helper {
    void help() {
        System.out.println("help");
    }
}

public class Main {
    public static void main(String[] args) {
        new Helper().help();
    }
}
"""

PACKAGE_PRIVATE = """class First {
    void one() {}
}

interface Second {
    default void two() {
    }
}
"""


@pytest.fixture
def calculator_source():
    """A public class with two methods, comments and imports."""
    return CALCULATOR


@pytest.fixture
def mixed_visibility_source():
    """One package-private class followed by one public class."""
    return MIXED_VISIBILITY


@pytest.fixture
def package_private_source():
    """Only non-public types."""
    return PACKAGE_PRIVATE


@pytest.fixture
def quiet_console():
    """A rich console writing to memory."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def audit_logger(tmp_path, quiet_console):
    """An AuditLogger rooted in a temporary directory."""
    return AuditLogger(log_root=tmp_path / "logs", console=quiet_console)
