"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def valid_samples():
    """Collection of valid Python code samples."""
    return {
        "simple": "x = 42\nprint(x)",
        "function": "def hello():\n    return 'world'",
        "class": "class Foo:\n    def bar(self):\n        pass",
        "imports": "import os\nfrom pathlib import Path",
        "complex": """
def calculate(a, b):
    if a > b:
        return a - b
    else:
        return b - a

class Calculator:
    def add(self, x, y):
        return x + y
"""
    }


@pytest.fixture
def commented_sample():
    """Python code with comments in every position the parser handles."""
    return """\
# module header
import os  # needed for paths


def handler(event):  # entry point
    # unpack
    name = event['name']
    return name
# trailing
"""


# Dictionary of invalid Python samples for testing parse errors
INVALID_PYTHON_SAMPLES = {
    "missing_colon": "def foo()\n    pass",
    "bad_indent": "def foo():\npass",
    "unclosed_paren": "print('hello'",
    "invalid_syntax": "def 123invalid():\n    pass",
    "incomplete_statement": "x = ",
    "bad_import": "from import something",
    "unmatched_bracket": "data = [1, 2, 3",
}


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
