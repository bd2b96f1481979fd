"""Run the usage examples embedded in module docstrings."""

from __future__ import annotations

import doctest
from types import ModuleType

import pytest

import ghinit
import ghinit.config
import ghinit.exec
import ghinit.git
import ghinit.github
import ghinit.gitignore
import ghinit.log
import ghinit.names
import ghinit.pathenv

DOCTEST_MODULES = (
    ghinit,
    ghinit.config,
    ghinit.exec,
    ghinit.git,
    ghinit.github,
    ghinit.gitignore,
    ghinit.log,
    ghinit.names,
    ghinit.pathenv,
)


@pytest.mark.parametrize("module", DOCTEST_MODULES, ids=lambda module: module.__name__)
def test_module_doctests(module: ModuleType) -> None:
    result = doctest.testmod(module, optionflags=doctest.ELLIPSIS)
    assert result.failed == 0
