"""Resolve MODULE:ATTR targets to harness instances."""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Any

from functester.exceptions import FuncTesterError, HarnessConfigError
from functester.harness.base import TestHarness

# Harness files are registered under a prefixed name so they never shadow
# installed modules with the same stem (json.py, types.py, ...)
_FILE_MODULE_PREFIX = "_functester_target_"


def _import_file(module_ref: str) -> Any:
    path = Path(module_ref).resolve()
    if not path.exists():
        raise HarnessConfigError(f"No such file: {module_ref}")

    module_name = f"{_FILE_MODULE_PREFIX}{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise HarnessConfigError(f"Cannot import {module_ref}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise HarnessConfigError(
            f"Cannot import {module_ref}: {type(e).__name__}: {e}"
        ) from e
    return module


def _import_module(module_ref: str) -> Any:
    """Import a dotted module name or a path to a .py file."""
    if module_ref.endswith(".py"):
        return _import_file(module_ref)

    try:
        return importlib.import_module(module_ref)
    except Exception as e:
        raise HarnessConfigError(
            f"Cannot import {module_ref}: {type(e).__name__}: {e}"
        ) from e


def load_harnesses(target: str) -> list[TestHarness]:
    """Load harnesses from a MODULE:ATTR reference.

    ATTR may name a harness, a list/tuple of harnesses, or a zero-argument
    callable returning either.

    Raises:
        HarnessConfigError: If the reference is malformed, the module or
            factory raises, or the target does not resolve to harnesses.
    """
    module_ref, sep, attr = target.rpartition(":")
    if not sep or not module_ref or not attr:
        raise HarnessConfigError(f"Expected MODULE:ATTR, got {target!r}")

    module = _import_module(module_ref)
    try:
        obj = getattr(module, attr)
    except AttributeError:
        raise HarnessConfigError(f"{module_ref} has no attribute {attr!r}") from None

    if callable(obj) and not isinstance(obj, TestHarness):
        try:
            obj = obj()
        except FuncTesterError:
            raise
        except Exception as e:
            raise HarnessConfigError(
                f"Harness factory {target} failed: {type(e).__name__}: {e}"
            ) from e

    harnesses = list(obj) if isinstance(obj, list | tuple) else [obj]
    for harness in harnesses:
        if not isinstance(harness, TestHarness):
            raise HarnessConfigError(
                f"{target} resolved to {type(harness).__name__}, expected a TestHarness"
            )
    return harnesses
