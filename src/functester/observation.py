"""Call observation for CallCase assertions.

An Observation replaces a callable on its owning receiver (module, class
or instance) with a recording wrapper for a bounded window, still calling
through to the original. Installation and restoration go through
unittest.mock.patch.object, so instance attributes that were not set
before are removed again on release.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, call, patch

from loguru import logger

from functester.exceptions import HarnessConfigError


def _underlying(value: Any) -> Any:
    """Unwrap bound, static and class methods to their function."""
    while isinstance(value, staticmethod | classmethod):
        value = value.__func__
    return getattr(value, "__func__", value)


def _matches(candidate: Any, target: Callable[..., Any]) -> bool:
    if candidate is target:
        return True
    unwrapped = _underlying(candidate)
    return unwrapped is _underlying(target) and unwrapped is not None


def find_attribute_name(receiver: Any, target: Callable[..., Any]) -> str:
    """Locate the attribute of receiver that holds target.

    Args:
        receiver: Module, class or instance owning the callable.
        target: Callable reference (function, bound/static/class method).

    Returns:
        Attribute name on receiver.

    Raises:
        HarnessConfigError: If no attribute of receiver refers to target.
    """
    # Fast path: the callable's own name
    name = getattr(target, "__name__", None)
    if name is not None:
        try:
            candidate = inspect.getattr_static(receiver, name)
        except AttributeError:
            candidate = None
        if candidate is not None and _matches(candidate, target):
            return name

    for attr in dir(receiver):
        try:
            candidate = inspect.getattr_static(receiver, attr)
        except AttributeError:
            continue
        if _matches(candidate, target):
            return attr

    raise HarnessConfigError(f"{target!r} is not an attribute of {receiver!r}")


class Observation:
    """Records calls to one callable on one receiver until released.

    Usage:
        with observe(notifier, notifier.send) as observation:
            service.run()
        assert observation.was_called_with_exactly("hello")
    """

    def __init__(self, receiver: Any, target: Callable[..., Any]) -> None:
        self.receiver = receiver
        self.target = target
        self.attribute = find_attribute_name(receiver, target)
        self._recorder = MagicMock(name=self.attribute)
        self._patcher: Any = None

    def install(self) -> Observation:
        if self._patcher is not None:
            return self
        self._patcher = patch.object(self.receiver, self.attribute, self._build_replacement())
        self._patcher.start()
        logger.debug(f"Observing {self.attribute} on {self.receiver!r}")
        return self

    def _build_replacement(self) -> Any:
        raw = inspect.getattr_static(self.receiver, self.attribute)
        recorder = self._recorder

        if isinstance(self.receiver, type) and inspect.isfunction(raw):
            # Plain method looked up through instances: don't record self
            @functools.wraps(raw)
            def method_spy(instance: Any, *args: Any, **kwargs: Any) -> Any:
                recorder(*args, **kwargs)
                return raw(instance, *args, **kwargs)

            return method_spy

        if isinstance(self.receiver, type) and isinstance(raw, classmethod):
            function = raw.__func__

            # Subclass calls must receive their own cls
            @functools.wraps(function)
            def class_spy(cls: type, *args: Any, **kwargs: Any) -> Any:
                recorder(*args, **kwargs)
                return function(cls, *args, **kwargs)

            return classmethod(class_spy)

        original = getattr(self.receiver, self.attribute)

        @functools.wraps(original)
        def spy(*args: Any, **kwargs: Any) -> Any:
            recorder(*args, **kwargs)
            return original(*args, **kwargs)

        if isinstance(self.receiver, type):
            # Static method: original is the plain function
            return staticmethod(spy)
        return spy

    def release(self) -> None:
        """Restore the original callable. Safe to call more than once."""
        if self._patcher is None:
            return
        self._patcher.stop()
        self._patcher = None
        logger.debug(f"Released observation of {self.attribute}")

    @property
    def active(self) -> bool:
        return self._patcher is not None

    @property
    def was_called(self) -> bool:
        return self._recorder.called

    @property
    def call_count(self) -> int:
        return self._recorder.call_count

    @property
    def calls(self) -> list[Any]:
        return list(self._recorder.call_args_list)

    def was_called_with_exactly(self, *args: Any, **kwargs: Any) -> bool:
        """Whether any recorded call had exactly these arguments."""
        return call(*args, **kwargs) in self._recorder.call_args_list

    def __enter__(self) -> Observation:
        return self.install()

    def __exit__(self, *exc_info: object) -> None:
        self.release()


def observe(receiver: Any, target: Callable[..., Any]) -> Observation:
    """Install an Observation of target on receiver and return it."""
    return Observation(receiver, target).install()
