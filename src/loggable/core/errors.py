"""Ignore-set matching and stack origin lookup for raised errors."""

from __future__ import annotations

from collections.abc import Iterable

from ..models import StackOrigin


def is_ignored(error_type: type, ignore: Iterable[type] | None) -> bool:
    """Whether ``error_type`` is, or descends from, any type in ``ignore``.

    Descent covers both the class hierarchy and virtual subclasses registered
    through ``abc.ABCMeta.register``, so an ABC used as a capability marker
    matches every error class registered against it.
    """
    if not ignore:
        return False
    return any(_descends(error_type, parent) for parent in ignore)


def _descends(child: type, parent: type) -> bool:
    if child is parent:
        return True
    try:
        return issubclass(child, parent)
    except TypeError:
        # non-class entries and protocols with data members cannot be checked
        return False


def first_frame(error: BaseException) -> StackOrigin | None:
    """The frame that raised ``error``, or None when it has no traceback."""
    tb = error.__traceback__
    if tb is None:
        return None
    while tb.tb_next is not None:
        tb = tb.tb_next
    frame = tb.tb_frame
    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    qualname = getattr(code, "co_qualname", code.co_name)
    owner, _, method = qualname.rpartition(".")
    if owner and not owner.endswith("<locals>"):
        type_name = f"{module}.{owner}" if module else owner
    else:
        type_name = module or "<unknown>"
    return StackOrigin(type_name=type_name, method=method, line=tb.tb_lineno)
