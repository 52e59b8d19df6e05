"""Bounded, readable text rendering for values, call signatures and errors."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import TRIM_DISABLED, Invocation

DOTS = "..."
NULL = "NULL"
_COMMA = ", "


def type_name(cls: type) -> str:
    """Qualified class name; builtins are left unqualified."""
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None) or cls.__name__
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def render_error(error: BaseException) -> str:
    """Render ``error`` as ``Type`` or ``Type(message)`` when it carries a message."""
    text = type_name(type(error))
    try:
        message = str(error)
    except Exception:
        message = ""
    if message:
        text += f"({message})"
    return text


def render_value(value: object, trim: int = TRIM_DISABLED, skip: bool = False) -> str:
    """Render a single value, bounding the result to ``trim`` characters.

    ``None`` renders as ``NULL`` and ``skip`` replaces the value with dots.
    A value whose own ``__str__`` raises is replaced by a bracketed
    placeholder naming its type and the error; the failure never escapes.
    """
    if skip:
        return DOTS
    if value is None:
        return NULL
    try:
        raw = _raw_text(value)
    except Exception as exc:
        return f"[{type_name(type(value))} thrown {render_error(exc)}]"
    return trim_text(raw, trim)


def trim_text(text: str, trim: int) -> str:
    """Keep the head and tail of ``text`` with an ``..<removed>..`` marker between.

    Newlines are escaped before measuring, so the escapes count against ``trim``.
    """
    text = text.replace("\n", "\\n")
    if trim >= 0 and len(text) > trim:
        removed = len(text) - trim
        head = f"{text[: trim // 2]}..{removed}.."
        tail = trim - len(head)
        text = head + (text[-tail:] if tail > 0 else "")
    return text


def render_signature(
    invocation: Invocation,
    trim: int = TRIM_DISABLED,
    skip_args: bool = False,
    log_this: bool = False,
) -> str:
    """Render ``[receiver]#method(arg, ..., key=value)``."""
    parts: list[str] = []
    if log_this and invocation.receiver is not None:
        parts.append(_receiver_text(invocation.receiver))
    parts.append(f"#{invocation.method_name}(")
    if skip_args:
        parts.append(DOTS)
    else:
        rendered = [render_value(arg, trim) for arg in invocation.args]
        rendered.extend(
            f"{key}={render_value(value, trim)}" for key, value in invocation.kwargs.items()
        )
        parts.append(_COMMA.join(rendered))
    parts.append(")")
    return "".join(parts)


def _receiver_text(receiver: object) -> str:
    try:
        return str(receiver)
    except Exception as exc:
        return f"[{type_name(type(receiver))} thrown {render_error(exc)}]"


def _raw_text(value: object) -> str:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return "[" + _COMMA.join(render_value(item) for item in value) + "]"
    text = str(value)
    if isinstance(value, str) or not text or any(ch.isspace() for ch in text):
        return f"'{text}'"
    return text
