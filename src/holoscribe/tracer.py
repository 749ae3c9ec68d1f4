"""
Hierarchical runtime tracing for holoscribe.

Every pipeline stage runs inside a named span so a single run prints an
indented timeline of what happened, how long it took and how much geometry
flowed through it. Tracing is off by default and prints nothing until
configure_tracer() enables it.

A line looks like::

    12:01:33.120 INFO    scriber:scribe  end ok dt=4ms

with two spaces of indentation per enclosing span.
"""

import functools
import hashlib
import json
import sys
import time
from contextlib import contextmanager
from datetime import datetime

import numpy as np
import svgwrite
from pydantic import BaseModel

LEVELS = ("ERROR", "WARN", "INFO", "DEBUG")


def _rank(level):
    """Position of a level name in LEVELS; unknown names rank as INFO."""
    return LEVELS.index(level) if level in LEVELS else LEVELS.index("INFO")


class TracerConfig:
    """Where trace lines go and how much detail they carry."""

    def __init__(self):
        self.enabled = False
        self.level = "INFO"
        self.file_path = None
        self.json_output = False
        self._stream = None

    def configure(self, enabled=False, level="INFO", file_path=None, json_output=False):
        self.close()
        self.enabled = enabled
        self.level = level.upper()
        self.file_path = file_path
        self.json_output = json_output
        if enabled and file_path:
            self._stream = open(file_path, "w", encoding="utf-8")

    def close(self):
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def allows(self, level):
        return self.enabled and _rank(level) <= _rank(self.level)

    def emit(self, line):
        sys.stderr.write(line + "\n")
        if self._stream is not None:
            self._stream.write(line + "\n")
            self._stream.flush()


class Tracer:
    """
    Nested span logger.

    Spans form a stack; events are attributed to the innermost open span.
    Failures inside a span are logged and always re-raised.
    """

    def __init__(self):
        self.config = TracerConfig()
        self._open = []

    @property
    def depth(self):
        return len(self._open)

    def _record(self, level, module, name, message, meta=None):
        if not self.config.allows(level):
            return

        now = datetime.now()
        stamp = f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"
        where = f"{module}:{name}" if name else module
        self.config.emit(f"{stamp} {level:<5} {'  ' * self.depth}{where}  {message}")

        if self.config.json_output:
            self.config.emit(json.dumps({
                "timestamp": stamp,
                "level": level,
                "depth": self.depth,
                "module": module,
                "function": name,
                "message": message,
                "meta": {key: summarize(value) for key, value in (meta or {}).items()},
            }))

    @contextmanager
    def span(self, name, module="", **meta):
        """Trace a block of work: a start line, then ``end ok`` or ``failed``."""
        if not self.config.enabled:
            yield
            return

        self._record("INFO", module, name, _with_meta("start", meta))
        self._open.append((module, name))
        started = time.perf_counter()

        try:
            yield
        except Exception as e:
            self._open.pop()
            self._record(
                "ERROR", module, name,
                f"failed dt={_elapsed_ms(started)} error={type(e).__name__}: {str(e)[:100]}",
            )
            raise

        self._open.pop()
        self._record("INFO", module, name, f"end ok dt={_elapsed_ms(started)}")

    def event(self, message, level="INFO", **meta):
        """One-off record, e.g. a count or a skipped input."""
        if not self.config.allows(level):
            return
        module, name = self._open[-1] if self._open else ("", "")
        self._record(level, module, name, _with_meta(message, meta), meta)


def _elapsed_ms(started):
    return f"{(time.perf_counter() - started) * 1000:.0f}ms"


def _with_meta(head, meta):
    return " ".join([head] + [f"{key}={summarize(value)}" for key, value in meta.items()])


# Summaries: point clouds by shape and a short content hash, so two runs
# can be compared at a glance without dumping coordinates.

def _short_hash(data):
    return hashlib.md5(data).hexdigest()[:8]


def _describe_array(arr):
    shape = "x".join(str(n) for n in arr.shape)
    digest = _short_hash(arr.tobytes() if 0 < arr.size < 1000 else str(arr.shape).encode())
    return f"ndarray({arr.dtype},{shape},h={digest})"


def _describe_str(text):
    if len(text) > 50:
        return f"str(len={len(text)},h={_short_hash(text.encode())})"
    return repr(text)


def _describe_sequence(seq):
    kind = type(seq).__name__
    if not seq:
        return f"{kind}(len=0)"
    return f"{kind}(len={len(seq)},first={type(seq[0]).__name__})"


def _describe_mapping(mapping):
    keys = ",".join(str(k) for k in list(mapping)[:5])
    return f"dict(len={len(mapping)},keys=[{keys}])"


def _describe_model(model):
    fields = list(type(model).model_fields)[:3]
    return f"{type(model).__name__}(fields={fields}...)"


_DESCRIBERS = (
    (np.ndarray, _describe_array),
    (svgwrite.Drawing, lambda dwg: f"Drawing(elements={len(dwg.elements)})"),
    (BaseModel, _describe_model),
    (str, _describe_str),
    ((list, tuple), _describe_sequence),
    (dict, _describe_mapping),
    ((bool, int, float), str),
)


def summarize(obj, max_len=200):
    """Compact, length-capped description of an object for trace lines."""
    if obj is None:
        return "None"

    text = f"<{type(obj).__name__}>"
    for types, describe in _DESCRIBERS:
        if isinstance(obj, types):
            text = describe(obj)
            break

    if len(text) > max_len:
        return text[:max_len - 3] + "..."
    return text


def trace(label=None, arg_names=None):
    """
    Run the decorated function inside a span named ``label``.

    ``arg_names`` lists keyword arguments to summarize on the start line.
    """
    def decorator(func):
        module = (func.__module__ or "").rpartition(".")[2]
        name = label or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not _tracer.config.enabled:
                return func(*args, **kwargs)
            meta = {key: kwargs[key] for key in arg_names or () if key in kwargs}
            with _tracer.span(name, module=module, **meta):
                return func(*args, **kwargs)

        return wrapper
    return decorator


_tracer = Tracer()


def get_tracer():
    """The process-wide tracer."""
    return _tracer


def configure_tracer(enabled=False, level="INFO", file_path=None, json_output=False):
    _tracer.config.configure(
        enabled=enabled,
        level=level,
        file_path=file_path,
        json_output=json_output,
    )
