"""pi-termwin: reactive terminal windows composed from widgets."""

# Application controller
from pi.termwin.app import Application

# Components (re-exported from components package)
from pi.termwin.components import (
    ChoiceCallback,
    ChoiceGrid,
    ChoiceWidget,
    InputWidget,
    MatrixIndex,
    QuestionWidget,
    TextWidget,
    normalize_choices,
)

# Settings
from pi.termwin.config import TermwinSettings, load_settings

# Errors
from pi.termwin.errors import (
    InvalidChoicesError,
    InvalidSizeError,
    InvariantViolationError,
    ReloadRecursionError,
    TermwinError,
    WidgetIndexError,
    WindowNotFoundError,
)

# Events
from pi.termwin.events import RELOAD, Element, EventSource

# Keyboard input decoding
from pi.termwin.keys import KeyEvent, decode_key, split_sequences

# Line and keypress sources
from pi.termwin.readline import KeypressSource, LineReader, LineSource

# Registry
from pi.termwin.registry import Registry

# Sizing
from pi.termwin.sizing import SizeValue, WidgetSize, resolve_size

# Terminal interface and implementation
from pi.termwin.terminal import ProcessTerminal, Terminal, default_terminal

# Utilities
from pi.termwin.utils import pad_to_width, visible_width

# Composition core
from pi.termwin.window import Container, Widget, Window

__all__ = [
    # Application
    "Application",
    # Components
    "ChoiceCallback",
    "ChoiceGrid",
    "ChoiceWidget",
    "InputWidget",
    "MatrixIndex",
    "QuestionWidget",
    "TextWidget",
    "normalize_choices",
    # Settings
    "TermwinSettings",
    "load_settings",
    # Errors
    "InvalidChoicesError",
    "InvalidSizeError",
    "InvariantViolationError",
    "ReloadRecursionError",
    "TermwinError",
    "WidgetIndexError",
    "WindowNotFoundError",
    # Events
    "RELOAD",
    "Element",
    "EventSource",
    # Keys
    "KeyEvent",
    "decode_key",
    "split_sequences",
    # Line and keypress sources
    "KeypressSource",
    "LineReader",
    "LineSource",
    # Registry
    "Registry",
    # Sizing
    "SizeValue",
    "WidgetSize",
    "resolve_size",
    # Terminal
    "ProcessTerminal",
    "default_terminal",
    "Terminal",
    # Utilities
    "pad_to_width",
    "visible_width",
    # Composition core
    "Container",
    "Widget",
    "Window",
]
