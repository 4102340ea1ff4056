"""Built-in widgets."""

from pi.termwin.components.choice import (
    ChoiceCallback,
    ChoiceGrid,
    ChoiceWidget,
    MatrixIndex,
    normalize_choices,
)
from pi.termwin.components.input import InputWidget, QuestionWidget
from pi.termwin.components.text import TextWidget

__all__ = [
    "ChoiceCallback",
    "ChoiceGrid",
    "ChoiceWidget",
    "InputWidget",
    "MatrixIndex",
    "QuestionWidget",
    "TextWidget",
    "normalize_choices",
]
