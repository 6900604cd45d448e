"""Rendering components for the panel."""

from gitpanel.ui.components.diff_viewer import NO_DIFF_OUTPUT, DiffViewer
from gitpanel.ui.components.file_list import EMPTY_MESSAGE, FileList
from gitpanel.ui.components.header import Header, render_selection
from gitpanel.ui.components.messages import render_error, render_notice, render_outcome

__all__ = [
    "DiffViewer",
    "FileList",
    "Header",
    "render_selection",
    "render_error",
    "render_notice",
    "render_outcome",
    "NO_DIFF_OUTPUT",
    "EMPTY_MESSAGE",
]
