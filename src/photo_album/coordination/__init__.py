"""Coordination between concurrently running image workers."""

from .admission import AdmissionController
from .ordering import OrderedHandoff, PreviewSequencer, TokenRing
from .page_writer import PageWriter, render_caption, render_entry
from .prompt_agent import PromptAgent, PromptSession, PromptState

__all__ = [
    "AdmissionController",
    "OrderedHandoff",
    "PreviewSequencer",
    "TokenRing",
    "PageWriter",
    "render_caption",
    "render_entry",
    "PromptAgent",
    "PromptSession",
    "PromptState",
]
