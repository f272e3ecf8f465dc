"""
dodo - Editor Round-Trip
========================
Hands the rendered task list to the user's editor and returns what they saved.
"""

import logging
from typing import Optional

import click

from .errors import EditorError

logger = logging.getLogger(__name__)


def edit(text: str, editor: Optional[str] = None) -> str:
    """Open `text` in an editor ($VISUAL / $EDITOR unless `editor` is given).

    Quitting without saving returns `text` unchanged.
    """
    try:
        edited = click.edit(text, editor=editor, extension=".txt", require_save=True)
    except click.ClickException as e:
        raise EditorError(editor, e.format_message()) from e

    if edited is None:
        logger.info("Editor closed without saving, keeping today's tasks as they were")
        return text
    return edited
