"""Selection tracking for the Author master list."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..data_models import EntityKey
from ..errors import SelectionError
from ..store.api import EntityContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthorSelection:
    """The currently selected Author and the context it was selected through."""

    author_id: EntityKey
    context: EntityContext


class SelectionTracker:
    """
    Holds at most one selected Author.

    Notes
    -----
    Selection is overwritten on re-selection and cleared explicitly; the
    controller also clears it when a refresh drops the selected row.
    """

    def __init__(self) -> None:
        self._selection: AuthorSelection | None = None

    def select_author(self, author_id: EntityKey, context: EntityContext) -> AuthorSelection:
        self._selection = AuthorSelection(author_id=author_id, context=context)
        logger.debug("Selected author %s", author_id)
        return self._selection

    def current_author(self) -> EntityKey | None:
        return self._selection.author_id if self._selection is not None else None

    def current_context(self) -> EntityContext | None:
        return self._selection.context if self._selection is not None else None

    def clear(self) -> None:
        if self._selection is not None:
            logger.debug("Cleared author selection %s", self._selection.author_id)
        self._selection = None

    @staticmethod
    def require_single(contexts: Sequence[EntityContext], action: str) -> EntityContext:
        """
        Return the only selected context.

        Parameters
        ----------
        contexts:
            Contexts currently marked selected in the list.
        action:
            Verb phrase used in the notice, e.g. "edit".

        Raises
        ------
        SelectionError
            If zero or more than one context is selected.
        """
        if len(contexts) != 1:
            raise SelectionError(f"Please select exactly one author to {action}.")
        return contexts[0]
