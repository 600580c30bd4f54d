"""
Content Hub - Curriculum Service
Loads, edits and persists the curriculum hierarchy document
"""
import copy
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from contenthub.core.config import settings
from contenthub.core.constants import DEFAULT_CURRICULUM
from contenthub.models.curriculum import CurriculumDocument
from contenthub.services import curriculum_tree
from contenthub.services.curriculum_tree import (
    CurriculumTree,
    DuplicateNameError,
    EditResult,
    Level,
    Selection,
)

logger = logging.getLogger(__name__)

_TREE_ADAPTER = TypeAdapter(CurriculumTree)


class CurriculumPersistenceError(Exception):
    """The curriculum document could not be written."""
    pass


class RevisionConflictError(Exception):
    """The caller edited a revision that is no longer current."""

    def __init__(self, expected: int | None = None, actual: int | None = None):
        self.expected = expected
        self.actual = actual
        message = "Curriculum was modified by someone else"
        if expected is not None and actual is not None:
            message += f" (edited revision {expected}, current revision is {actual})"
        super().__init__(message)


@dataclass
class StoredCurriculum:
    tree: CurriculumTree
    revision: int


@dataclass
class CurriculumEdit:
    """Result of an edit as reported to API callers."""
    tree: CurriculumTree
    selection: Selection
    revision: int
    changed: bool


def serialize_tree(tree: CurriculumTree) -> str:
    """Canonical JSON text of a tree; key order is kept, never sorted."""
    return json.dumps(tree, ensure_ascii=False, separators=(",", ":"))


class CurriculumRepository:
    """
    Persistence for the curriculum document.

    One row per document key. The row's ``revision`` doubles as the
    SQLAlchemy version counter, so a write based on a stale row fails
    instead of overwriting a concurrent edit.
    """

    def __init__(self, db: AsyncSession, key: str | None = None):
        self.db = db
        self.key = key or settings.CURRICULUM_DOCUMENT_KEY

    async def _get_document(self) -> CurriculumDocument | None:
        result = await self.db.execute(
            select(CurriculumDocument).where(CurriculumDocument.key == self.key)
        )
        return result.scalar_one_or_none()

    async def _flush(self) -> None:
        try:
            await self.db.flush()
        except StaleDataError as e:
            logger.warning("Curriculum '%s' changed underneath this write", self.key)
            raise RevisionConflictError() from e
        except SQLAlchemyError as e:
            logger.error("Curriculum '%s' could not be written", self.key, exc_info=True)
            raise CurriculumPersistenceError("Could not save the curriculum") from e

    async def _load_document(self) -> CurriculumDocument:
        document = await self._get_document()
        if document is None:
            document = CurriculumDocument(
                key=self.key,
                tree=copy.deepcopy(DEFAULT_CURRICULUM),
            )
            self.db.add(document)
            await self._flush()
            logger.info("Seeded curriculum '%s' with the default tree", self.key)
        return document

    async def load(self) -> StoredCurriculum:
        """Return the stored tree, seeding the default one if none exists."""
        document = await self._load_document()
        return StoredCurriculum(
            tree=_TREE_ADAPTER.validate_python(document.tree),
            revision=document.revision,
        )

    async def save(self, tree: CurriculumTree, expected_revision: int | None = None) -> StoredCurriculum:
        """
        Replace the stored tree.

        Args:
            tree: Complete new tree
            expected_revision: Revision the edit was based on; None skips the check

        Returns:
            The stored tree and its new revision

        Raises:
            RevisionConflictError: If ``expected_revision`` is stale
            CurriculumPersistenceError: If the database write fails
        """
        document = await self._load_document()
        if expected_revision is not None and expected_revision != document.revision:
            raise RevisionConflictError(expected_revision, document.revision)

        document.tree = copy.deepcopy(tree)
        # Dict equality ignores key order, so a pure reorder would look unchanged
        flag_modified(document, "tree")
        await self._flush()
        return StoredCurriculum(tree=copy.deepcopy(tree), revision=document.revision)


class CurriculumService:
    """Applies one hierarchy edit per call and persists it before returning."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CurriculumRepository(db)

    async def get_tree(self) -> StoredCurriculum:
        return await self.repository.load()

    async def level_items(self, selection: Selection) -> tuple[Selection, dict[Level, list[str]]]:
        """Normalized selection and the column lists it opens up."""
        stored = await self.repository.load()
        selection = selection.normalized(stored.tree)
        return selection, curriculum_tree.level_items(stored.tree, selection)

    async def path_exists(self, *names: str) -> bool:
        stored = await self.repository.load()
        return curriculum_tree.contains_path(stored.tree, *names)

    async def add_node(
        self,
        level: Level,
        path: list[str],
        name: str,
        selection: Selection | None = None,
        expected_revision: int | None = None,
    ) -> CurriculumEdit:
        return await self._apply(
            "add", level, path, selection, expected_revision,
            lambda tree, sel: curriculum_tree.add_node(tree, level, path, name, sel),
        )

    async def rename_node(
        self,
        level: Level,
        path: list[str],
        old_name: str,
        new_name: str,
        selection: Selection | None = None,
        expected_revision: int | None = None,
    ) -> CurriculumEdit:
        return await self._apply(
            "rename", level, path, selection, expected_revision,
            lambda tree, sel: curriculum_tree.rename_node(tree, level, path, old_name, new_name, sel),
        )

    async def delete_node(
        self,
        level: Level,
        path: list[str],
        name: str,
        selection: Selection | None = None,
        expected_revision: int | None = None,
    ) -> CurriculumEdit:
        return await self._apply(
            "delete", level, path, selection, expected_revision,
            lambda tree, sel: curriculum_tree.delete_node(tree, level, path, name, sel),
        )

    async def reorder(
        self,
        level: Level,
        path: list[str],
        from_index: int,
        to_index: int,
        selection: Selection | None = None,
        expected_revision: int | None = None,
    ) -> CurriculumEdit:
        return await self._apply(
            "reorder", level, path, selection, expected_revision,
            lambda tree, sel: curriculum_tree.reorder(tree, level, path, from_index, to_index, sel),
        )

    async def _apply(
        self,
        operation: str,
        level: Level,
        path: list[str],
        selection: Selection | None,
        expected_revision: int | None,
        edit: Callable[[CurriculumTree, Selection], EditResult],
    ) -> CurriculumEdit:
        stored = await self.repository.load()
        if expected_revision is not None and expected_revision != stored.revision:
            logger.warning(
                "Rejected %s on %s %s: revision %s is stale (current %s)",
                operation, level.value, path, expected_revision, stored.revision,
            )
            raise RevisionConflictError(expected_revision, stored.revision)

        selection = (selection or Selection()).normalized(stored.tree)
        try:
            result = edit(stored.tree, selection)
        except DuplicateNameError as e:
            logger.warning("Rejected %s on %s %s: %s", operation, level.value, path, e)
            raise

        if not result.changed:
            logger.info("No-op %s on %s %s", operation, level.value, path)
            return CurriculumEdit(stored.tree, result.selection, stored.revision, changed=False)

        saved = await self.repository.save(result.tree, expected_revision=stored.revision)
        logger.info(
            "Curriculum %s on %s %s saved as revision %d",
            operation, level.value, path, saved.revision,
        )
        return CurriculumEdit(saved.tree, result.selection, saved.revision, changed=True)
