"""
Content Hub - Curriculum API
Endpoints for browsing and editing the Class -> Subtopic hierarchy
"""
from collections.abc import Awaitable

from fastapi import APIRouter, HTTPException, status

from contenthub.api.deps import AdminUser, CurrentUser, DbSession
from contenthub.schemas.curriculum import (
    CurriculumEditResponse,
    CurriculumTreeResponse,
    LevelItemsResponse,
    NodeCreate,
    NodeDelete,
    NodeRename,
    NodeReorder,
    SelectionSchema,
)
from contenthub.services.curriculum import (
    CurriculumEdit,
    CurriculumPersistenceError,
    CurriculumService,
    RevisionConflictError,
)
from contenthub.services.curriculum_tree import (
    DuplicateNameError,
    InvalidIndexError,
    InvalidPathError,
    Level,
    Selection,
)

router = APIRouter(prefix="/curriculum", tags=["Curriculum"])


def _unavailable(error: CurriculumPersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(error),
    )


async def _run_edit(pending: Awaitable[CurriculumEdit]) -> CurriculumEditResponse:
    """Await a service edit and translate its failures into HTTP errors."""
    try:
        edit = await pending
    except DuplicateNameError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Name already exists",
        )
    except RevisionConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InvalidPathError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except InvalidIndexError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except CurriculumPersistenceError as e:
        raise _unavailable(e)

    return CurriculumEditResponse(
        tree=edit.tree,
        revision=edit.revision,
        selection=SelectionSchema.from_selection(edit.selection),
        changed=edit.changed,
    )


@router.get("/tree", response_model=CurriculumTreeResponse)
async def get_tree(current_user: CurrentUser, db: DbSession):
    """
    Get the whole curriculum tree in display order.
    """
    try:
        stored = await CurriculumService(db).get_tree()
    except CurriculumPersistenceError as e:
        raise _unavailable(e)
    return CurriculumTreeResponse(tree=stored.tree, revision=stored.revision)


@router.get("/levels", response_model=LevelItemsResponse)
async def get_level_items(
    current_user: CurrentUser,
    db: DbSession,
    class_name: str | None = None,
    subject: str | None = None,
    chapter: str | None = None,
    topic: str | None = None,
):
    """
    List the names shown at each level for a selection.

    Parts of the selection that do not exist in the tree are dropped.
    """
    try:
        selection, columns = await CurriculumService(db).level_items(
            Selection(class_name=class_name, subject=subject, chapter=chapter, topic=topic)
        )
    except CurriculumPersistenceError as e:
        raise _unavailable(e)
    return LevelItemsResponse(
        selection=SelectionSchema.from_selection(selection),
        classes=columns[Level.CLASS],
        subjects=columns[Level.SUBJECT],
        chapters=columns[Level.CHAPTER],
        topics=columns[Level.TOPIC],
        subtopics=columns[Level.SUBTOPIC],
    )


@router.post("/nodes", response_model=CurriculumEditResponse)
async def add_node(body: NodeCreate, admin: AdminUser, db: DbSession):
    """
    Append a node at the end of its level.

    Adding an existing class/subject/chapter/topic is a no-op reported with
    ``changed: false``; a duplicate subtopic is rejected with 409.
    """
    service = CurriculumService(db)
    return await _run_edit(service.add_node(
        body.level, body.path, body.name,
        selection=body.current_selection(),
        expected_revision=body.expected_revision,
    ))


@router.patch("/nodes", response_model=CurriculumEditResponse)
async def rename_node(body: NodeRename, admin: AdminUser, db: DbSession):
    """
    Rename a node in place; its position and subtree are kept.
    """
    service = CurriculumService(db)
    return await _run_edit(service.rename_node(
        body.level, body.path, body.old_name, body.new_name,
        selection=body.current_selection(),
        expected_revision=body.expected_revision,
    ))


@router.delete("/nodes", response_model=CurriculumEditResponse)
async def delete_node(body: NodeDelete, admin: AdminUser, db: DbSession):
    """
    Delete a node and everything below it.

    Confirmation is expected to have happened on the client.
    """
    service = CurriculumService(db)
    return await _run_edit(service.delete_node(
        body.level, body.path, body.name,
        selection=body.current_selection(),
        expected_revision=body.expected_revision,
    ))


@router.post("/nodes/reorder", response_model=CurriculumEditResponse)
async def reorder_nodes(body: NodeReorder, admin: AdminUser, db: DbSession):
    """
    Move a node from one index to another among its siblings.
    """
    service = CurriculumService(db)
    return await _run_edit(service.reorder(
        body.level, body.path, body.from_index, body.to_index,
        selection=body.current_selection(),
        expected_revision=body.expected_revision,
    ))
