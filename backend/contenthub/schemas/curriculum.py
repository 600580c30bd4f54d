"""
Content Hub - Curriculum Schemas
Pydantic schemas for hierarchy edits, selections and tree responses
"""
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, model_validator

from contenthub.services.curriculum_tree import CurriculumTree, Level, Selection

NodeName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


# ============================================================================
# Selection
# ============================================================================

class SelectionSchema(BaseModel):
    """Selected name at each cursor-bearing level."""
    class_name: str | None = None
    subject: str | None = None
    chapter: str | None = None
    topic: str | None = None

    def to_selection(self) -> Selection:
        return Selection(
            class_name=self.class_name,
            subject=self.subject,
            chapter=self.chapter,
            topic=self.topic,
        )

    @classmethod
    def from_selection(cls, selection: Selection) -> "SelectionSchema":
        return cls(
            class_name=selection.class_name,
            subject=selection.subject,
            chapter=selection.chapter,
            topic=selection.topic,
        )


# ============================================================================
# Edit Requests
# ============================================================================

class NodeRequestBase(BaseModel):
    """Common addressing for every edit: level tag plus ancestor keys."""
    level: Level
    path: list[NodeName] = []
    selection: SelectionSchema | None = None
    expected_revision: int | None = None

    @model_validator(mode="after")
    def check_path_depth(self) -> "NodeRequestBase":
        if len(self.path) != self.level.depth:
            raise ValueError(
                f"A {self.level.value} needs exactly {self.level.depth} ancestor names in 'path'"
            )
        return self

    def current_selection(self) -> Selection | None:
        return self.selection.to_selection() if self.selection else None


class NodeCreate(NodeRequestBase):
    """Schema for adding a node."""
    name: NodeName


class NodeRename(NodeRequestBase):
    """Schema for renaming a node."""
    old_name: NodeName
    new_name: NodeName


class NodeDelete(NodeRequestBase):
    """Schema for deleting a node and its subtree."""
    name: NodeName


class NodeReorder(NodeRequestBase):
    """Schema for moving a node within its siblings."""
    from_index: Annotated[int, Field(ge=0)]
    to_index: Annotated[int, Field(ge=0)]


# ============================================================================
# Responses
# ============================================================================

class CurriculumTreeResponse(BaseModel):
    """Whole tree with its revision."""
    tree: CurriculumTree
    revision: int


class CurriculumEditResponse(CurriculumTreeResponse):
    """Tree after an edit, plus the selection the caller should apply."""
    selection: SelectionSchema
    changed: bool


class LevelItemsResponse(BaseModel):
    """Ordered names shown in each column of the hierarchy browser."""
    selection: SelectionSchema
    classes: list[str]
    subjects: list[str]
    chapters: list[str]
    topics: list[str]
    subtopics: list[str]
