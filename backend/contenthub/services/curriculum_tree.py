"""
Content Hub - Curriculum Tree
Ordered, nested Class -> Subject -> Chapter -> Topic -> Subtopic editing.

The tree is plain nested ``dict`` objects with a ``list`` of subtopic names at
the leaf. Display order is the dict insertion order, so every map edit below
either appends or rebuilds the mapping in the wanted key order.

All edit functions are pure: they never touch the tree they are given and
return an ``EditResult`` with the new tree and the updated selection cursor.
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

CurriculumTree = dict[str, dict[str, dict[str, dict[str, list[str]]]]]


class Level(str, Enum):
    """Hierarchy levels, outermost first."""
    CLASS = "class"
    SUBJECT = "subject"
    CHAPTER = "chapter"
    TOPIC = "topic"
    SUBTOPIC = "subtopic"

    @property
    def depth(self) -> int:
        """Number of ancestor keys needed to address this level."""
        return list(Level).index(self)

    @property
    def is_leaf(self) -> bool:
        return self is Level.SUBTOPIC


# Cursor-bearing levels; subtopics are never selected
CURSOR_LEVELS = (Level.CLASS, Level.SUBJECT, Level.CHAPTER, Level.TOPIC)


class DuplicateNameError(Exception):
    """A sibling with the requested name already exists."""

    def __init__(self, level: Level, name: str):
        self.level = level
        self.name = name
        super().__init__(f"Name already exists: {level.value} '{name}'")


class HierarchyContractError(Exception):
    """Caller passed a path, name or index that does not address the tree."""
    pass


class InvalidPathError(HierarchyContractError, LookupError):
    """Ancestor path or node name does not exist at the given level."""
    pass


class InvalidIndexError(HierarchyContractError, IndexError):
    """Reorder index outside the sibling list."""
    pass


@dataclass(frozen=True)
class Selection:
    """
    Currently selected name at each cursor-bearing level.

    A cursor is only meaningful when every cursor above it is set, so the
    selection is handled as a chain: ``chain()`` stops at the first gap.
    """
    class_name: str | None = None
    subject: str | None = None
    chapter: str | None = None
    topic: str | None = None

    def chain(self) -> tuple[str, ...]:
        out: list[str] = []
        for value in (self.class_name, self.subject, self.chapter, self.topic):
            if value is None:
                break
            out.append(value)
        return tuple(out)

    @classmethod
    def from_chain(cls, chain: tuple[str, ...] | list[str]) -> "Selection":
        values: list[str | None] = list(chain)[: len(CURSOR_LEVELS)]
        values += [None] * (len(CURSOR_LEVELS) - len(values))
        return cls(*values)

    def normalized(self, tree: CurriculumTree) -> "Selection":
        """Drop the part of the chain that no longer resolves in ``tree``."""
        node: Any = tree
        kept: list[str] = []
        for name in self.chain():
            if not isinstance(node, dict) or name not in node:
                break
            kept.append(name)
            node = node[name]
        return Selection.from_chain(kept)


@dataclass
class EditResult:
    """Outcome of a single edit: the new tree plus the cursor to apply."""
    tree: CurriculumTree
    selection: Selection = field(default_factory=Selection)
    changed: bool = True


def _siblings(tree: CurriculumTree, level: Level, path: list[str] | tuple[str, ...]) -> Any:
    """Return the mapping (or leaf list) holding the nodes of ``level`` under ``path``."""
    if len(path) != level.depth:
        raise InvalidPathError(
            f"{level.value} needs {level.depth} ancestor keys, got {len(path)}"
        )
    node: Any = tree
    for depth, key in enumerate(path):
        if not isinstance(node, dict) or key not in node:
            raise InvalidPathError(
                f"{list(Level)[depth].value} '{key}' not found under {list(path[:depth])}"
            )
        node = node[key]
    return node


def _rebuild(mapping: dict, keys: list[str], renames: dict[str, str] | None = None) -> None:
    """Re-insert every entry of ``mapping`` in ``keys`` order, in place."""
    renames = renames or {}
    entries = [(renames.get(key, key), mapping[key]) for key in keys]
    mapping.clear()
    mapping.update(entries)


def _require_name(siblings: Any, level: Level, name: str) -> None:
    if name not in siblings:
        raise InvalidPathError(f"{level.value} '{name}' not found")


def children(tree: CurriculumTree, level: Level, path: list[str] | tuple[str, ...]) -> list[str]:
    """Ordered names at ``level`` under ``path``."""
    return list(_siblings(tree, level, path))


def level_items(tree: CurriculumTree, selection: Selection) -> dict[Level, list[str]]:
    """
    Column lists for a hierarchy browser.

    Each level is listed once its parent is selected; levels whose parent is
    not selected come back empty.
    """
    chain = selection.normalized(tree).chain()
    columns: dict[Level, list[str]] = {}
    for level in Level:
        if level.depth <= len(chain):
            columns[level] = children(tree, level, chain[: level.depth])
        else:
            columns[level] = []
    return columns


def contains_path(tree: CurriculumTree, *names: str) -> bool:
    """True when ``names`` walks from a class down through the tree."""
    node: Any = tree
    for depth, name in enumerate(names):
        if name not in node:
            return False
        if isinstance(node, list):
            return depth == len(names) - 1
        node = node[name]
    return True


def add_node(
    tree: CurriculumTree,
    level: Level,
    path: list[str] | tuple[str, ...],
    name: str,
    selection: Selection | None = None,
) -> EditResult:
    """
    Append ``name`` at the end of ``level`` under ``path``.

    A duplicate at a map level leaves the tree as is and reports
    ``changed=False``. Subtopic lists reject duplicates.

    Raises:
        DuplicateNameError: If ``name`` is already a subtopic of the topic
        InvalidPathError: If ``path`` does not resolve
    """
    selection = selection or Selection()
    updated = copy.deepcopy(tree)
    siblings = _siblings(updated, level, path)

    if level.is_leaf:
        if name in siblings:
            raise DuplicateNameError(level, name)
        siblings.append(name)
        return EditResult(updated, selection)

    if name in siblings:
        return EditResult(tree, selection, changed=False)
    siblings[name] = [] if level is Level.TOPIC else {}
    return EditResult(updated, selection)


def rename_node(
    tree: CurriculumTree,
    level: Level,
    path: list[str] | tuple[str, ...],
    old_name: str,
    new_name: str,
    selection: Selection | None = None,
) -> EditResult:
    """
    Rename a node in place, keeping its position and subtree.

    A cursor that pointed at ``old_name`` under the same ancestors follows
    the rename.

    Raises:
        DuplicateNameError: If ``new_name`` is already a sibling
        InvalidPathError: If ``path`` or ``old_name`` does not resolve
    """
    selection = selection or Selection()
    updated = copy.deepcopy(tree)
    siblings = _siblings(updated, level, path)
    _require_name(siblings, level, old_name)

    if new_name == old_name:
        return EditResult(tree, selection, changed=False)
    if new_name in siblings:
        raise DuplicateNameError(level, new_name)

    if level.is_leaf:
        siblings[siblings.index(old_name)] = new_name
        return EditResult(updated, selection)

    _rebuild(siblings, list(siblings), renames={old_name: new_name})

    chain = list(selection.chain())
    if _chain_passes_through(chain, path, old_name):
        chain[len(path)] = new_name
        selection = Selection.from_chain(chain)
    return EditResult(updated, selection)


def delete_node(
    tree: CurriculumTree,
    level: Level,
    path: list[str] | tuple[str, ...],
    name: str,
    selection: Selection | None = None,
) -> EditResult:
    """
    Remove a node together with everything below it.

    If the selection ran through the removed node, its cursor and every
    deeper cursor are cleared.

    Raises:
        InvalidPathError: If ``path`` or ``name`` does not resolve
    """
    selection = selection or Selection()
    updated = copy.deepcopy(tree)
    siblings = _siblings(updated, level, path)
    _require_name(siblings, level, name)

    if level.is_leaf:
        siblings.remove(name)
        return EditResult(updated, selection)

    del siblings[name]

    chain = selection.chain()
    if _chain_passes_through(chain, path, name):
        selection = Selection.from_chain(chain[: len(path)])
    return EditResult(updated, selection)


def reorder(
    tree: CurriculumTree,
    level: Level,
    path: list[str] | tuple[str, ...],
    from_index: int,
    to_index: int,
    selection: Selection | None = None,
) -> EditResult:
    """
    Move the sibling at ``from_index`` to ``to_index``.

    The moved element is taken out first and then inserted, so moving index
    0 to 2 in ``[A, B, C, D]`` gives ``[B, C, A, D]``. Subtrees travel with
    their keys untouched.

    Raises:
        InvalidIndexError: If either index is outside the sibling list
        InvalidPathError: If ``path`` does not resolve
    """
    selection = selection or Selection()
    updated = copy.deepcopy(tree)
    siblings = _siblings(updated, level, path)

    size = len(siblings)
    for index in (from_index, to_index):
        if not 0 <= index < size:
            raise InvalidIndexError(f"index {index} out of range for {size} {level.value} entries")

    if from_index == to_index:
        return EditResult(tree, selection, changed=False)

    if level.is_leaf:
        siblings.insert(to_index, siblings.pop(from_index))
        return EditResult(updated, selection)

    keys = list(siblings)
    keys.insert(to_index, keys.pop(from_index))
    _rebuild(siblings, keys)
    return EditResult(updated, selection)


def _chain_passes_through(chain: list[str] | tuple[str, ...], path: list[str] | tuple[str, ...], name: str) -> bool:
    depth = len(path)
    return len(chain) > depth and tuple(chain[:depth]) == tuple(path) and chain[depth] == name