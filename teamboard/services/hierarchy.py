# teamboard/services/hierarchy.py
"""
Дерево проектов в памяти: обход, уровни, проверка переноса и правила полей по уровню.

Все функции чистые и работают со снимком леса, который уже загрузил вызывающий
код (ORM-объекты или схемы ProjectTree). Входные объекты не изменяются.
"""
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from teamboard.core.constants import (
    LEVEL_FIELDS,
    LEVEL_QUARTER,
    LEVEL_SUB,
    LEVEL_TOP,
    STATUS_COMPLETED,
    STRUCTURAL_FIELDS,
)
from teamboard.core.exceptions import ProjectNotFound

logger = logging.getLogger("TeamBoard.Hierarchy")


class ProjectForest:
    """
    Арена проектов: узлы по id, список детей для каждого узла и упорядоченные корни.

    Принимает как вложенные деревья (sub_projects), так и плоский список, где
    связь задана через parent_id. Каждый id регистрируется один раз; порядок
    соседей совпадает с порядком во входных данных.
    """

    def __init__(self, projects: Iterable[Any] = ()):
        self._nodes: Dict[int, Any] = {}
        self._children: Dict[int, List[int]] = {}
        self._roots: List[int] = []

        nested_parent: Dict[int, int] = {}
        order: List[int] = []

        # Регистрация в прямом порядке с явным стеком
        stack = list(reversed(list(projects)))
        while stack:
            node = stack.pop()
            if node.id in self._nodes:
                if self._nodes[node.id] is not node:
                    logger.warning(f"Duplicate project id={node.id} in forest input, skipped")
                continue
            self._nodes[node.id] = node
            self._children[node.id] = []
            order.append(node.id)
            subs = getattr(node, "sub_projects", None) or []
            for sub in subs:
                nested_parent.setdefault(sub.id, node.id)
            stack.extend(reversed(list(subs)))

        for node_id in order:
            parent_id = nested_parent.get(node_id)
            if parent_id is None:
                declared = getattr(self._nodes[node_id], "parent_id", None)
                if declared is not None and declared in self._nodes and declared != node_id:
                    parent_id = declared
            if parent_id is None:
                self._roots.append(node_id)
            else:
                self._children[parent_id].append(node_id)

        unreachable = len(self._nodes) - sum(1 for _ in self._walk_ids(self._roots))
        if unreachable:
            logger.warning(f"{unreachable} project(s) are not reachable from any root (cyclic parent_id?)")

    # --- доступ ---

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, project_id: Any) -> bool:
        return project_id in self._nodes

    @property
    def roots(self) -> List[Any]:
        return [self._nodes[i] for i in self._roots]

    def get(self, project_id: Optional[int]) -> Optional[Any]:
        if project_id is None:
            return None
        return self._nodes.get(project_id)

    def require(self, project_id: int) -> Any:
        node = self._nodes.get(project_id)
        if node is None:
            raise ProjectNotFound(f"Project with id={project_id} not found.")
        return node

    def children_of(self, project_id: int) -> List[Any]:
        return [self._nodes[i] for i in self._children.get(project_id, [])]

    # --- обход ---

    def _walk_ids(self, start_ids: List[int]) -> Iterator[int]:
        stack = list(reversed(start_ids))
        seen = set()
        while stack:
            node_id = stack.pop()
            if node_id in seen:
                continue
            seen.add(node_id)
            yield node_id
            stack.extend(reversed(self._children.get(node_id, [])))

    def walk(self, start_id: Optional[int] = None) -> Iterator[Any]:
        """
        Прямой обход (узел раньше детей). Без start_id — весь лес от корней.
        """
        start = self._roots if start_id is None else [self.require(start_id).id]
        for node_id in self._walk_ids(start):
            yield self._nodes[node_id]

    def subtree_ids(self, project_id: int) -> List[int]:
        self.require(project_id)
        return list(self._walk_ids([project_id]))


ForestInput = Union[ProjectForest, Iterable[Any]]


def as_forest(forest: ForestInput) -> ProjectForest:
    if isinstance(forest, ProjectForest):
        return forest
    return ProjectForest(forest)


def flatten_projects(forest: ForestInput) -> List[Any]:
    """
    Все проекты леса в прямом порядке: родитель всегда раньше потомков.
    """
    return list(as_forest(forest).walk())


def flatten_assignees(forest: ForestInput) -> List[Any]:
    """
    Исполнители всех проектов в том же порядке обхода.
    """
    assignees: List[Any] = []
    for project in as_forest(forest).walk():
        assignees.extend(getattr(project, "assignees", None) or [])
    return assignees


# === УРОВНИ ===

def _resolve_parent(project: Any, forest: Optional[ProjectForest]) -> Any:
    if forest is not None:
        parent = forest.get(project.parent_id)
        if parent is not None:
            return parent
    parent = getattr(project, "parent", None)
    if parent is not None and parent.id == project.parent_id:
        return parent
    raise ProjectNotFound(
        f"Parent project id={project.parent_id} of project id={project.id} is not loaded."
    )


def compute_level(project: Any, forest: Optional[ForestInput] = None) -> int:
    """
    Уровень проекта: 0 — без родителя, 1 — родитель верхнего уровня, 2 — всё глубже.

    Родитель берётся из переданного леса, иначе из связи project.parent
    (для ORM это ленивый запрос в БД). Если родителя найти нельзя,
    поднимается ProjectNotFound: уровень не угадывается.
    """
    if project.parent_id is None:
        return LEVEL_TOP
    snapshot = as_forest(forest) if forest is not None else None
    parent = _resolve_parent(project, snapshot)
    if parent.parent_id is None:
        return LEVEL_QUARTER
    return LEVEL_SUB


def level_for_parent(parent: Optional[Any]) -> int:
    """
    Уровень будущего ребёнка указанного родителя (для формы создания).
    """
    if parent is None:
        return LEVEL_TOP
    if parent.parent_id is None:
        return LEVEL_QUARTER
    return LEVEL_SUB


# === ПЕРЕНОС ===

def can_reparent(dragged_id: int, target_id: Optional[int], forest: ForestInput) -> bool:
    """
    Можно ли перенести dragged_id под target_id (None — на верхний уровень).

    Запрещён перенос под себя и под любой узел собственного поддерева
    (проверяется всё поддерево, а не только прямые дети).
    """
    snapshot = as_forest(forest)
    snapshot.require(dragged_id)
    if target_id is None:
        return True
    if dragged_id == target_id:
        return False
    snapshot.require(target_id)
    return target_id not in snapshot.subtree_ids(dragged_id)


# === ПРАВИЛА ПОЛЕЙ ===

def fields_for_level(level: int) -> frozenset:
    return LEVEL_FIELDS[min(max(level, LEVEL_TOP), LEVEL_SUB)]


def filter_fields_for_level(data: Dict[str, Any], level: int) -> Dict[str, Any]:
    """
    Оставляет в payload только поля, доступные на данном уровне (+ parent_id).
    """
    allowed = fields_for_level(level) | STRUCTURAL_FIELDS
    dropped = sorted(k for k, v in data.items() if k not in allowed and v is not None)
    if dropped:
        logger.info(f"Fields {dropped} are not editable at level {level}, ignored")
    return {k: v for k, v in data.items() if k in allowed}


def apply_status_rules(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Статус COMPLETED принудительно выставляет progress = 100.
    """
    if data.get("status") == STATUS_COMPLETED:
        return {**data, "progress": 100}
    return data
