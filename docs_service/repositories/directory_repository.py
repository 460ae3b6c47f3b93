"""Directory repository for database operations."""

from typing import Iterable, List

from ..models import Directory
from ..schemas.directory import DirectoryPayload
from ..exceptions import DirectoryNotFoundError
from .base import BaseRepository


class DirectoryRepository(BaseRepository[Directory]):
    """Ordered lookups and full-replace writes for directories.

    Every list query orders by ``sort_code`` ascending, then ``id`` so that
    equal sort codes still come back in a stable order.
    """

    model_class = Directory
    not_found_error = DirectoryNotFoundError

    def _ordered(self, query):
        return query.order_by(Directory.sort_code.asc(), Directory.id.asc())

    def create(self, data: DirectoryPayload) -> Directory:
        directory = Directory(
            project_id=data.project_id,
            parent_id=data.parent_id,
            owner_id=data.owner_id,
            name=data.name,
            sort_code=data.sort_code,
        )
        return self.save(directory)

    def replace(self, directory: Directory, data: DirectoryPayload) -> Directory:
        """Overwrite every mutable field from *data*."""
        directory.project_id = data.project_id
        directory.parent_id = data.parent_id
        directory.owner_id = data.owner_id
        directory.name = data.name
        directory.sort_code = data.sort_code
        return self.save(directory)

    def find_by_project_and_parent(self, project_id: int, parent_id: int) -> List[Directory]:
        return self._ordered(
            self.db.query(Directory).filter(
                Directory.project_id == project_id,
                Directory.parent_id == parent_id,
            )
        ).all()

    def find_by_parent(self, parent_id: int) -> List[Directory]:
        return self._ordered(
            self.db.query(Directory).filter(Directory.parent_id == parent_id)
        ).all()

    def find_descendants(self, root_ids: Iterable[int]) -> List[Directory]:
        """Every directory reachable from *root_ids* through ``parent_id``.

        One query per tree level. Rows of a level come back in sibling order,
        so the children of any one parent stay ordered. Project membership is
        not consulted. A row is returned at most once even on cyclic data,
        where a root can come back as its own descendant.
        """
        found: List[Directory] = []
        seen: set[int] = set()
        frontier = list(root_ids)
        while frontier:
            level = self._ordered(
                self.db.query(Directory).filter(Directory.parent_id.in_(frontier))
            ).all()
            level = [d for d in level if d.id not in seen]
            seen.update(d.id for d in level)
            found.extend(level)
            frontier = [d.id for d in level]
        return found

    def count_by_parent(self, parent_id: int) -> int:
        return self.db.query(Directory).filter(Directory.parent_id == parent_id).count()

    def descendant_ids(self, directory_id: int) -> set[int]:
        """Ids of every directory below *directory_id* (not including itself)."""
        return {d.id for d in self.find_descendants([directory_id])} - {directory_id}
