"""Directory lifecycle: reads, create, full-replace update, guarded delete.

Every public method follows the same order so that a rejected request never
leaves a partial write behind:

    validate shape -> load -> authorize -> integrity checks -> write -> commit
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.validators import id_invalid, is_blank, is_unsigned_integer
from ..exceptions import DataCannotDeleteError, ParamsError
from ..models import Directory
from ..repositories import DirectoryRepository, DocumentRepository
from ..schemas.directory import DirectoryNode, DirectoryPayload
from .permission_service import authorize, authorize_representative, check_parent_owner
from .tree_service import TreeAssembler

logger = logging.getLogger(__name__)


class DirectoryService:
    """Directory operations behind a narrow interface.

    Public methods:
        get_project_tree  -- root directories of a project, fully assembled
        list_children     -- direct children of a directory (flat)
        get_directory     -- lookup by id (None when missing)
        create_directory
        update_directory  -- full-field replace
        delete_directory  -- only when empty
    """

    def __init__(self, db: Session):
        self.db = db
        self.dir_repo = DirectoryRepository(db)
        self.doc_repo = DocumentRepository(db)
        self.assembler = TreeAssembler(db)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_project_tree(self, project_id: int, user_id: int) -> List[DirectoryNode]:
        if id_invalid(project_id):
            raise ParamsError("Invalid project id", field="project_id")

        roots = self.dir_repo.find_by_project_and_parent(project_id, 0)
        authorize_representative(roots, user_id, "project")
        return self.assembler.assemble(roots)

    def list_children(self, parent_id: int, user_id: int) -> List[Directory]:
        if id_invalid(parent_id):
            raise ParamsError("Invalid parent id", field="parent_id")

        children = self.dir_repo.find_by_parent(parent_id)
        authorize_representative(children, user_id, "directory")
        return children

    def get_directory(self, directory_id: int, user_id: int) -> Optional[Directory]:
        if id_invalid(directory_id):
            raise ParamsError("Invalid directory id", field="directory_id")

        directory = self.dir_repo.get_by_id_optional(directory_id)
        if directory is not None:
            authorize(directory.owner_id, user_id, "directory")
        return directory

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_directory(self, data: DirectoryPayload, user_id: int) -> Directory:
        self._validate_payload(data)
        authorize(data.owner_id, user_id, "directory")
        self._check_parent(data)

        directory = self.dir_repo.create(data)
        self.db.commit()
        logger.info(
            "Created directory",
            extra={"directory_id": directory.id, "project_id": directory.project_id, "parent_id": directory.parent_id},
        )
        return directory

    def update_directory(self, data: DirectoryPayload, user_id: int) -> Directory:
        if id_invalid(data.id):
            raise ParamsError("Invalid directory id", field="id")
        self._validate_payload(data)

        existing = self.dir_repo.get_by_id(data.id)
        authorize(existing.owner_id, user_id, "directory")
        # Full replace may not hand the directory to somebody else.
        authorize(data.owner_id, user_id, "directory")

        descendants = self.dir_repo.descendant_ids(data.id)
        if data.parent_id == data.id or data.parent_id in descendants:
            raise ParamsError("A directory cannot be moved under itself or its descendants", field="parent_id")
        # Children carry their own project_id; moving only the top would split the subtree.
        if descendants and data.project_id != existing.project_id:
            raise ParamsError("Cannot move a directory with sub-directories to another project", field="project_id")
        self._check_parent(data)

        directory = self.dir_repo.replace(existing, data)
        self.db.commit()
        logger.info("Updated directory", extra={"directory_id": directory.id})
        return directory

    def delete_directory(self, directory_id: int, user_id: int) -> None:
        if id_invalid(directory_id):
            raise ParamsError("Invalid directory id", field="directory_id")

        sub_count = self.dir_repo.count_by_parent(directory_id)
        doc_count = self.doc_repo.count_by_directory(directory_id)
        if sub_count > 0 or doc_count > 0:
            raise DataCannotDeleteError(directory_id, sub_count, doc_count)

        existing = self.dir_repo.get_by_id(directory_id)
        authorize(existing.owner_id, user_id, "directory")

        self.dir_repo.delete(existing)
        self.db.commit()
        logger.info("Deleted directory", extra={"directory_id": directory_id})

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_payload(data: DirectoryPayload) -> None:
        if id_invalid(data.owner_id):
            raise ParamsError("Invalid owner id", field="owner_id")
        if id_invalid(data.project_id):
            raise ParamsError("Invalid project id", field="project_id")
        if not is_unsigned_integer(data.parent_id):
            raise ParamsError("Parent id must be zero or a positive integer", field="parent_id")
        if is_blank(data.name):
            raise ParamsError("Directory name cannot be blank", field="name")

    def _check_parent(self, data: DirectoryPayload) -> None:
        """A non-root directory needs an existing parent in the same project with the same owner."""
        if data.parent_id == 0:
            return

        parent = self.dir_repo.get_by_id_optional(data.parent_id)
        if parent is None:
            raise ParamsError(f"Parent directory not found: {data.parent_id}", field="parent_id")
        if parent.project_id != data.project_id:
            raise ParamsError("Parent directory belongs to a different project", field="parent_id")
        check_parent_owner(parent.owner_id, data.owner_id, "directory")
