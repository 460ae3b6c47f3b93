"""Tree assembler: nested directory view models from flat rows.

The sibling lists handed to :meth:`TreeAssembler.assemble` are expanded into
full subtrees. Instead of one query per node for documents and another for
children, the assembler loads every directory reachable from the input through
``parent_id`` (one query per level) and all their documents in one more query,
then indexes them by parent id. A child is found by its ``parent_id`` alone,
whatever its ``project_id``. Order and shape are the same as the per-node
walk: siblings by ``sort_code`` (then id), documents by ``sort_code`` (then
id), and ``sub_directories`` left unset on directories without children.
"""

import logging
from typing import Dict, List, Sequence, Set

from sqlalchemy.orm import Session

from ..models import Directory, Document
from ..repositories import DirectoryRepository, DocumentRepository
from ..schemas.directory import DirectoryNode
from ..schemas.document import DocumentResponse

logger = logging.getLogger(__name__)


class TreeAssembler:

    def __init__(self, db: Session):
        self.db = db
        self.dir_repo = DirectoryRepository(db)
        self.doc_repo = DocumentRepository(db)

    def assemble(self, directories: Sequence[Directory]) -> List[DirectoryNode]:
        """Assemble each directory of an ordered sibling list, keeping its order."""
        if not directories:
            return []

        all_dirs = self.dir_repo.find_descendants(d.id for d in directories)

        children_by_parent: Dict[int, List[Directory]] = {}
        for directory in all_dirs:
            children_by_parent.setdefault(directory.parent_id, []).append(directory)

        dir_ids = {d.id for d in all_dirs} | {d.id for d in directories}
        docs_by_dir: Dict[int, List[Document]] = {}
        for doc in self.doc_repo.find_by_directories(dir_ids):
            docs_by_dir.setdefault(doc.directory_id, []).append(doc)

        visited: Set[int] = set()

        def build(level: Sequence[Directory]) -> List[DirectoryNode]:
            nodes: List[DirectoryNode] = []
            for directory in level:
                # Only reachable on corrupted data; writes reject cycles.
                if directory.id in visited:
                    logger.warning(
                        "Directory reached twice while assembling tree",
                        extra={"directory_id": directory.id, "parent_id": directory.parent_id},
                    )
                    continue
                visited.add(directory.id)

                node = DirectoryNode.model_validate(directory)
                node.documents = [
                    DocumentResponse.model_validate(doc)
                    for doc in docs_by_dir.get(directory.id, [])
                ]
                children = children_by_parent.get(directory.id, [])
                if children:
                    node.sub_directories = build(children)
                nodes.append(node)
            return nodes

        return build(directories)
