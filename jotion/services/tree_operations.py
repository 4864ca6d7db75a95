"""Document tree traversal and subtree state propagation."""

import logging
from typing import Iterator

from jotion.exceptions import CorruptTreeError
from jotion.models.document import Document
from jotion.storage.repositories import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentTreeWalker:
    """Walks an owner's documents below a root through the parent links."""

    def __init__(self, document_repo: DocumentRepository):
        """
        Initialize tree walker with repository.

        Args:
            document_repo: Document repository for data access
        """
        self.document_repo = document_repo

    def iter_descendants(self, user_id: str, root_id: str) -> Iterator[Document]:
        """
        Yield every direct and indirect child of a document, depth-first.

        Only documents owned by user_id are followed. Children are looked up
        lazily, so changes made to a yielded document before advancing are
        visible to the rest of the walk.

        Args:
            user_id: Owner whose documents are traversed
            root_id: Document whose subtree is walked (not yielded itself)

        Raises:
            CorruptTreeError: If a document is reached twice, which means the
                              parent links contain a cycle
        """
        visited = {root_id}
        stack = [root_id]
        while stack:
            node_id = stack.pop()
            children = self.document_repo.by_user_parent(user_id, node_id)
            # Reversed so the first listed child is visited first
            for child in reversed(children):
                if child.id in visited:
                    raise CorruptTreeError(child.id)
                visited.add(child.id)
                stack.append(child.id)
            for child in children:
                yield child

    def set_archived(self, user_id: str, root_id: str, is_archived: bool) -> int:
        """
        Set the archive flag on every descendant of a document.

        The root itself is left alone; callers patch it with their own rules.

        Returns:
            Number of descendants patched
        """
        count = 0
        for child in self.iter_descendants(user_id, root_id):
            self.document_repo.patch(child.id, is_archived=is_archived)
            count += 1
        logger.debug(
            "Propagated is_archived=%s to %d descendant(s) of %s", is_archived, count, root_id
        )
        return count

