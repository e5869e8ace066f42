"""Node representation for file system elements met during a tree walk."""

from typing import Any, Optional, Tuple

from anytree import Node

from morefiles.file_tree.file_identifier import FileIdentifier


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file or directory being visited by the tree walker.

    Extends anytree.Node so that a node knows the chain of directories that leads to
    it from the walk root. The walker only keeps the current branch attached: a node
    is detached from its parent once its visit is complete.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        parent (Optional[FileSystemNode]): The directory node this node was found in.
        is_dir (bool): True if this node is visited as a directory.
        is_symlink (bool): True if this node is a symbolic link that is not followed.
        file_id (Optional[FileIdentifier]): Device and inode of the node.

    Example:
        >>> root = FileSystemNode("root", is_dir=True)
        >>> child = FileSystemNode("file.txt", parent=root)
        >>> child.relative_parts
        ('file.txt',)
        >>> root.relative_parts
        ()
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        is_dir: bool = False,
        is_symlink: bool = False,
        file_id: Optional[FileIdentifier] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.is_symlink = is_symlink
        self.file_id = file_id

    @property
    def relative_parts(self) -> Tuple[str, ...]:
        """Names leading from the walk root (excluded) down to this node (included)."""
        return tuple(node.name for node in self.path[1:])

    def revisits_ancestor(self) -> bool:
        """Check whether an ancestor directory has the same identity as this node."""
        if self.file_id is None:
            return False
        return any(ancestor.file_id == self.file_id for ancestor in self.ancestors)
