"""Virtual-to-real path translation."""

import os


def resolve(root: str, path: str) -> str:
    """Map a slash-rooted virtual path onto ``root``.

    Purely syntactic: nothing on disk is touched and existence is the
    caller's business. ``resolve(root, "/")`` is ``root`` itself.
    """
    partial = path.lstrip("/")
    if not partial:
        return root
    return os.path.join(root, partial)
