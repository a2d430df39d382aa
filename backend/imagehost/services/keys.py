import re
from uuid import uuid4

_EXTENSION_RE = re.compile(r"[a-z0-9]+")


def extract_extension(filename: str) -> str:
    """Return the lower-cased extension of ``filename``, or ``""``.

    Only the final path component is considered. Extensions containing
    anything other than ASCII letters and digits are discarded.
    """
    name = re.split(r"[\\/]", filename or "")[-1]
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    ext = ext.lower()
    if not _EXTENSION_RE.fullmatch(ext):
        return ""
    return ext


def generate_storage_key(filename: str) -> str:
    ext = extract_extension(filename)
    object_id = str(uuid4())
    return f"{object_id}.{ext}" if ext else object_id
