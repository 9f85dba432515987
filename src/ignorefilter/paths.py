"""
Textual path normalization shared by patterns and candidate paths.

Nothing here touches the filesystem: paths are cleaned lexically so the
same ignore file behaves identically on every platform.
"""

from typing import List


def clean_path(text: str, keep_trailing_slash: bool = False) -> str:
    """
    Lexically clean a path.

    Backslashes are treated as separators, duplicate separators collapse,
    ``.`` components are dropped and ``name/..`` pairs cancel out.

    Args:
        text: Path or pattern text
        keep_trailing_slash: Preserve a trailing ``/`` (directory marker)

    Returns:
        Cleaned path using forward slashes; ``.`` for an empty result
    """
    text = text.replace('\\', '/')
    rooted = text.startswith('/')
    trailing = keep_trailing_slash and text.endswith('/')

    parts: List[str] = []
    for part in text.split('/'):
        if part in ('', '.'):
            continue
        if part == '..':
            if parts and parts[-1] != '..':
                parts.pop()
            elif not rooted:
                parts.append(part)
            continue
        parts.append(part)

    cleaned = '/'.join(parts)
    if rooted:
        cleaned = '/' + cleaned
    if not cleaned:
        return '.'
    if trailing and cleaned != '/':
        cleaned += '/'
    return cleaned


def normalize_path(text: str) -> str:
    """
    Normalize a candidate path to relative forward-slash form.

    ``normalize_path(normalize_path(p)) == normalize_path(p)`` for every p.
    """
    cleaned = clean_path(text).lstrip('/')
    return cleaned or '.'


def split_path(text: str) -> List[str]:
    """Split a path into its normalized components"""
    normalized = normalize_path(text)
    if normalized == '.':
        return []
    return normalized.split('/')


def is_directory_hint(text: str) -> bool:
    """A trailing separator marks a candidate as a directory"""
    return text.endswith('/') or text.endswith('\\')
