"""Front-end index page resolution."""
from pathlib import Path
from typing import Iterable, Optional, Union


def resolve_index_page(candidates: Iterable[Union[str, Path]],
                       base_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Return the first candidate that is an existing file, or None.

    Relative candidates are resolved against ``base_dir`` (the working
    directory when omitted). Order is significant.
    """
    base = base_dir or Path.cwd()
    for candidate in candidates:
        path = Path(candidate)
        if not path.is_absolute():
            path = base / path
        if path.is_file():
            return path.resolve()
    return None
