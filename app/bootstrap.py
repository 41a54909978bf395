from __future__ import annotations

import sys
from pathlib import Path


def add_src_to_path() -> None:
    """
    `streamlit run app/streamlit_app.py` puts `app/` on sys.path, not `src/`.
    Adds `<repo_root>/src` so `import bizmetrics` works without `pip install -e .`.
    """
    src_path = Path(__file__).resolve().parent.parent / "src"
    if src_path.is_dir() and str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))
