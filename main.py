import sys
from pathlib import Path


def _ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent
    src_path = root / "src"
    sys.path.insert(0, str(src_path))


def main() -> int:
    _ensure_src_on_path()
    from requestbook.app import main as run_app

    return run_app()


if __name__ == "__main__":
    raise SystemExit(main())
