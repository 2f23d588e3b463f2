import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resource_loader.cli import main  # noqa: E402


if __name__ == "__main__":
    # Пример:
    #   python scripts/fetch_resource.py https://httpbin.org/json
    #   python scripts/fetch_resource.py https://httpbin.org/status/404 --async
    sys.exit(main())
