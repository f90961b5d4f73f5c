from __future__ import annotations

import asyncio
import sys

from .core.config import settings
from .main import build_runtime, run


def main() -> int:
    return asyncio.run(run(build_runtime(settings)))


if __name__ == "__main__":
    sys.exit(main())
