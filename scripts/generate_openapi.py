from __future__ import annotations

import json
from pathlib import Path

from fastapi.openapi.utils import get_openapi

from caresync.api.main import app


def main() -> None:
    spec = get_openapi(
        title=app.title,
        version="0.1.0",
        description="CareSync SMS reminder API",
        routes=app.routes,
    )
    target = Path(__file__).resolve().parents[1] / "docs" / "openapi.json"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(spec, indent=2))
    print(f"OpenAPI spec written to {target}")


if __name__ == "__main__":
    main()
