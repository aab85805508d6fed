# scripts/export_openapi.py
"""Dump the OpenAPI document served at /api/swagger.json to a file."""
import json
import sys

from app import create_app

output = sys.argv[1] if len(sys.argv) > 1 else "openapi.json"
app = create_app("config.TestingConfig")

with app.test_client() as c:
    res = c.get("/api/swagger.json")
    with open(output, "w") as fh:
        json.dump(res.get_json(), fh, indent=2, sort_keys=True)
    print(f"-> {output} generated")
