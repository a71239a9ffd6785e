from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from main import app


SAMPLE_BATCH: list[dict[str, Any]] = [
    {"id": "c1", "type": "College", "name": "College of Science", "properties": {}, "parentId": None},
    {"id": "d1", "type": "Department", "name": "Computer Science", "properties": {}, "parentId": "c1"},
    {"id": "p1", "type": "Program", "name": "B.Sc Computer Science", "properties": {"max_level": 4}, "parentId": "d1"},
    {"id": "l1", "type": "Level", "name": "100 Level", "properties": {"students_count": 120}, "parentId": "p1"},
    {
        "id": "k1",
        "type": "Course",
        "name": "Introduction to Computing",
        "properties": {"course_code": "CSC101", "credit_unit": 3},
        "parentId": "l1",
    },
]


def _count_json(value: Any) -> int:
    if isinstance(value, list):
        return len(value)
    return 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Save an analyzed-entity batch through the API and print table counts")
    parser.add_argument("batch_file", nargs="?", type=str, help="JSON file with a list of entities (default: built-in sample)")
    args = parser.parse_args()

    entities = SAMPLE_BATCH
    if args.batch_file:
        entities = json.loads(Path(args.batch_file).read_text(encoding="utf-8"))

    with TestClient(app) as client:
        resp = client.post("/api/import/analyzed", json={"entities": entities})
        if resp.status_code >= 400:
            raise SystemExit(f"FAIL /api/import/analyzed: {resp.status_code} {resp.text}")

        payload = resp.json()
        print(f"{'OK' if payload['success'] else 'REJECTED'} /api/import/analyzed: {payload['message']}")
        for outcome in payload.get("outcomes", []):
            reason = f" ({outcome['reason']})" if outcome.get("reason") else ""
            print(f"  {outcome['type']:<10} {outcome['id']:<12} {outcome['status']}{reason}")

        for path in ("/api/colleges/", "/api/departments/", "/api/programs/", "/api/levels/", "/api/courses/"):
            r = client.get(path)
            if r.status_code >= 400:
                raise SystemExit(f"FAIL {path}: {r.status_code} {r.text}")
            print(f"OK {path}: count={_count_json(r.json())}")


if __name__ == "__main__":
    main()
