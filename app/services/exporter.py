"""CSV / JSON export helpers for the admin export endpoints."""

import csv
import io
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from fastapi.responses import Response, StreamingResponse


def export_filename(entity: str, fmt: str, now: datetime = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d_%H%M%S")
    return f"{entity}_export_{stamp}.{fmt}"


def to_csv(rows: Sequence[Dict[str, Any]], columns: List[str] = None) -> str:
    columns = columns or (list(rows[0].keys()) if rows else [])
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: "" if row.get(k) is None else row.get(k) for k in columns})
    return output.getvalue()


def export_response(entity: str, rows: Sequence[Dict[str, Any]], fmt: str, columns: List[str] = None):
    filename = export_filename(entity, fmt)
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    if fmt == "json":
        return Response(
            json.dumps(list(rows), default=str, indent=2),
            media_type="application/json",
            headers=headers,
        )
    return StreamingResponse(
        io.StringIO(to_csv(rows, columns)),
        media_type="text/csv",
        headers=headers,
    )
