"""JSON report generator for discovery results.

Generates structured JSON reports from discovery runs.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

from ..discovery.models import ServerRecord


class JsonReporter:
    """Generates JSON reports from discovery results."""

    def generate(
        self,
        servers: Iterable[ServerRecord],
        port: int,
        duration_ms: int = 0,
        outcome: Optional[str] = None,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report from discovery results.

        Args:
            servers: Discovered servers.
            port: Discovery port used.
            duration_ms: Discovery duration in milliseconds.
            outcome: Final session state (timed_out/cancelled).
            error: Error message if discovery failed.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        records = sorted(
            (s.to_dict() for s in servers),
            key=lambda r: (r["address"], r["name"] or ""),
        )

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "port": port,
            "status": "failed" if error else "completed",
            "outcome": outcome,
            "summary": {
                "count": len(records),
                "duration_ms": duration_ms,
            },
            "servers": records,
            "error": error,
        }

    def to_json_string(self, report: dict[str, Any], pretty: bool = False) -> str:
        """Serialize a report or output envelope; pretty indents by two spaces."""
        return json.dumps(report, indent=2 if pretty else None, ensure_ascii=False)

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Write report as indented JSON, creating missing parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json_string(report, pretty=True) + "\n", encoding="utf-8")
        return path

    def generate_flow_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate the command output envelope.

        {
            "success": bool,
            "command": "discover",
            "data": { ... },
            "message": str
        }

        Success means discovery ran without error and found at least one server.

        Args:
            report: Discovery report dictionary.
            report_path: Path where report was saved.

        Returns:
            Output envelope.
        """
        summary = report["summary"]
        count = summary["count"]

        data: dict[str, Any] = {
            "servers": report["servers"],
            "count": count,
            "duration_ms": summary["duration_ms"],
            "outcome": report["outcome"],
        }

        if report_path:
            data["report_path"] = report_path

        if report.get("error"):
            message = f"Discovery failed: {report['error']}"
        elif count == 0:
            message = f"No servers found on UDP port {report['port']}"
        else:
            message = f"Found {count} server{'s' if count != 1 else ''}"

        return {
            "success": not report.get("error") and count > 0,
            "command": "discover",
            "data": data,
            "message": message,
        }
