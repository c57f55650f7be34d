from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_iso
from ..common.http import json_body, json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/verify-attendance", methods=["POST"], endpoint="verify_attendance")
    @json_errors("Failed to verify attendance")
    def verify_attendance():
        data = json_body()
        result = container.verification_service.verify(
            data.get("rfid_tags", data.get("tokens")),
            location_id=data.get("classroom_id", data.get("location_id")),
        )
        app.logger.info("verify-attendance classroom=%s: %s", result.classroom_id, result.message)
        return jsonify(
            {
                "success": True,
                "total_scans": result.total_scans,
                "verified_students": [
                    {
                        "name": s.name,
                        "section": s.section,
                        "rfid_tag": s.rfid_tag,
                        "id_number": s.id_number,
                        "status": s.status.value,
                    }
                    for s in result.verified
                ],
                "unrecognized": result.unrecognized,
                "duplicate_scans": result.duplicate_scans,
                "message": result.message,
            }
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance")
    @json_errors("Failed to fetch attendance records")
    def attendance():
        rows = container.attendance_history_service.list_records(
            date=request.args.get("date"),
            section_name=request.args.get("section_name"),
            location_id=request.args.get("classroom_id", request.args.get("location_id")),
        )
        records = []
        for r in rows:
            record = asdict(r)
            record["timestamp"] = to_iso(r.timestamp)
            records.append(record)
        return jsonify({"success": True, "records": records, "count": len(records)})
