from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.http import json_body, json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/add-student", methods=["POST"], endpoint="add_student")
    @json_errors("Failed to add student")
    def add_student():
        data = json_body()
        student = container.enrollment_service.enroll(
            name=data.get("name"),
            rfid_tag=data.get("rfid_tag", data.get("tag")),
            section=data.get("section"),
            id_number=data.get("id_number"),
        )
        app.logger.info(
            "Enrolled student person_id=%s tag=%s section=%s", student.person_id, student.rfid_tag, student.section
        )
        return jsonify(
            {
                "success": True,
                "message": f"Student {student.name} added successfully",
                "student": asdict(student),
            }
        )

    @app.route("/api/students", methods=["GET"], endpoint="students")
    @json_errors("Failed to fetch students")
    def students():
        rows = container.student_service.list_students(section_name=request.args.get("section_name"))
        return jsonify({"success": True, "students": [asdict(r) for r in rows]})
