from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.http import json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sections", methods=["GET"], endpoint="sections")
    @json_errors("Failed to fetch sections")
    def sections():
        rows = container.section_service.list_sections()
        return jsonify({"success": True, "sections": [asdict(s) for s in rows]})
