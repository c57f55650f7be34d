"""RFID attendance API package.

Organized by feature modules (persons, sections, attendance, ...) with a thin
Flask controller layer on top of service and repository layers.
"""
