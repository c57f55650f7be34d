import importlib

from config import get_settings_module

from rfid_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    app.run(host="0.0.0.0", port=settings.PORT, debug=settings.DEBUG)
