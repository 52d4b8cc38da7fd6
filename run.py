import os

from academy import create_app
from academy.extensions import socketio

app = create_app(os.getenv("APP_CONFIG", "development"))

if __name__ == '__main__':
    socketio.run(app, debug=app.config.get("DEBUG", False), port=int(os.getenv("PORT", 5000)),
                 allow_unsafe_werkzeug=True)
