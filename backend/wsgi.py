"""WSGI entry point."""

import os

from trainingapp import create_app, db

app = create_app(os.environ.get("FLASK_ENV", "production"))

# Schema is created on startup, there are no migrations
with app.app_context():
    db.create_all()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
