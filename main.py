"""Development entrypoint.

Runs the HTTP API and the display WebSocket in one process:
  python main.py
"""

from luckydraw import create_app

app = create_app()


if __name__ == "__main__":
    app.run(
        host=app.config["HOST"],
        port=int(app.config["PORT"]),
        debug=False,
        threaded=True,
    )
