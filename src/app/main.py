import logging

from flask import Flask
from app.backtests import bp as backtests_bp
from core.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = Flask(__name__)
app.register_blueprint(backtests_bp)

if __name__ == "__main__":
    app.run(debug=True)
