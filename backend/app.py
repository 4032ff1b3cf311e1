"""
FLASK APP MAIN ENTRY POINT - OTP PREVIEW SERVER
==================================================

Sets up the Flask app, enables CORS and registers the OTP API blueprint.

Settings (environment):
- OTP_HOST  : listen address (default 127.0.0.1)
- OTP_PORT  : port (default 5000)
- OTP_DEBUG : "1" to run with the debug reloader
"""
import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

from backend.routes import otp_bp

app = Flask(__name__)
# Allow a UI served from another origin to poll the API
CORS(app)

app.register_blueprint(otp_bp)


@app.route('/', methods=['GET'])
def index():
    """List of available endpoints."""
    return jsonify({
        "service": "authenticator-otp",
        "endpoints": {
            "POST /api/v2/totp": "current code and milliseconds remaining",
            "POST /api/v2/parse": "how a key is interpreted",
            "POST /api/v2/verify": "check a code",
        },
    })


def main():
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    app.run(
        debug=os.getenv("OTP_DEBUG") == "1",
        host=os.getenv("OTP_HOST", "127.0.0.1"),
        port=int(os.getenv("OTP_PORT", "5000")),
    )


if __name__ == '__main__':
    main()
