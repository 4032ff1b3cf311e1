"""
OTP PREVIEW API ROUTES - FLASK BLUEPRINT

Stateless endpoints for a UI that shows authenticator codes. The key
(otpauth:// URI, steam:// key or bare Base32 secret) travels in the JSON
body on every call; it is never stored, logged or echoed back.

EXAMPLES:
curl -X POST http://localhost:5000/api/v2/totp -H "Content-Type: application/json" -d '{"key": "JBSWY3DPEHPK3PXP"}'
curl -X POST http://localhost:5000/api/v2/parse -H "Content-Type: application/json" -d '{"key": "steam://HXDMVJECJJWSRB3HWIZR4IFUGFTMXBOZ"}'
"""
import logging

from flask import Blueprint, jsonify, request

from authenticator import SecretDecodeError, get_generator
from authenticator.otp_core import MAX_TIMESTAMP_MS, MAX_VERIFY_WINDOW

logger = logging.getLogger(__name__)

otp_bp = Blueprint('otp', __name__, url_prefix='/api/v2')


class BadRequest(Exception):
    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


@otp_bp.errorhandler(BadRequest)
def handle_bad_request(e):
    return jsonify({"error": e.message}), e.status


@otp_bp.errorhandler(SecretDecodeError)
def handle_secret_error(e):
    logger.info("Rejected secret: %s", e)
    return jsonify({"error": str(e)}), 422


def _load_generator():
    """Read the JSON body and build a generator for its key."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data.get("key"):
        raise BadRequest("Key is required in JSON body")
    gen, err = get_generator(str(data["key"]))
    if err:
        raise BadRequest(str(err))
    return gen, data


def _optional_int(data, name, minimum, maximum):
    value = data.get(name)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f"'{name}' must be an integer")
    if not minimum <= value <= maximum:
        raise BadRequest(f"'{name}' must be between {minimum} and {maximum}")
    return value


def _timestamp(data):
    return _optional_int(data, "timestamp", 0, MAX_TIMESTAMP_MS)


@otp_bp.route('/totp', methods=['POST'])
def get_totp():
    """
    CURRENT CODE

      curl -X POST http://localhost:5000/api/v2/totp -H "Content-Type: application/json" -d '{"key": "JBSWY3DPEHPK3PXP"}'

    Input (JSON body):
      {
        "key": "...",              # REQUIRED - otpauth URI, steam:// key or Base32 secret
        "timestamp": 1672531200000 # Unix time in ms (default: now)
      }

    Output:
      {"code": "082136", "remaining": 30000, "period": 30, "variant": "standard"}
      remaining is in milliseconds
    """
    gen, data = _load_generator()
    timestamp = _timestamp(data)
    return jsonify({
        "code": gen.generate(timestamp),
        "remaining": gen.remaining(timestamp),
        "period": gen.period,
        "variant": gen.config.variant.value,
    })


@otp_bp.route('/parse', methods=['POST'])
def parse_key():
    """
    HOW A KEY IS INTERPRETED

    Output:
      {"variant": "standard", "period": 30, "digits": 6, "algorithm": "SHA1",
       "issuer": "ACME", "account": "alice@example.com"}
    """
    gen, _ = _load_generator()
    cfg = gen.config
    return jsonify({
        "variant": cfg.variant.value,
        "period": cfg.period,
        "digits": cfg.digits,
        "algorithm": cfg.algorithm.value,
        "issuer": cfg.issuer,
        "account": cfg.account,
    })


@otp_bp.route('/verify', methods=['POST'])
def verify_code():
    """
    VERIFY A CODE

    Input (JSON body):
      {
        "key": "...",     # REQUIRED
        "code": "123456", # REQUIRED
        "timestamp": ..., # Unix time in ms (default: now)
        "window": 1       # Allowed +/- period steps (0-10)
      }

    Output:
      {"valid": true}  or  {"valid": false}
    """
    gen, data = _load_generator()
    if not data.get("code"):
        raise BadRequest("Code is required")
    window = _optional_int(data, "window", 0, MAX_VERIFY_WINDOW)
    valid = gen.verify(
        str(data["code"]),
        _timestamp(data),
        window=1 if window is None else window,
    )
    return jsonify({"valid": valid})
