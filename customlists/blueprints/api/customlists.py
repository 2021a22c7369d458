"""Custom filter list API endpoints.

Provides REST API for triggering a reload, reading statistics and the
active entries, testing lookups and changing the configured list file.
"""

import logging
from flask import jsonify, current_app, request

from . import api_bp
from customlists.models.filter_list import (
    CUSTOMLIST_INVALID_REQUEST,
    CUSTOMLIST_NOT_INITIALIZED,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _get_customlists():
    return current_app.extensions.get('customlists')


def _error(code, message, status, details=None):
    return jsonify({
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
    }), status


def _not_initialized():
    logger.warning("Custom filter lists not initialized")
    return _error(
        CUSTOMLIST_NOT_INITIALIZED,
        "Custom filter lists are not initialized",
        503,
    )


@api_bp.route('/customlists/update', methods=['POST'])
def update_customlists():
    """Reload the custom filter list from the configured file.

    The check runs synchronously. Success is reported once the reload was
    attempted, whether or not the file changed or parsed; details are in
    the logs and in /customlists/stats.

    Example Response:
        {
            "success": true,
            "message": "Custom filter list loaded successfully."
        }
    """
    logger.info("POST /api/customlists/update called")

    customlists = _get_customlists()
    if customlists is None:
        return _not_initialized()

    message = customlists.trigger_update()
    return jsonify({
        "success": True,
        "message": message,
    }), 200


@api_bp.route('/customlists/stats', methods=['GET'])
def get_customlists_stats():
    """Get custom filter list statistics and reload state.

    Example Response:
        {
            "success": true,
            "result": {
                "enabled": true,
                "configured_path": "/etc/customlists/filterlist.txt",
                "stats": {"ips_count": 2, "domains_count": 10, ...},
                "state": {"file_path": "...", "modified_ns": 1700000000000000000,
                          "next_check": "2026-01-01T12:00:00"},
                "last_error": null,
                "check_interval": 60.0
            }
        }
    """
    logger.debug("GET /api/customlists/stats called")

    customlists = _get_customlists()
    if customlists is None:
        return _not_initialized()

    return jsonify({
        "success": True,
        "result": customlists.get_status(),
    }), 200


@api_bp.route('/customlists/active', methods=['GET'])
def get_active_customlists():
    """Get active custom filter list entries by type (sorted)."""
    logger.debug("GET /api/customlists/active called")

    customlists = _get_customlists()
    if customlists is None:
        return _not_initialized()

    return jsonify({
        "success": True,
        "result": customlists.store.get_active_lists(),
    }), 200


@api_bp.route('/customlists/lookup', methods=['GET'])
def lookup_customlists():
    """Test values against the custom filter list.

    Query parameters (all optional, any combination):
        ip: IP address in canonical form
        domain: Fully qualified domain
        subdomains: Match parent domains too (true/false, default true)
        asn: Autonomous system number ("1234" or "AS1234")
        country: Two-letter country code

    Example Response:
        {
            "success": true,
            "result": {
                "domain": {"value": "a.example.com.", "listed": true,
                           "matched": "example.com."}
            }
        }
    """
    customlists = _get_customlists()
    if customlists is None:
        return _not_initialized()

    result = {}

    ip = request.args.get('ip')
    if ip:
        result['ip'] = {"value": ip, "listed": customlists.lookup_ip(ip)}

    domain = request.args.get('domain')
    if domain:
        match_subdomains = request.args.get('subdomains', 'true').lower() in _TRUE_VALUES
        listed, matched = customlists.lookup_domain(domain, match_subdomains)
        result['domain'] = {"value": domain, "listed": listed, "matched": matched}

    asn = request.args.get('asn')
    if asn:
        digits = asn[2:] if asn.upper().startswith('AS') else asn
        if not (digits.isascii() and digits.isdigit()):
            return _error(
                CUSTOMLIST_INVALID_REQUEST,
                f"Invalid autonomous system number: {asn}",
                400,
                {"asn": asn},
            )
        result['asn'] = {"value": int(digits), "listed": customlists.lookup_asn(int(digits))}

    country = request.args.get('country')
    if country:
        result['country'] = {"value": country, "listed": customlists.lookup_country(country)}

    if not result:
        return _error(
            CUSTOMLIST_INVALID_REQUEST,
            "Provide at least one of: ip, domain, asn, country",
            400,
        )

    return jsonify({
        "success": True,
        "result": result,
    }), 200


@api_bp.route('/customlists/config', methods=['GET'])
def get_customlists_config():
    """Get the configured custom filter list file."""
    customlists = _get_customlists()
    if customlists is None:
        return _not_initialized()

    return jsonify({
        "success": True,
        "result": {"file_path": customlists.settings.get_file_path()},
    }), 200


@api_bp.route('/customlists/config', methods=['PUT'])
def set_customlists_config():
    """Change the custom filter list file.

    Body: {"file_path": "/path/to/list.txt"} ("" disables filtering).
    A changed path triggers an immediate check.
    """
    logger.info("PUT /api/customlists/config called")

    customlists = _get_customlists()
    if customlists is None:
        return _not_initialized()

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('file_path'), str):
        return _error(
            CUSTOMLIST_INVALID_REQUEST,
            "Body must be a JSON object with a string 'file_path'",
            400,
        )

    try:
        customlists.settings.set_file_path(data['file_path'])
    except OSError as e:
        logger.error(f"Error saving custom filter list config (error={str(e)})")
        return _error(
            "CUSTOMLIST_CONFIG_ERROR",
            f"Error: {str(e)}",
            500,
        )

    return jsonify({
        "success": True,
        "result": {"file_path": customlists.settings.get_file_path()},
    }), 200
