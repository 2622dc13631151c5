"""
Operational API routes: health check and CSRF token.
"""

from flask import current_app, jsonify
from flask_wtf.csrf import generate_csrf


def register_routes(bp):
    """Register operational routes on the blueprint."""

    @bp.route('/health')
    def health_check():
        """
        Health check endpoint (no authentication required).

        Returns:
            JSON with status and version
        """
        return jsonify({
            'status': 'ok',
            'version': current_app.config.get('APP_VERSION', '1.0.0'),
            'app': current_app.config.get('APP_NAME', 'HotelBooking')
        })

    @bp.route('/csrf-token')
    def csrf_token():
        """Issue a CSRF token for clients sending JSON writes (X-CSRFToken header)."""
        return jsonify({'csrf_token': generate_csrf()})
