"""
JSON API blueprint package.
Split into smaller modules by entity for maintainability.
"""

from flask import Blueprint

# Create the API blueprint
api_bp = Blueprint('api', __name__)

# Import and register routes from submodules
from blueprints.api import routes
from blueprints.api import hotels
from blueprints.api import rooms
from blueprints.api import reservations

# Register all route functions on the blueprint
routes.register_routes(api_bp)
hotels.register_routes(api_bp)
rooms.register_routes(api_bp)
reservations.register_routes(api_bp)
